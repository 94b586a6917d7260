# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# El motor de reportes solo conoce IRecordSource: "dame los gastos y los
# pedidos de estas fechas". Quién los trae (archivos JSON, Supabase, un mock
# en los tests) no le importa.
#
# CONTRATO DE IRecordSource:
# - fetch_expenses / fetch_orders retornan una lista (nunca None)
# - Con un DateSet vacío retornan []
# - fetch_orders solo retorna pedidos finalizados y no borrados
#
# PARA AGREGAR UNA FUENTE NUEVA (ej. Supabase):
# 1. Crear SupabaseRecordSource que implemente IRecordSource
# 2. Cambiar la instanciación en app_container.py
# 3. Los servicios NO requieren cambios
#
# ==============================================================================

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Protocol, runtime_checkable

from app_finanzas.models import CategoriaGasto, Gasto, Pedido

if TYPE_CHECKING:
    from app_finanzas.services.date_set import DateSet


@runtime_checkable
class IExpenseRepository(Protocol):
    """Acceso a las filas de gastos."""

    def get_by_dates(self, fechas: Iterable[str]) -> List[Dict[str, Any]]:
        """Gastos cuyas fechas están en `fechas`, más recientes primero."""
        ...


@runtime_checkable
class IOrderRepository(Protocol):
    """Acceso a las filas de pedidos."""

    def get_finalized_by_dates(self, fechas: Iterable[str]) -> List[Dict[str, Any]]:
        """Pedidos finalizados y no borrados de esas fechas."""
        ...


@runtime_checkable
class ICategoryRepository(Protocol):
    """Acceso a las categorías de gastos."""

    def get_categories(self) -> List[Dict[str, Any]]:
        """Todas las categorías."""
        ...

    def get_description_map(self) -> Dict[int, str]:
        """{idcategoriagastos: descripcion}."""
        ...


@runtime_checkable
class IRecordSource(Protocol):
    """
    Fuente de registros que consume el motor de reportes.
    """

    def fetch_expenses(self, date_set: 'DateSet') -> List[Gasto]:
        """Gastos de las fechas del conjunto."""
        ...

    def fetch_orders(self, date_set: 'DateSet') -> List[Pedido]:
        """Pedidos finalizados y no borrados de las fechas del conjunto."""
        ...

    def get_categories(self) -> List[CategoriaGasto]:
        """Categorías de gastos."""
        ...
