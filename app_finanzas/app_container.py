# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto único para obtener repositorios y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (se apunta a un directorio temporal o se cambia la fuente)
#   - Migración (cambiar JsonRecordSource por una fuente Supabase)
#
# PARA CAMBIAR LA FUENTE DE DATOS:
#   Reemplazar la construcción de `record_source`. Los servicios NO cambian
#   porque dependen de IRecordSource.
# ==============================================================================

from typing import Optional

from app_finanzas import config
from app_finanzas.repositories import (
    CategoryRepository,
    ExpenseRepository,
    IRecordSource,
    JsonRecordSource,
    OrderRepository,
)
from app_finanzas.services import ExpenseService, ReportService


class AppContainer:
    """
    Contenedor de dependencias de la aplicación (singleton).

    Uso:
        container = AppContainer(base_path='/path/to/data')
        report = container.report_service.daily_report('2024-01-01')
    """

    _instance: Optional['AppContainer'] = None

    def __new__(cls, base_path: str = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, base_path: str = None):
        """
        Args:
            base_path: Directorio de los JSON (por defecto config.DATA_DIR)
        """
        if self._initialized:
            return

        self._base_path = base_path or config.DATA_DIR

        # Repositorios (lazy)
        self._expense_repo: Optional[ExpenseRepository] = None
        self._order_repo: Optional[OrderRepository] = None
        self._category_repo: Optional[CategoryRepository] = None
        self._record_source: Optional[IRecordSource] = None

        # Servicios (lazy)
        self._report_service: Optional[ReportService] = None
        self._expense_service: Optional[ExpenseService] = None

        self._initialized = True

    @property
    def base_path(self) -> str:
        return self._base_path

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def expense_repo(self) -> ExpenseRepository:
        if self._expense_repo is None:
            self._expense_repo = ExpenseRepository(self._base_path)
        return self._expense_repo

    @property
    def order_repo(self) -> OrderRepository:
        if self._order_repo is None:
            self._order_repo = OrderRepository(self._base_path)
        return self._order_repo

    @property
    def category_repo(self) -> CategoryRepository:
        if self._category_repo is None:
            self._category_repo = CategoryRepository(self._base_path)
        return self._category_repo

    @property
    def record_source(self) -> IRecordSource:
        """Fuente de registros que usan los servicios."""
        if self._record_source is None:
            self._record_source = JsonRecordSource(
                self.expense_repo,
                self.order_repo,
                self.category_repo
            )
        return self._record_source

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def report_service(self) -> ReportService:
        if self._report_service is None:
            self._report_service = ReportService(self.record_source)
        return self._report_service

    @property
    def expense_service(self) -> ExpenseService:
        if self._expense_service is None:
            self._expense_service = ExpenseService(self.record_source)
        return self._expense_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """Descarta todas las instancias creadas."""
        self._expense_repo = None
        self._order_repo = None
        self._category_repo = None
        self._record_source = None

        self._report_service = None
        self._expense_service = None

    @classmethod
    def get_instance(cls, base_path: str = None) -> 'AppContainer':
        """
        Obtiene la instancia singleton.

        Args:
            base_path: Directorio de datos (solo se usa en la primera llamada)
        """
        if cls._instance is None:
            return cls(base_path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


def get_container(base_path: str = None) -> AppContainer:
    """Contenedor de dependencias global."""
    return AppContainer.get_instance(base_path)
