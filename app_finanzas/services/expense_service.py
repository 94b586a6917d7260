# ==============================================================================
# SERVICIO DE GASTOS - Listado agrupado por fecha
# ==============================================================================
# Alimenta la pestaña "Gastos": lista de gastos de una ventana de fechas,
# filtrable por categoría, agrupada por día (el más reciente primero) y
# con el total general y el total por categoría.
# ==============================================================================

from typing import Any, Dict, List, Optional

from app_finanzas.models import CategoriaGasto, Gasto
from app_finanzas.repositories.interfaces import IRecordSource
from app_finanzas.services.aggregator import (
    aggregate_expenses,
    expense_amount,
    expense_date,
    is_well_formed,
)
from app_finanzas.services.date_set import DateSet


class ExpenseService:
    """
    Servicio de consulta de gastos.

    Responsabilidades:
    - Filtrar gastos por categoría
    - Agrupar gastos por día (descendente)
    - Totales por categoría (vía el agregador)
    """

    def __init__(self, record_source: IRecordSource):
        self.record_source = record_source

    def get_categories(self) -> List[CategoriaGasto]:
        """Categorías ordenadas por descripción."""
        categorias = self.record_source.get_categories()
        return sorted(categorias, key=lambda c: (c.descripcion or '').lower())

    def list_expenses(
        self,
        date_set: DateSet,
        categoria_id: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Gastos de la ventana agrupados por día.

        Args:
            date_set: Fechas a consultar
            categoria_id: Si se indica, solo gastos de esa categoría

        Returns:
            {
                'fechas': [str],               # descendente
                'grupos': [                    # un grupo por día con gastos
                    {'fecha': str, 'gastos': [Gasto], 'total': Decimal, 'cantidad': int}
                ],
                'resumen': Aggregation         # total y por categoría
            }
        """
        gastos = self.record_source.fetch_expenses(date_set) if date_set else []
        if categoria_id is not None:
            gastos = [g for g in gastos if g.idcategoriagastos == categoria_id]

        resumen = aggregate_expenses(gastos)

        # Solo gastos que el agregador aceptó; los totales por día salen de resumen.by_date
        por_fecha: Dict[str, List[Gasto]] = {}
        for gasto in gastos:
            if is_well_formed(gasto, expense_date, expense_amount):
                por_fecha.setdefault(expense_date(gasto), []).append(gasto)

        grupos = [
            {
                'fecha': dia.date,
                'gastos': por_fecha[dia.date],
                'total': dia.total,
                'cantidad': dia.count,
            }
            for dia in reversed(resumen.by_date)
        ]

        return {
            'fechas': date_set.sorted_descending(),
            'grupos': grupos,
            'resumen': resumen,
        }
