# ==============================================================================
# CAPA DE SERVICIOS - Motor de agregación y reportes
# ==============================================================================
# ESTRUCTURA:
# ├── errors.py          → ReportError, InvalidRange, MalformedRecord
# ├── date_set.py        → DateSet (ventana de fechas del reporte)
# ├── grouper.py         → group_by (agrupar y sumar)
# ├── aggregator.py      → aggregate, aggregate_expenses, aggregate_orders
# ├── report_service.py  → compose (ingresos vs gastos) y ReportService
# └── expense_service.py → listado de gastos agrupado por día
#
# Los servicios dependen de IRecordSource, no de JSON ni de Supabase.
# ==============================================================================

from app_finanzas.services.errors import ReportError, InvalidRange, MalformedRecord
from app_finanzas.services.date_set import DateSet, parse_date_key, is_date_key
from app_finanzas.services.grouper import group_by
from app_finanzas.services.aggregator import (
    aggregate,
    aggregate_expenses,
    aggregate_orders,
)
from app_finanzas.services.report_service import (
    ReportService,
    compose,
    best_day,
    payment_shares,
    empty_report,
)
from app_finanzas.services.expense_service import ExpenseService

__all__ = [
    # Errores
    'ReportError',
    'InvalidRange',
    'MalformedRecord',

    # Fechas
    'DateSet',
    'parse_date_key',
    'is_date_key',

    # Agregación
    'group_by',
    'aggregate',
    'aggregate_expenses',
    'aggregate_orders',

    # Reportes
    'ReportService',
    'compose',
    'best_day',
    'payment_shares',
    'empty_report',

    # Gastos
    'ExpenseService',
]
