# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# entities.py -> registros de entrada (gastos, pedidos, categorías)
# reports.py  -> resultados del motor (agregaciones y reporte final)
#
# Ambos son independientes del mecanismo de persistencia (JSON o Supabase).
# ==============================================================================

from .entities import (
    # Dinero
    ZERO,
    CENT,
    to_money,
    quantize_money,
    format_money,

    # Registros
    CategoriaGasto,
    Gasto,
    Pedido,
    MetodoPago,
)

from .reports import (
    Aggregation,
    OrderAggregation,
    CategoryBreakdown,
    DailyBreakdown,
    PaymentBreakdown,
    PaymentShare,
    Report,
)

__all__ = [
    # Dinero
    'ZERO',
    'CENT',
    'to_money',
    'quantize_money',
    'format_money',

    # Registros
    'CategoriaGasto',
    'Gasto',
    'Pedido',
    'MetodoPago',

    # Reportes
    'Aggregation',
    'OrderAggregation',
    'CategoryBreakdown',
    'DailyBreakdown',
    'PaymentBreakdown',
    'PaymentShare',
    'Report',
]
