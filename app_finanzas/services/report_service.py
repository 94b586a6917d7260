# ==============================================================================
# SERVICIO DE REPORTES - Ingresos vs gastos
# ==============================================================================
# Combina la agregación de gastos y la de pedidos de UN MISMO conjunto de
# fechas en las métricas del negocio:
#
#   ganancia neta   = ingresos - gastos (puede ser negativa)
#   margen %        = ganancia / ingresos * 100   (0 si no hubo ingresos)
#   ticket promedio = ingresos / pedidos          (0 si no hubo pedidos)
#   mejor día       = día con más ingresos        (empate: el más antiguo)
#
# compose() es una función pura: mismas entradas => mismo reporte.
# ReportService solo orquesta: pide los registros a la fuente y compone.
# ==============================================================================

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from app_finanzas.models import (
    CENT,
    ZERO,
    Aggregation,
    DailyBreakdown,
    MetodoPago,
    OrderAggregation,
    PaymentBreakdown,
    PaymentShare,
    Report,
)
from app_finanzas.performance_logger import profile_function
from app_finanzas.repositories.interfaces import IRecordSource
from app_finanzas.services.aggregator import aggregate_expenses, aggregate_orders
from app_finanzas.services.date_set import DateLike, DateSet


logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')


def _ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    return (numerator / denominator).quantize(CENT, rounding=ROUND_HALF_UP)


def best_day(by_date: Iterable[DailyBreakdown]) -> Optional[DailyBreakdown]:
    """
    Día con mayor total. Recorre en orden ascendente y solo reemplaza con
    un total estrictamente mayor, así el empate queda en la fecha más antigua.
    """
    best = None
    for day in sorted(by_date, key=lambda d: d.date):
        if best is None or day.total > best.total:
            best = day
    return best


def compose(
    expense_agg: Aggregation,
    order_agg: OrderAggregation,
    fechas: Tuple[str, ...] = ()
) -> Report:
    """
    Compone el reporte final a partir de las dos agregaciones.

    Args:
        expense_agg: Agregación de gastos
        order_agg: Agregación de pedidos (mismas fechas)
        fechas: Fechas del reporte, solo informativo

    Returns:
        Report
    """
    revenue = order_agg.total
    expenses = expense_agg.total
    net_profit = revenue - expenses

    margin = _ratio(net_profit * HUNDRED, revenue) if revenue > 0 else ZERO
    ticket = _ratio(revenue, Decimal(order_agg.count)) if order_agg.count > 0 else ZERO

    return Report(
        total_revenue=revenue,
        total_expenses=expenses,
        net_profit=net_profit,
        margin_percent=margin,
        average_ticket=ticket,
        best_day=best_day(order_agg.by_date),
        payment_breakdown=order_agg.payments,
        expense_category_breakdown=expense_agg.by_group,
        daily_breakdown=order_agg.by_date,
        order_count=order_agg.count,
        expense_count=expense_agg.count,
        skipped=expense_agg.skipped + order_agg.skipped,
        mismatched=order_agg.mismatched,
        fechas=tuple(fechas),
    )


def payment_shares(payments: PaymentBreakdown) -> List[PaymentShare]:
    """
    Participación porcentual de cada método de pago sobre la suma de métodos.
    Con suma 0 todos los porcentajes son 0.
    """
    base = payments.total
    shares = []
    for metodo in MetodoPago:
        amount = payments.get(metodo)
        percent = _ratio(amount * HUNDRED, base) if base > 0 else ZERO
        shares.append(PaymentShare(metodo=metodo, total=amount, percent=percent))
    return shares


def empty_report(fechas: Tuple[str, ...] = ()) -> Report:
    """Reporte en cero (conjunto de fechas vacío)."""
    return compose(Aggregation(), OrderAggregation(), fechas)


class ReportService:
    """
    Servicio de reportes financieros.

    Responsabilidades:
    - Pedir gastos y pedidos de un DateSet a la fuente de registros
    - Agregar cada tipo por separado
    - Componer el reporte

    No guarda estado entre llamadas: cada reporte se calcula desde cero.
    """

    def __init__(self, record_source: IRecordSource):
        """
        Args:
            record_source: Fuente de gastos y pedidos (JSON, Supabase, mock)
        """
        self.record_source = record_source

    @profile_function(name='Generar reporte financiero')
    def build_report(self, date_set: DateSet) -> Report:
        """Reporte para cualquier conjunto de fechas."""
        fechas = tuple(date_set.sorted_descending())
        if not date_set:
            return empty_report(fechas)

        gastos = self.record_source.fetch_expenses(date_set)
        pedidos = self.record_source.fetch_orders(date_set)

        report = compose(aggregate_expenses(gastos), aggregate_orders(pedidos), fechas)

        logger.debug(
            'Reporte %r: ingresos=%s gastos=%s pedidos=%d',
            date_set, report.total_revenue, report.total_expenses, report.order_count
        )
        if report.skipped or report.mismatched:
            logger.warning(
                'Reporte %r con %d registro(s) omitido(s) y %d pedido(s) descuadrado(s)',
                date_set, report.skipped, report.mismatched
            )
        return report

    def daily_report(self, fecha: DateLike) -> Report:
        """Reporte de un solo día."""
        return self.build_report(DateSet.single(fecha))

    def range_report(self, inicio: DateLike, fin: DateLike) -> Report:
        """Reporte de un rango continuo (inclusive)."""
        return self.build_report(DateSet.from_range(inicio, fin))

    def consolidated_report(self, fechas: Iterable[DateLike]) -> Report:
        """Reporte consolidado de fechas sueltas."""
        return self.build_report(DateSet.from_explicit_dates(fechas))
