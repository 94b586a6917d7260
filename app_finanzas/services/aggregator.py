# ==============================================================================
# AGREGADOR - Reduce gastos o pedidos a estadísticas
# ==============================================================================
# Antes cada pantalla tenía su propio reduce() con acumuladores sueltos
# (total, cantidad, por categoría, por día, por método de pago).
# Aquí queda una sola implementación, genérica sobre cómo leer de cada
# registro su fecha, su monto y su clave de grupo.
#
# REGLAS:
# - Dinero con Decimal, nunca float (sin deriva de céntimos)
# - Clave de grupo vacía => 'Sin categoría'
# - Registro sin fecha o monto => se omite y se cuenta en `skipped`;
#   un registro malo no deja en blanco todo el reporte
# - by_group: mayor total primero (empates: primera clave vista)
# - by_date: fecha ascendente
# ==============================================================================

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from app_finanzas.config import SIN_CATEGORIA
from app_finanzas.models import (
    ZERO,
    Aggregation,
    CategoryBreakdown,
    DailyBreakdown,
    Gasto,
    MetodoPago,
    OrderAggregation,
    PaymentBreakdown,
    Pedido,
)
from app_finanzas.services.date_set import normalize_date_key
from app_finanzas.services.errors import InvalidRange, MalformedRecord
from app_finanzas.services.grouper import group_by


logger = logging.getLogger(__name__)

T = TypeVar('T')


# ==============================================================================
# ACCESORES
# ==============================================================================

def _require_date(value: Any, record: Any) -> str:
    try:
        return normalize_date_key(value)
    except InvalidRange:
        raise MalformedRecord(f'Fecha ausente o inválida: {value!r}', record)


def _require_amount(value: Any, record: Any) -> Decimal:
    if not isinstance(value, Decimal) or not value.is_finite():
        raise MalformedRecord(f'Monto ausente o inválido: {value!r}', record)
    if value < 0:
        raise MalformedRecord(f'Monto negativo: {value}', record)
    return value


def expense_date(gasto: Gasto) -> str:
    return _require_date(gasto.fecha, gasto)


def expense_amount(gasto: Gasto) -> Decimal:
    return _require_amount(gasto.monto, gasto)


def expense_category(gasto: Gasto) -> Optional[str]:
    return gasto.categoria


def order_date(pedido: Pedido) -> str:
    return _require_date(pedido.fecha, pedido)


def order_amount(pedido: Pedido) -> Decimal:
    return _require_amount(pedido.total, pedido)


def is_well_formed(
    record: T,
    date_key_fn: Callable[[T], str],
    amount_fn: Callable[[T], Decimal]
) -> bool:
    """True si el registro tiene fecha y monto utilizables."""
    try:
        date_key_fn(record)
        amount_fn(record)
    except MalformedRecord:
        return False
    return True


# ==============================================================================
# AGREGACIÓN GENÉRICA
# ==============================================================================

def _normalize_group_key(key: Any) -> str:
    if key is None:
        return SIN_CATEGORIA
    text = str(key).strip()
    return text or SIN_CATEGORIA


def aggregate(
    records: Iterable[T],
    group_key_fn: Optional[Callable[[T], Any]],
    date_key_fn: Callable[[T], str],
    amount_fn: Callable[[T], Decimal],
    on_record: Optional[Callable[[T], None]] = None
) -> Aggregation:
    """
    Reduce una secuencia de registros de un mismo tipo.

    Args:
        records: Gastos o pedidos
        group_key_fn: Clave de grupo (ej. categoría). None => sin by_group
        date_key_fn: Fecha YYYY-MM-DD del registro
        amount_fn: Monto del registro
        on_record: Reducción paralela opcional; se llama una vez por cada
                   registro válido, en el mismo recorrido

    Returns:
        Aggregation con total, count, by_group, by_date y skipped
    """
    accepted: List[Tuple[Optional[str], str, Decimal]] = []
    total = ZERO
    skipped = 0

    for record in records:
        try:
            date_key = date_key_fn(record)
            amount = amount_fn(record)
        except MalformedRecord as exc:
            skipped += 1
            logger.warning('Registro omitido en la agregación: %s', exc)
            continue

        group_key = _normalize_group_key(group_key_fn(record)) if group_key_fn else None
        accepted.append((group_key, date_key, amount))
        total += amount
        if on_record is not None:
            on_record(record)

    by_group: Tuple[CategoryBreakdown, ...] = ()
    if group_key_fn is not None:
        groups = group_by(accepted, lambda row: row[0], lambda row: row[2])
        # sorted() es estable: los empates conservan el orden de aparición
        ordered = sorted(groups.items(), key=lambda kv: kv[1]['total'], reverse=True)
        by_group = tuple(
            CategoryBreakdown(category=key, total=data['total'], count=data['count'])
            for key, data in ordered
        )

    days = group_by(accepted, lambda row: row[1], lambda row: row[2])
    by_date = tuple(
        DailyBreakdown(date=key, total=data['total'], count=data['count'])
        for key, data in sorted(days.items())
    )

    if skipped:
        logger.info('Agregación con %d registro(s) omitido(s) de %d',
                    skipped, skipped + len(accepted))

    return Aggregation(
        total=total,
        count=len(accepted),
        by_group=by_group,
        by_date=by_date,
        skipped=skipped,
    )


# ==============================================================================
# PRESETS POR TIPO DE REGISTRO
# ==============================================================================

def aggregate_expenses(gastos: Iterable[Gasto]) -> Aggregation:
    """Gastos agrupados por categoría y por día."""
    return aggregate(gastos, expense_category, expense_date, expense_amount)


def aggregate_orders(pedidos: Iterable[Pedido]) -> OrderAggregation:
    """
    Pedidos agrupados por día, con la suma paralela por método de pago.

    Si la suma visa + yape + plin + efectivo de un pedido no coincide con
    su total, se registra una advertencia y se cuenta en `mismatched`, pero
    los montos se usan tal cual vienen del backend.
    """
    payments: Dict[MetodoPago, Decimal] = {m: ZERO for m in MetodoPago}
    mismatched = 0

    def accumulate(pedido: Pedido) -> None:
        nonlocal mismatched
        for metodo in MetodoPago:
            payments[metodo] += pedido.monto_metodo(metodo)
        if pedido.total_metodos != pedido.total:
            mismatched += 1
            logger.warning(
                'Pedido %s (%s): métodos de pago suman %s pero el total es %s',
                pedido.idpedido, pedido.fecha, pedido.total_metodos, pedido.total
            )

    base = aggregate(pedidos, None, order_date, order_amount, on_record=accumulate)

    return OrderAggregation(
        total=base.total,
        count=base.count,
        by_group=base.by_group,
        by_date=base.by_date,
        skipped=base.skipped,
        payments=PaymentBreakdown(**{m.value: payments[m] for m in MetodoPago}),
        mismatched=mismatched,
    )
