import logging
from datetime import date, datetime
from decimal import Decimal

from app_finanzas.models import ZERO, Gasto, Pedido, PaymentBreakdown, to_money
from app_finanzas.services import MalformedRecord, ReportError, aggregate, aggregate_expenses, aggregate_orders


def gasto(fecha, monto, categoria=None):
    return Gasto(fecha=fecha, monto=None if monto is None else Decimal(monto), categoria=categoria)


def pedido(fecha, total, visa='0', yape='0', plin='0', efectivo='0', idpedido=None):
    return Pedido(
        fecha=fecha,
        total=None if total is None else Decimal(total),
        visa=Decimal(visa), yape=Decimal(yape), plin=Decimal(plin), efectivo=Decimal(efectivo),
        idpedido=idpedido, estado=3,
    )


def test_empty_input_gives_zero_aggregation():
    agg = aggregate_expenses([])
    assert agg.total == ZERO
    assert agg.count == 0
    assert agg.by_group == ()
    assert agg.by_date == ()
    assert agg.skipped == 0


def test_expenses_grouped_by_category_and_day():
    gastos = [
        gasto('2024-01-01', '50', 'Food'),
        gasto('2024-01-01', '30', 'Food'),
        gasto('2024-01-02', '20', 'Transport'),
    ]
    agg = aggregate_expenses(gastos)

    assert agg.total == Decimal('100')
    assert agg.count == 3
    assert [(g.category, g.total, g.count) for g in agg.by_group] == [
        ('Food', Decimal('80'), 2),
        ('Transport', Decimal('20'), 1),
    ]
    assert [(d.date, d.total, d.count) for d in agg.by_date] == [
        ('2024-01-01', Decimal('80'), 2),
        ('2024-01-02', Decimal('20'), 1),
    ]


def test_breakdowns_add_up_to_total():
    gastos = [gasto('2024-01-0%d' % (i % 3 + 1), '1.15', 'C%d' % (i % 4)) for i in range(11)]
    agg = aggregate_expenses(gastos)

    assert sum((g.total for g in agg.by_group), ZERO) == agg.total
    assert sum((d.total for d in agg.by_date), ZERO) == agg.total
    assert sum(g.count for g in agg.by_group) == agg.count
    assert sum(d.count for d in agg.by_date) == agg.count


def test_decimal_sums_do_not_drift():
    gastos = [Gasto.from_dict({'fecha': '2024-01-01', 'monto': 0.1}) for _ in range(10)]
    agg = aggregate_expenses(gastos)
    assert agg.total == Decimal('1.0')


def test_missing_or_blank_category_goes_to_sin_categoria():
    agg = aggregate_expenses([
        gasto('2024-01-01', '10', None),
        gasto('2024-01-01', '5', '   '),
        gasto('2024-01-01', '1', 'Insumos'),
    ])
    assert agg.by_group[0].category == 'Sin categoría'
    assert agg.by_group[0].total == Decimal('15')
    assert agg.by_group[0].count == 2


def test_malformed_records_are_skipped_and_counted(caplog):
    gastos = [
        gasto('2024-01-01', '10', 'A'),
        gasto(None, '10', 'A'),
        gasto('2024-02-30', '10', 'A'),
        gasto('2024-01-01', None, 'A'),
        gasto('2024-01-01', '-5', 'A'),
    ]
    with caplog.at_level(logging.WARNING, logger='app_finanzas.services.aggregator'):
        agg = aggregate_expenses(gastos)

    assert agg.total == Decimal('10')
    assert agg.count == 1
    assert agg.skipped == 4
    assert 'omitido' in caplog.text


def test_group_ties_keep_first_seen_order():
    agg = aggregate_expenses([
        gasto('2024-01-01', '10', 'Zeta'),
        gasto('2024-01-01', '10', 'Alfa'),
        gasto('2024-01-01', '30', 'Media'),
    ])
    assert [g.category for g in agg.by_group] == ['Media', 'Zeta', 'Alfa']


def test_by_date_is_ascending_regardless_of_input_order():
    agg = aggregate_expenses([
        gasto('2024-01-03', '1'),
        gasto('2023-12-31', '1'),
        gasto('2024-01-01', '1'),
    ])
    assert [d.date for d in agg.by_date] == ['2023-12-31', '2024-01-01', '2024-01-03']


def test_orders_accumulate_payment_methods():
    agg = aggregate_orders([
        pedido('2024-01-01', '200', visa='100', yape='50', efectivo='50'),
        pedido('2024-01-02', '80', plin='80'),
    ])

    assert agg.total == Decimal('280')
    assert agg.count == 2
    assert agg.by_group == ()
    assert agg.payments == PaymentBreakdown(
        visa=Decimal('100'), yape=Decimal('50'), plin=Decimal('80'), efectivo=Decimal('50')
    )
    assert agg.mismatched == 0


def test_order_with_mismatched_methods_is_trusted_and_counted(caplog):
    with caplog.at_level(logging.WARNING, logger='app_finanzas.services.aggregator'):
        agg = aggregate_orders([pedido('2024-01-01', '100', visa='60', idpedido=7)])

    assert agg.total == Decimal('100')
    assert agg.payments.visa == Decimal('60')
    assert agg.mismatched == 1
    assert 'Pedido 7' in caplog.text


def test_skipped_orders_do_not_feed_payments():
    agg = aggregate_orders([
        pedido('2024-01-01', None, visa='40'),
        pedido('2024-01-01', '10', efectivo='10'),
    ])
    assert agg.skipped == 1
    assert agg.payments.visa == ZERO
    assert agg.payments.efectivo == Decimal('10')


def test_generic_aggregate_with_custom_accessors():
    rows = [
        {'dia': '2024-01-01', 'valor': Decimal('3'), 'tipo': 'x'},
        {'dia': '2024-01-01', 'valor': Decimal('2'), 'tipo': 'y'},
        {'dia': None, 'valor': Decimal('9'), 'tipo': 'x'},
    ]

    def dia(row):
        if row['dia'] is None:
            raise MalformedRecord('sin día', row)
        return row['dia']

    agg = aggregate(rows, lambda r: r['tipo'], dia, lambda r: r['valor'])
    assert agg.total == Decimal('5')
    assert agg.skipped == 1
    assert [g.category for g in agg.by_group] == ['x', 'y']


def test_malformed_record_keeps_offending_record():
    row = {'dia': None}
    exc = MalformedRecord('sin día', row)
    assert exc.record is row
    assert isinstance(exc, ReportError)


def test_date_objects_are_normalized_to_keys():
    agg = aggregate_expenses([
        Gasto(fecha=date(2024, 1, 2), monto=Decimal('5')),
        Gasto(fecha='2024-01-01', monto=Decimal('3')),
        Gasto(fecha=datetime(2024, 1, 2, 18, 30), monto=Decimal('2')),
    ])
    assert [(d.date, d.total, d.count) for d in agg.by_date] == [
        ('2024-01-01', Decimal('3'), 1),
        ('2024-01-02', Decimal('7'), 2),
    ]
    assert agg.skipped == 0


def test_non_finite_amounts_are_skipped():
    agg = aggregate_orders([
        Pedido(fecha='2024-01-01', total=Decimal('NaN')),
        Pedido(fecha='2024-01-01', total=Decimal('Infinity')),
        pedido('2024-01-01', '10', efectivo='10'),
    ])
    assert agg.skipped == 2
    assert agg.total == Decimal('10')
    assert agg.to_dict()['total'] == '10.00'


def test_non_finite_json_numbers_become_missing_amounts():
    assert to_money(float('nan')) is None
    assert to_money(float('inf')) is None
    assert to_money(Decimal('-Infinity')) is None
    assert to_money(12.5) == Decimal('12.5')
    assert Gasto.from_dict({'fecha': '2024-01-01', 'monto': float('nan')}).monto is None
