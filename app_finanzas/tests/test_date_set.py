from datetime import date, datetime

import pytest

from app_finanzas.services import DateSet, InvalidRange, ReportError, is_date_key, parse_date_key


def test_range_is_inclusive_and_crosses_months():
    ds = DateSet.from_range('2024-02-28', '2024-03-01')
    # 2024 es bisiesto
    assert ds.sorted_ascending() == ['2024-02-28', '2024-02-29', '2024-03-01']
    assert len(ds) == 3
    assert ds.start == '2024-02-28'
    assert ds.end == '2024-03-01'
    assert ds.is_contiguous()


def test_range_single_day():
    assert DateSet.from_range('2024-01-05', '2024-01-05') == DateSet.single('2024-01-05')


def test_range_start_after_end_is_rejected():
    with pytest.raises(InvalidRange):
        DateSet.from_range('2024-01-10', '2024-01-01')


def test_invalid_range_is_a_report_error_and_value_error():
    with pytest.raises(ReportError):
        DateSet.from_range('2024-01-10', '2024-01-01')
    with pytest.raises(ValueError):
        DateSet.from_range('2024-01-10', '2024-01-01')


@pytest.mark.parametrize('bad', ['2024-13-01', '2024-02-30', '01/03/2024', '2024-1-5', '', 'hoy'])
def test_malformed_keys_are_rejected(bad):
    with pytest.raises(InvalidRange):
        DateSet.from_explicit_dates([bad])
    assert not is_date_key(bad)


def test_explicit_dates_ignore_order_and_duplicates():
    a = DateSet.from_explicit_dates(['2024-01-03', '2024-01-01', '2024-01-03'])
    b = DateSet.from_explicit_dates(['2024-01-01', '2024-01-03'])
    assert a == b
    assert hash(a) == hash(b)
    assert len(a) == 2
    assert not a.is_contiguous()


def test_sorted_views():
    ds = DateSet.from_explicit_dates(['2024-01-02', '2023-12-31', '2024-01-01'])
    assert ds.sorted_ascending() == ['2023-12-31', '2024-01-01', '2024-01-02']
    assert ds.sorted_descending() == ['2024-01-02', '2024-01-01', '2023-12-31']
    assert list(ds) == ds.sorted_ascending()


def test_empty_set_is_valid():
    ds = DateSet.from_explicit_dates([])
    assert len(ds) == 0
    assert not ds
    assert ds.start is None
    assert ds.end is None
    assert ds.sorted_ascending() == []
    assert ds.is_contiguous()


def test_accepts_date_objects():
    ds = DateSet.from_range(date(2024, 1, 1), date(2024, 1, 2))
    assert date(2024, 1, 2) in ds
    assert '2024-01-01' in ds
    assert '2024-01-03' not in ds


def test_last_days_ends_on_given_day():
    ds = DateSet.last_days(7, today='2024-03-03')
    assert ds.start == '2024-02-26'
    assert ds.end == '2024-03-03'
    assert len(ds) == 7


def test_last_days_requires_positive_count():
    with pytest.raises(InvalidRange):
        DateSet.last_days(0, today='2024-03-03')


def test_parse_date_key():
    assert parse_date_key('2024-01-31') == date(2024, 1, 31)
    assert parse_date_key(date(2024, 1, 31)) == date(2024, 1, 31)


def test_datetime_values_use_their_civil_date():
    ds = DateSet.from_explicit_dates([datetime(2024, 1, 2, 23, 59)])
    assert ds.sorted_ascending() == ['2024-01-02']
    assert datetime(2024, 1, 2, 8, 0) in ds
    assert parse_date_key(datetime(2024, 1, 2, 8, 0)) == date(2024, 1, 2)
