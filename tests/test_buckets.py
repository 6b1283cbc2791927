from datetime import date, timedelta

import pytest

from financeirox.buckets import (
    MODES,
    bucket_totals,
    buckets_for,
    next_clamped,
    period_label,
    period_start,
    prev_ref,
    shift,
    window,
)

REF = date(2026, 10, 18)  # Sunday


@pytest.mark.parametrize("mode", MODES)
def test_four_contiguous_ascending_buckets_ending_at_ref(mode):
    buckets = buckets_for(mode, REF)

    assert len(buckets) == 4
    for a, b in zip(buckets, buckets[1:]):
        assert a.end == b.start
        assert a.start < b.start
    assert buckets[-1].contains(REF)
    assert not buckets[0].contains(buckets[0].start - timedelta(days=1))


def test_month_buckets():
    buckets = buckets_for("month", REF)

    assert [b.start for b in buckets] == [
        date(2026, 7, 1),
        date(2026, 8, 1),
        date(2026, 9, 1),
        date(2026, 10, 1),
    ]
    assert buckets[-1].end == date(2026, 11, 1)
    assert [b.label for b in buckets] == ["jul/26", "ago/26", "set/26", "out/26"]
    assert buckets[-1].key == "m-2026-10"


def test_month_buckets_cross_year_boundary():
    buckets = buckets_for("month", date(2026, 2, 10))

    assert [b.start for b in buckets] == [
        date(2025, 11, 1),
        date(2025, 12, 1),
        date(2026, 1, 1),
        date(2026, 2, 1),
    ]


@pytest.mark.parametrize("ref", [date(2024, 1, 31), date(2024, 2, 29), date(2025, 12, 31)])
def test_each_month_bucket_is_one_calendar_month(ref):
    for b in buckets_for("month", ref):
        assert b.start.day == 1
        assert b.end.day == 1
        assert (b.end - timedelta(days=1)).month == b.start.month


def test_week_buckets_start_on_monday():
    buckets = buckets_for("week", REF)

    assert [b.start for b in buckets] == [
        date(2026, 9, 21),
        date(2026, 9, 28),
        date(2026, 10, 5),
        date(2026, 10, 12),
    ]
    assert all(b.start.weekday() == 0 for b in buckets)
    assert all((b.end - b.start).days == 7 for b in buckets)
    assert buckets[-1].label == "12/10"
    assert buckets[-1].key == "w-2026-10-12"


def test_day_buckets():
    buckets = buckets_for("day", REF)

    assert [b.start for b in buckets] == [date(2026, 10, d) for d in (15, 16, 17, 18)]
    assert [b.label for b in buckets] == ["qui", "sex", "sáb", "dom"]


def test_year_buckets():
    buckets = buckets_for("year", REF)

    assert [b.label for b in buckets] == ["2023", "2024", "2025", "2026"]
    assert buckets[0].start == date(2023, 1, 1)
    assert buckets[-1].end == date(2027, 1, 1)


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        buckets_for("hour", REF)


def test_shift_month_lands_on_first_day():
    assert shift("month", date(2026, 1, 31), 1) == date(2026, 2, 1)
    assert shift("month", date(2026, 1, 15), -1) == date(2025, 12, 1)
    assert shift("year", date(2026, 5, 5), -2) == date(2024, 1, 1)
    assert prev_ref("week", REF) == date(2026, 10, 11)


def test_bucket_totals_sum_matches_window():
    buckets = buckets_for("month", REF)
    start, end = window(buckets)
    transactions = [
        {"type": "INCOME", "amount": 1000, "occurredAt": "2026-06-30"},  # before window
        {"type": "INCOME", "amount": 2000, "occurredAt": "2026-07-01"},
        {"type": "INCOME", "amount": 3000, "occurredAt": "2026-08-15"},
        {"type": "INCOME", "amount": 4000, "occurredAt": "2026-10-31"},
        {"type": "INCOME", "amount": 5000, "occurredAt": "2026-11-01"},  # after window
        {"type": "EXPENSE", "amount": 700, "occurredAt": "2026-09-10"},
        {"type": "INCOME", "amount": 100, "occurredAt": "not-a-date"},
    ]

    totals = bucket_totals(buckets, transactions, "INCOME")

    assert [t.value for t in totals] == [2000, 3000, 0, 4000]
    in_window = sum(
        t["amount"]
        for t in transactions
        if t["type"] == "INCOME"
        and t["occurredAt"][:4].isdigit()
        and start <= date.fromisoformat(t["occurredAt"]) < end
    )
    assert sum(t.value for t in totals) == in_window


def test_bucket_totals_accept_orm_like_rows():
    class Row:
        def __init__(self, type, amount, occurred_at):
            self.type = type
            self.amount = amount
            self.occurred_at = occurred_at

    buckets = buckets_for("day", REF)
    rows = [Row("EXPENSE", 500, date(2026, 10, 18)), Row("EXPENSE", 250, date(2026, 10, 15))]

    totals = bucket_totals(buckets, rows, "EXPENSE")

    assert [t.value for t in totals] == [250, 0, 0, 500]
    assert totals[-1].to_dict()["value"] == 500


def test_next_clamped_stops_at_current_period():
    today = REF
    assert next_clamped("month", date(2026, 10, 1), today=today) == date(2026, 10, 1)
    assert next_clamped("month", date(2026, 9, 1), today=today) == date(2026, 10, 1)
    assert next_clamped("day", today, today=today) == today
    assert next_clamped("week", date(2026, 10, 12), today=today) == date(2026, 10, 12)
    assert next_clamped("year", date(2025, 3, 3), today=today) == date(2026, 1, 1)


@pytest.mark.parametrize("mode", MODES)
def test_next_clamped_never_passes_today(mode):
    today = REF
    current = shift(mode, period_start(mode, today), -6)
    for _ in range(12):
        current = next_clamped(mode, current, today=today)
        assert period_start(mode, current) <= period_start(mode, today)
    assert period_start(mode, current) == period_start(mode, today)


def test_period_label():
    assert period_label("week", date(2026, 2, 3)) == "semana de 3/2"
    assert period_label("month", REF) == "out 2026"
    assert period_label("year", REF) == "2026"
