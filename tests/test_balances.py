from datetime import date
from types import SimpleNamespace

from financeirox.balances import (
    category_breakdown,
    monthly_totals,
    next_payment_date,
    source_balances,
)

TODAY = date(2026, 10, 18)  # Sunday


def tx(type, amount, occurred_at, source=None, category=None):
    return SimpleNamespace(
        type=type,
        amount=amount,
        occurred_at=occurred_at,
        income_source=source,
        expense_category=category,
    )


def test_next_payment_date_is_strictly_after():
    wednesday = date(2026, 10, 14)
    # 0 = Sunday .. 6 = Saturday
    assert next_payment_date(wednesday, 5) == date(2026, 10, 16)
    assert next_payment_date(wednesday, 3) == date(2026, 10, 21)
    assert next_payment_date(wednesday, 0) == date(2026, 10, 18)


def test_source_balances_split_current_and_future():
    sources = [
        SimpleNamespace(name="Uber", payment_weekday=5),
        SimpleNamespace(name="Amazon", payment_weekday=None),
    ]
    rows = [
        tx("INCOME", 10_000, date(2026, 10, 14), "Uber"),  # paid Fri 16th
        tx("INCOME", 4_000, date(2026, 10, 17), "Uber"),  # paid Fri 23rd
        tx("INCOME", 9_999, date(2026, 10, 10), "Amazon"),  # no payment config
        tx("INCOME", 1_234, date(2026, 10, 10), None),
        tx("EXPENSE", 500, date(2026, 10, 10), category="Posto"),
    ]

    total, balances = source_balances(rows, sources, TODAY)

    assert total == 10_000
    assert [b.to_dict() for b in balances] == [
        {"source": "Uber", "current": 10_000, "future": 4_000}
    ]


def test_monthly_totals():
    rows = [
        tx("INCOME", 1000, TODAY),
        tx("INCOME", 500, TODAY),
        tx("EXPENSE", 300, TODAY),
    ]
    assert monthly_totals(rows) == {"income": 1500, "expense": 300, "net": 1200}


def test_category_breakdown_sorted_with_colors():
    rows = [
        tx("EXPENSE", 300, TODAY, category="Posto"),
        tx("EXPENSE", 900, TODAY, category="Troca de óleo"),
        tx("EXPENSE", 200, TODAY, category="Posto"),
        tx("EXPENSE", 50, TODAY),
        tx("INCOME", 10_000, TODAY, source="Uber"),
    ]

    slices = category_breakdown(rows, "EXPENSE", {"Posto": "#ff0000"})

    assert [(s["label"], s["total"]) for s in slices] == [
        ("Troca de óleo", 900),
        ("Posto", 500),
        ("Outros", 50),
    ]
    assert slices[1]["color"] == "#ff0000"
    assert slices[0]["color"].startswith("hsl(")
