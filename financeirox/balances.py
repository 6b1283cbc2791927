# financeirox/balances.py
"""
Monthly balance helpers behind the home-screen cards.

- monthly_totals: income / expense / net for a list of transactions
- source_balances: per income source, what was already paid out and what is
  still to be received, based on each source's payment weekday
- category_breakdown: totals per source/category for the donut charts

All functions are pure: callers fetch the rows and pass them in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from financeirox.formatting import pick_color

UNLABELED = "Outros"


@dataclass
class SourceBalance:
    source: str
    current: float = 0.0
    future: float = 0.0

    def to_dict(self) -> dict:
        return {"source": self.source, "current": self.current, "future": self.future}


def _js_weekday(d: date) -> int:
    # 0 = Sunday .. 6 = Saturday, the convention stored on IncomeSource
    return (d.weekday() + 1) % 7


def next_payment_date(occurred_at: date, payment_weekday: int) -> date:
    """
    Next occurrence of payment_weekday strictly after occurred_at.
    A transaction made on the payment weekday itself is paid a week later.
    """
    diff = (payment_weekday - _js_weekday(occurred_at) + 7) % 7
    if diff == 0:
        diff = 7
    return occurred_at + timedelta(days=diff)


def monthly_totals(transactions: Iterable[Any]) -> Dict[str, float]:
    income = 0.0
    expense = 0.0
    for tx in transactions:
        amount = float(tx.amount or 0)
        if tx.type == "INCOME":
            income += amount
        elif tx.type == "EXPENSE":
            expense += amount
    return {"income": income, "expense": expense, "net": income - expense}


def source_balances(
    transactions: Iterable[Any],
    sources: Iterable[Any],
    today: date,
) -> Tuple[float, List[SourceBalance]]:
    """
    Split income per source into already received ("current") and still to
    be received ("future").

    Only sources with a payment_weekday take part; income attached to other
    sources (or to none) is left out. Returns (total_received, balances).
    """
    config_by_name = {
        s.name: s for s in sources if getattr(s, "payment_weekday", None) is not None
    }
    acc: Dict[str, SourceBalance] = {}
    total_paid = 0.0

    for tx in transactions:
        if tx.type != "INCOME":
            continue
        name = tx.income_source or UNLABELED
        cfg = config_by_name.get(name)
        if cfg is None:
            continue

        balance = acc.setdefault(name, SourceBalance(source=name))
        amount = float(tx.amount or 0)

        if next_payment_date(tx.occurred_at, cfg.payment_weekday) <= today:
            balance.current += amount
            total_paid += amount
        else:
            balance.future += amount

    return total_paid, list(acc.values())


def category_breakdown(
    transactions: Iterable[Any],
    tx_type: str,
    colors: Optional[Dict[str, Optional[str]]] = None,
) -> List[dict]:
    """
    Group transactions of tx_type by their label and sum the amounts.

    colors maps label -> configured color; labels without one get a palette
    color. Sorted by total, largest first.
    """
    colors = colors or {}
    totals: Dict[str, float] = {}

    for tx in transactions:
        if tx.type != tx_type:
            continue
        label = (tx.income_source if tx_type == "INCOME" else tx.expense_category) or UNLABELED
        totals[label] = totals.get(label, 0.0) + float(tx.amount or 0)

    slices = []
    for label, total in totals.items():
        color = colors.get(label) or pick_color(len(label))
        slices.append({"label": label, "total": total, "color": color})

    slices.sort(key=lambda s: (-s["total"], s["label"]))
    return slices
