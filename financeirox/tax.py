# financeirox/tax.py
"""
Progressive income-tax estimate (Japanese national income tax brackets).

Public API:
    find_bracket(base) -> TaxBracket
    estimate_tax(total_income, total_expense) -> TaxSummary
    totals_from_transactions(transactions) -> (income, expense)
    summarize_transactions(transactions) -> TaxSummary

Brackets are half-open ranges [min, max); the last one has no upper bound.
The result is an estimate for display, not tax advice.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Iterable, Mapping, Any, Optional, Tuple


@dataclass(frozen=True)
class TaxBracket:
    min: float
    max: Optional[float]  # None = open-ended
    rate: float
    deduction: float
    label: str

    def contains(self, base: float) -> bool:
        return base >= self.min and (self.max is None or base < self.max)


@dataclass(frozen=True)
class TaxSummary:
    total_income: float
    total_expense: float
    taxable_base: float
    tax_amount: float
    bracket_rate: float
    effective_rate: float
    bracket_label: str

    def to_dict(self) -> dict:
        d = asdict(self)
        return {
            "totalIncome": d["total_income"],
            "totalExpense": d["total_expense"],
            "taxableBase": d["taxable_base"],
            "taxAmount": d["tax_amount"],
            "bracketRate": d["bracket_rate"],
            "effectiveRate": d["effective_rate"],
            "bracketLabel": d["bracket_label"],
        }


TAX_BRACKETS: Tuple[TaxBracket, ...] = (
    TaxBracket(0, 1_950_000, 0.05, 0, "Até ¥1.95M — 5%"),
    TaxBracket(1_950_000, 3_300_000, 0.10, 97_500, "¥1.95M a ¥3.3M — 10% - ¥97,500"),
    TaxBracket(3_300_000, 6_950_000, 0.20, 427_500, "¥3.3M a ¥6.95M — 20% - ¥427,500"),
    TaxBracket(6_950_000, 9_000_000, 0.23, 636_000, "¥6.95M a ¥9M — 23% - ¥636,000"),
    TaxBracket(9_000_000, 18_000_000, 0.33, 1_536_000, "¥9M a ¥18M — 33% - ¥1,536,000"),
    TaxBracket(18_000_000, 40_000_000, 0.40, 2_796_000, "¥18M a ¥40M — 40% - ¥2,796,000"),
    TaxBracket(40_000_000, None, 0.45, 4_796_000, "Acima de ¥40M — 45% - ¥4,796,000"),
)


def find_bracket(base: float) -> TaxBracket:
    """
    Return the bracket whose [min, max) range contains `base`.

    Non-positive bases map to the first bracket; anything not matched
    (NaN, for instance) falls back to the open-ended top bracket.
    """
    if base <= 0:
        return TAX_BRACKETS[0]
    for bracket in TAX_BRACKETS:
        if bracket.contains(base):
            return bracket
    return TAX_BRACKETS[-1]


def estimate_tax(total_income: float, total_expense: float) -> TaxSummary:
    taxable_base = max(float(total_income) - float(total_expense), 0.0)
    bracket = find_bracket(taxable_base)

    tax_amount = taxable_base * bracket.rate - bracket.deduction
    if tax_amount < 0:
        tax_amount = 0.0

    effective_rate = tax_amount / taxable_base if taxable_base > 0 else 0.0

    return TaxSummary(
        total_income=float(total_income),
        total_expense=float(total_expense),
        taxable_base=taxable_base,
        tax_amount=tax_amount,
        bracket_rate=bracket.rate,
        effective_rate=effective_rate,
        bracket_label=bracket.label,
    )


def _field(tx: Any, name: str, attr: str) -> Any:
    if isinstance(tx, Mapping):
        return tx.get(name)
    return getattr(tx, attr, None)


def totals_from_transactions(transactions: Iterable[Any]) -> Tuple[float, float]:
    """
    Sum income and expense amounts. Accepts ORM rows or API dicts.
    Non-numeric, non-finite and non-positive amounts are ignored.
    """
    total_income = 0.0
    total_expense = 0.0

    for tx in transactions:
        try:
            value = float(_field(tx, "amount", "amount") or 0)
        except (TypeError, ValueError):
            continue
        if not math.isfinite(value) or value <= 0:
            continue

        tx_type = _field(tx, "type", "type")
        if tx_type == "INCOME":
            total_income += value
        elif tx_type == "EXPENSE":
            total_expense += value

    return total_income, total_expense


def summarize_transactions(transactions: Iterable[Any]) -> TaxSummary:
    return estimate_tax(*totals_from_transactions(transactions))
