import math

import pytest

from financeirox.tax import (
    TAX_BRACKETS,
    estimate_tax,
    find_bracket,
    summarize_transactions,
    totals_from_transactions,
)


def test_zero_and_negative_bases_use_first_bracket():
    assert find_bracket(0) is TAX_BRACKETS[0]
    assert find_bracket(-1_000) is TAX_BRACKETS[0]


def test_large_base_uses_open_ended_bracket():
    bracket = find_bracket(50_000_000)
    assert bracket is TAX_BRACKETS[-1]
    assert bracket.max is None
    assert bracket.rate == 0.45


@pytest.mark.parametrize(
    "base, rate",
    [
        (1, 0.05),
        (1_949_999, 0.05),
        (1_950_000, 0.10),
        (3_299_999, 0.10),
        (3_300_000, 0.20),
        (6_950_000, 0.23),
        (9_000_000, 0.33),
        (18_000_000, 0.40),
        (39_999_999, 0.40),
        (40_000_000, 0.45),
    ],
)
def test_bracket_boundaries_are_min_inclusive(base, rate):
    assert find_bracket(base).rate == rate


def test_every_non_negative_base_matches_exactly_one_bracket():
    for base in range(0, 45_000_000, 7_919):
        matches = [b for b in TAX_BRACKETS if b.contains(base)]
        assert len(matches) == 1, base
        assert find_bracket(base) is matches[0]


def test_brackets_are_contiguous_and_ascending():
    for lower, upper in zip(TAX_BRACKETS, TAX_BRACKETS[1:]):
        assert lower.max == upper.min
        assert lower.rate < upper.rate


def test_tax_is_continuous_across_boundaries():
    for lower, upper in zip(TAX_BRACKETS, TAX_BRACKETS[1:]):
        boundary = upper.min
        below = estimate_tax(boundary - 1, 0).tax_amount
        at = estimate_tax(boundary, 0).tax_amount
        assert below <= at
        assert at - below == pytest.approx(lower.rate, abs=1e-6)


def test_tax_is_never_negative_and_monotonic():
    previous = 0.0
    for base in range(0, 45_000_000, 250_000):
        tax = estimate_tax(base, 0).tax_amount
        assert tax >= 0
        assert tax >= previous - 1e-6
        previous = tax


def test_estimate_example():
    summary = estimate_tax(5_000_000, 1_000_000)

    assert summary.taxable_base == 4_000_000
    assert summary.bracket_rate == 0.20
    assert summary.tax_amount == pytest.approx(372_500)
    assert summary.effective_rate == pytest.approx(372_500 / 4_000_000)
    assert "20%" in summary.bracket_label


def test_expenses_above_income_give_zero_base():
    summary = estimate_tax(100_000, 500_000)

    assert summary.taxable_base == 0
    assert summary.tax_amount == 0
    assert summary.effective_rate == 0
    assert summary.bracket_label == TAX_BRACKETS[0].label


def test_totals_skip_invalid_and_non_positive_amounts():
    rows = [
        {"type": "INCOME", "amount": 1000},
        {"type": "INCOME", "amount": "2500"},
        {"type": "INCOME", "amount": -50},
        {"type": "INCOME", "amount": "abc"},
        {"type": "INCOME", "amount": math.inf},
        {"type": "EXPENSE", "amount": 300},
        {"type": "OTHER", "amount": 999},
    ]

    assert totals_from_transactions(rows) == (3500.0, 300.0)


def test_summary_to_dict_uses_api_keys():
    d = summarize_transactions([{"type": "INCOME", "amount": 2_000_000}]).to_dict()

    assert set(d) == {
        "totalIncome",
        "totalExpense",
        "taxableBase",
        "taxAmount",
        "bracketRate",
        "effectiveRate",
        "bracketLabel",
    }
    assert d["bracketRate"] == 0.10
