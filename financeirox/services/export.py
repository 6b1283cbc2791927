# financeirox/services/export.py
"""
CSV export of transactions.

One semicolon-separated row per transaction with a fixed header that works
for both income and expense rows (the columns of the other type are empty).
"""

from typing import Iterable

import pandas as pd

from models import Transaction

EXPORT_COLUMNS = [
    "type",
    "occurredAt",
    "amount",
    "incomeSource",
    "expenseCategory",
    "payMethod",
    "payApp",
    "notes",
    "id",
]


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [tx.to_dict() for tx in transactions]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    # Two decimals, as text, so the CSV does not depend on float repr
    df["amount"] = df["amount"].map(lambda v: f"{float(v):.2f}")

    return df.fillna("")


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    df = transactions_to_frame(transactions)
    return df.to_csv(sep=";", index=False, lineterminator="\n")
