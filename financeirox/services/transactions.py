# financeirox/services/transactions.py
#
# Transaction Helpers
# Turn validated request payloads (camelCase dicts) into Transaction ORM
# objects, and apply partial updates while keeping the income/expense
# field-sets mutually exclusive.
#
# Validation failures raise ValueError with a user-facing message; the
# routes translate them into 400 responses.

import math
from datetime import date, datetime
from typing import Any

from sqlalchemy.orm import Session

from financeirox import config
from financeirox.formatting import parse_flexible_date
from models import (
    Transaction,
    INCOME,
    EXPENSE,
    INCOME_FIELDS,
    EXPENSE_FIELDS,
)

# payload key -> ORM attribute
_INCOME_KEYS = {
    "incomeSource": "income_source",
    "receiptMethod": "receipt_method",
    "receiptDetail": "receipt_detail",
}
_EXPENSE_KEYS = {
    "expenseCategory": "expense_category",
    "payMethod": "pay_method",
    "payApp": "pay_app",
}


# ---- Field parsing ----

def clean_text(value: Any) -> str | None:
    """Trimmed string, or None for blanks and non-strings."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_amount(value: Any) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError("Valor inválido")
    if not math.isfinite(amount):
        raise ValueError("Valor inválido")
    # Stored with two decimals; anything that rounds to zero is rejected
    amount = round(amount, 2)
    if amount <= 0:
        raise ValueError("Valor inválido")
    return amount


def parse_occurred_at(value: Any) -> date:
    """
    Accepts dates, 'YYYY-MM-DD', 'dd/mm/yyyy' and full ISO timestamps.
    Missing value -> today.
    """
    if value is None or value == "":
        return config.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError("Data inválida")

    parsed = parse_flexible_date(value)
    if parsed is not None:
        return parsed
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError("Data inválida")


def normalize_type(value: Any) -> str | None:
    if isinstance(value, str) and value.upper() in (INCOME, EXPENSE):
        return value.upper()
    return None


# ---- Field-set handling ----

def apply_type_fields(tx: Transaction, tx_type: str, payload: dict) -> None:
    """
    Fill the field-set belonging to tx_type from payload and clear the other.
    """
    own, other = (_INCOME_KEYS, EXPENSE_FIELDS) if tx_type == INCOME else (_EXPENSE_KEYS, INCOME_FIELDS)
    for key, attr in own.items():
        setattr(tx, attr, clean_text(payload.get(key)))
    for attr in other:
        setattr(tx, attr, None)


def build_transaction(payload: dict, user_email: str) -> Transaction:
    """
    Create a Transaction from a POST payload.
    Anything other than an explicit INCOME is stored as EXPENSE.
    """
    tx_type = INCOME if normalize_type(payload.get("type")) == INCOME else EXPENSE

    tx = Transaction(
        user_email=user_email,
        type=tx_type,
        amount=parse_amount(payload.get("amount")),
        occurred_at=parse_occurred_at(payload.get("occurredAt")),
        notes=clean_text(payload.get("notes")),
    )
    apply_type_fields(tx, tx_type, payload)
    return tx


def apply_update(tx: Transaction, payload: dict) -> Transaction:
    """
    Apply a PUT payload. Only keys present in payload are touched, except the
    type field-sets: they are always rewritten for the (possibly new) type.
    """
    if "amount" in payload and payload["amount"] is not None:
        amount = parse_amount(payload["amount"])
    else:
        amount = None

    occurred_at = None
    if payload.get("occurredAt"):
        occurred_at = parse_occurred_at(payload["occurredAt"])

    # Validate everything before mutating the row
    if amount is not None:
        tx.amount = amount
    if occurred_at is not None:
        tx.occurred_at = occurred_at
    if "notes" in payload:
        tx.notes = clean_text(payload["notes"])

    new_type = normalize_type(payload.get("type"))
    if new_type:
        tx.type = new_type

    apply_type_fields(tx, tx.type, payload)
    return tx


# ---- Queries ----

def query_transactions(
    db: Session,
    user_email: str,
    tx_type: str | None = None,
    start: date | None = None,
    end: date | None = None,
):
    """
    Base filtered query for one user, oldest first. start and end are both
    inclusive. Unknown tx_type values are ignored (no type filter).
    """
    query = db.query(Transaction).filter(Transaction.user_email == user_email)

    tx_type = normalize_type(tx_type)
    if tx_type:
        query = query.filter(Transaction.type == tx_type)
    if start:
        query = query.filter(Transaction.occurred_at >= start)
    if end:
        query = query.filter(Transaction.occurred_at <= end)

    return query.order_by(Transaction.occurred_at.asc(), Transaction.created_at.asc())
