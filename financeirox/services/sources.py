# financeirox/services/sources.py
#
# Income source / expense category helpers: kind resolution, payload
# validation and ORM construction. Raises ValueError with user-facing
# messages, like services/transactions.py.

from typing import Any

from sqlalchemy.orm import Session

from financeirox.formatting import pick_color
from financeirox.services.transactions import clean_text
from models import IncomeSource, ExpenseCategory, INCOME, EXPENSE

KIND_ERROR = "Campo 'kind' deve ser 'INCOME' ou 'EXPENSE'."

MODEL_FOR_KIND = {
    INCOME: IncomeSource,
    EXPENSE: ExpenseCategory,
}

LABEL_FOR_KIND = {
    INCOME: "IncomeSource",
    EXPENSE: "ExpenseCategory",
}


def parse_kind(value: Any) -> str:
    if isinstance(value, str) and value.strip().upper() in MODEL_FOR_KIND:
        return value.strip().upper()
    raise ValueError(KIND_ERROR)


def parse_weekday(value: Any, field: str) -> int | None:
    """0 = Sunday .. 6 = Saturday; blank -> None."""
    if value is None or value == "":
        return None
    try:
        day = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Campo '{field}' deve estar entre 0 e 6.")
    if isinstance(value, float) and value != day:
        raise ValueError(f"Campo '{field}' deve estar entre 0 e 6.")
    if not 0 <= day <= 6:
        raise ValueError(f"Campo '{field}' deve estar entre 0 e 6.")
    return day


def _apply_fields(row, kind: str, payload: dict) -> None:
    weekdays = {}
    if kind == INCOME:
        for key in ("paymentWeekday", "workWeekStart", "workWeekEnd"):
            if key in payload:
                weekdays[key] = parse_weekday(payload[key], key)

    if "color" in payload:
        row.color = clean_text(payload["color"]) or row.color
    if "iconUrl" in payload:
        row.icon_url = clean_text(payload["iconUrl"])

    if "paymentWeekday" in weekdays:
        row.payment_weekday = weekdays["paymentWeekday"]
    if "workWeekStart" in weekdays:
        row.work_week_start = weekdays["workWeekStart"]
    if "workWeekEnd" in weekdays:
        row.work_week_end = weekdays["workWeekEnd"]


def build_source(payload: dict, user_email: str):
    """
    New IncomeSource / ExpenseCategory from a POST payload.
    Without a color, one is picked from the default palette.
    """
    kind = parse_kind(payload.get("kind"))
    name = clean_text(payload.get("name"))
    if not name:
        raise ValueError("Campo 'name' é obrigatório.")

    model = MODEL_FOR_KIND[kind]
    row = model(user_email=user_email, name=name, color=pick_color(len(name)))
    _apply_fields(row, kind, payload)
    return kind, row


def apply_source_update(row, kind: str, payload: dict):
    if "name" in payload:
        name = clean_text(payload.get("name"))
        if not name:
            raise ValueError("Campo 'name' é obrigatório.")
        row.name = name
    _apply_fields(row, kind, payload)
    return row


def list_sources(db: Session, user_email: str, kind: str):
    """All labels of one kind for a user, by name."""
    model = MODEL_FOR_KIND[kind]
    return (
        db.query(model)
        .filter(model.user_email == user_email)
        .order_by(model.name.asc())
        .all()
    )
