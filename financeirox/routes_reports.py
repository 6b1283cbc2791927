# financeirox/routes_reports.py
"""
Read-only report endpoints: tax estimate, period bar chart, monthly balance
per income source, and the per-category breakdown for donut charts.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from financeirox import config
from financeirox.balances import category_breakdown, monthly_totals, source_balances
from financeirox.buckets import (
    MODES,
    bucket_totals,
    buckets_for,
    next_clamped,
    period_label,
    period_start,
    prev_ref,
    window,
)
from financeirox.deps import get_db, get_user_email
from financeirox.formatting import format_jpy
from financeirox.services.dates import get_month_range, parse_optional_date, year_to_date_range
from financeirox.services.sources import list_sources
from financeirox.services.transactions import normalize_type, query_transactions
from financeirox.tax import summarize_transactions
from models import INCOME, EXPENSE

router = APIRouter(prefix="/api/reports")

TYPE_ERROR = "Campo 'type' deve ser 'INCOME' ou 'EXPENSE'."


def _require_type(value: str | None, default: str) -> str:
    if value is None:
        return default
    tx_type = normalize_type(value)
    if tx_type is None:
        raise HTTPException(status_code=400, detail=TYPE_ERROR)
    return tx_type


# -------------------------------------------------------------------
# Tax estimate
# -------------------------------------------------------------------

@router.get("/tax")
def tax_report(
    year: int | None = Query(None, ge=1900, le=9999),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    start, end = year_to_date_range(year)
    transactions = query_transactions(db, user_email, start=start, end=end).all()
    summary = summarize_transactions(transactions)

    return {
        "year": start.year,
        "from": start.isoformat(),
        "to": end.isoformat(),
        **summary.to_dict(),
        "display": {
            "totalIncome": format_jpy(summary.total_income),
            "totalExpense": format_jpy(summary.total_expense),
            "taxableBase": format_jpy(summary.taxable_base),
            "taxAmount": format_jpy(summary.tax_amount),
            "effectiveRate": f"{summary.effective_rate * 100:.1f}%",
        },
    }


# -------------------------------------------------------------------
# Period bar chart
# -------------------------------------------------------------------

@router.get("/chart")
def chart_report(
    type: str | None = Query(None),
    mode: str = Query("day"),
    ref: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    tx_type = _require_type(type, INCOME)
    if mode not in MODES:
        raise HTTPException(status_code=400, detail="Granularidade inválida.")

    try:
        ref_date = parse_optional_date(ref)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Data inválida") from exc

    today = config.today()
    # Never chart a window past the current period
    if ref_date is None or period_start(mode, ref_date) > period_start(mode, today):
        ref_date = today

    try:
        buckets = buckets_for(mode, ref_date)
        previous = prev_ref(mode, ref_date)
        next_ref = next_clamped(mode, ref_date, today=today)
    except (ValueError, OverflowError) as exc:
        # Navigation stepped outside the representable date range
        raise HTTPException(status_code=400, detail="Data inválida") from exc

    start, end = window(buckets)
    transactions = query_transactions(
        db, user_email, tx_type, start=start, end=end - timedelta(days=1)
    ).all()
    totals = bucket_totals(buckets, transactions, tx_type)

    return {
        "type": tx_type,
        "mode": mode,
        "ref": ref_date.isoformat(),
        "label": period_label(mode, ref_date),
        "buckets": [t.to_dict() for t in totals],
        "total": sum(t.value for t in totals),
        "prevRef": previous.isoformat(),
        "nextRef": next_ref.isoformat(),
        "canAdvance": next_ref != ref_date,
    }


# -------------------------------------------------------------------
# Monthly balance
# -------------------------------------------------------------------

@router.get("/balance")
def balance_report(
    month: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    today = config.today()
    start, end_exclusive, normalized = get_month_range(month, today=today)

    transactions = query_transactions(
        db, user_email, start=start, end=end_exclusive - timedelta(days=1)
    ).all()
    sources = list_sources(db, user_email, INCOME)

    totals = monthly_totals(transactions)
    total_received, balances = source_balances(transactions, sources, today)

    return {
        "month": normalized,
        **totals,
        "totalReceived": total_received,
        "balances": [b.to_dict() for b in balances],
        "nextDisabled": start >= today.replace(day=1),
    }


# -------------------------------------------------------------------
# Category breakdown
# -------------------------------------------------------------------

@router.get("/breakdown")
def breakdown_report(
    type: str | None = Query(None),
    month: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    tx_type = _require_type(type, EXPENSE)
    start, end_exclusive, normalized = get_month_range(month)

    transactions = query_transactions(
        db, user_email, tx_type, start=start, end=end_exclusive - timedelta(days=1)
    ).all()
    colors = {row.name: row.color for row in list_sources(db, user_email, tx_type)}
    slices = category_breakdown(transactions, tx_type, colors)

    return {
        "type": tx_type,
        "month": normalized,
        "total": sum(s["total"] for s in slices),
        "slices": slices,
    }
