# routes_transactions.py
"""
Routes for transactions: list with filters, create, update, delete, and CSV export.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from financeirox.deps import get_db, get_user_email
from financeirox.schemas import TransactionIn
from financeirox.services.dates import parse_optional_date
from financeirox.services.export import transactions_to_csv
from financeirox.services.transactions import (
    build_transaction,
    apply_update,
    normalize_type,
    query_transactions,
)
from models import Transaction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _parse_range(date_from: str | None, date_to: str | None) -> tuple[date | None, date | None]:
    try:
        return parse_optional_date(date_from), parse_optional_date(date_to)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Data inválida") from exc


def _get_owned(db: Session, tx_id: str | None, user_email: str) -> Transaction:
    if not tx_id:
        raise HTTPException(status_code=400, detail="Campo 'id' é obrigatório.")

    tx = (
        db.query(Transaction)
        .filter(Transaction.id == tx_id, Transaction.user_email == user_email)
        .first()
    )
    if tx is None:
        raise HTTPException(status_code=404, detail="Transação não encontrada.")
    return tx


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s /api/transactions failed", action)
        raise HTTPException(status_code=500, detail="Erro ao salvar no banco de dados.") from exc


# -------------------------------------------------------------------
# List / export
# -------------------------------------------------------------------

@router.get("/transactions")
def list_transactions(
    type: str | None = Query(None),
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    start, end = _parse_range(date_from, date_to)
    items = query_transactions(db, user_email, type, start, end).all()
    return [tx.to_dict() for tx in items]


@router.get("/transactions/export")
def export_transactions(
    type: str | None = Query(None),
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    start, end = _parse_range(date_from, date_to)
    items = query_transactions(db, user_email, type, start, end).all()

    name = (normalize_type(type) or "transacoes").lower()
    return Response(
        content=transactions_to_csv(items),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{name}.csv"'},
    )


# -------------------------------------------------------------------
# Create / update / delete
# -------------------------------------------------------------------

@router.post("/transactions", status_code=201)
def create_transaction(
    body: TransactionIn,
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    try:
        tx = build_transaction(body.provided(), user_email)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    db.add(tx)
    _commit(db, "POST")
    db.refresh(tx)

    logger.info("Created %s transaction %s (%s)", tx.type, tx.id, tx.amount)
    return tx.to_dict()


@router.put("/transactions")
def update_transaction(
    body: TransactionIn,
    id: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    tx = _get_owned(db, id, user_email)

    try:
        apply_update(tx, body.provided())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    _commit(db, "PUT")
    db.refresh(tx)
    return tx.to_dict()


@router.delete("/transactions")
def delete_transaction(
    id: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    tx = _get_owned(db, id, user_email)

    db.delete(tx)
    _commit(db, "DELETE")

    logger.info("Deleted transaction %s", id)
    return {"ok": True}
