# routes_sources.py
"""
Routes for the user's labels: income sources (kind=INCOME) and expense
categories (kind=EXPENSE).

GET without kind returns both lists. DELETE accepts id/kind either in the
query string or in a JSON body.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from financeirox.deps import get_db, get_user_email
from financeirox.schemas import SourceIn
from financeirox.services.sources import (
    KIND_ERROR,
    LABEL_FOR_KIND,
    MODEL_FOR_KIND,
    apply_source_update,
    build_source,
    list_sources,
    parse_kind,
)
from models import INCOME, EXPENSE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _get_owned(db: Session, kind: str, source_id: str, user_email: str):
    model = MODEL_FOR_KIND[kind]
    row = (
        db.query(model)
        .filter(model.id == source_id, model.user_email == user_email)
        .first()
    )
    if row is None:
        raise HTTPException(
            status_code=404,
            detail=f"{LABEL_FOR_KIND[kind]} não encontrado ou não pertence ao usuário.",
        )
    return row


def _name_taken(db: Session, kind: str, user_email: str, name: str, exclude_id: str | None = None) -> bool:
    model = MODEL_FOR_KIND[kind]
    query = db.query(model.id).filter(model.user_email == user_email, model.name == name)
    if exclude_id:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Já existe um item com esse nome.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s /api/sources failed", action)
        raise HTTPException(status_code=500, detail="Erro ao salvar no banco de dados.") from exc


@router.get("/sources")
def get_sources(
    kind: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    wanted = kind.strip().upper() if kind else None

    if wanted == INCOME:
        items = list_sources(db, user_email, INCOME)
        return {"kind": INCOME, "incomeSources": [s.to_dict() for s in items]}

    if wanted == EXPENSE:
        items = list_sources(db, user_email, EXPENSE)
        return {"kind": EXPENSE, "expenseCategories": [c.to_dict() for c in items]}

    return {
        "kind": "BOTH",
        "incomeSources": [s.to_dict() for s in list_sources(db, user_email, INCOME)],
        "expenseCategories": [c.to_dict() for c in list_sources(db, user_email, EXPENSE)],
    }


@router.post("/sources")
def create_source(
    body: SourceIn,
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    try:
        kind, row = build_source(body.provided(), user_email)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if _name_taken(db, kind, user_email, row.name):
        raise HTTPException(status_code=409, detail="Já existe um item com esse nome.")

    db.add(row)
    _commit(db, "POST")
    db.refresh(row)

    logger.info("Created %s %r", LABEL_FOR_KIND[kind], row.name)
    return {"kind": kind, "source": row.to_dict()}


@router.put("/sources")
def update_source(
    body: SourceIn,
    id: str | None = Query(None),
    kind: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    payload = body.provided()
    source_id = id or body.id
    if not source_id:
        raise HTTPException(status_code=400, detail="Campo 'id' é obrigatório.")

    try:
        resolved_kind = parse_kind(kind or body.kind)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=KIND_ERROR) from exc

    row = _get_owned(db, resolved_kind, source_id, user_email)

    try:
        apply_source_update(row, resolved_kind, payload)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if _name_taken(db, resolved_kind, user_email, row.name, exclude_id=row.id):
        raise HTTPException(status_code=409, detail="Já existe um item com esse nome.")

    _commit(db, "PUT")
    db.refresh(row)
    return {"kind": resolved_kind, "source": row.to_dict()}


@router.delete("/sources")
def delete_source(
    body: SourceIn | None = None,
    id: str | None = Query(None),
    kind: str | None = Query(None),
    user_email: str = Depends(get_user_email),
    db: Session = Depends(get_db),
):
    source_id = id or (body.id if body else None)
    kind_value = kind or (body.kind if body else None)

    if not source_id:
        raise HTTPException(status_code=400, detail="Campo 'id' é obrigatório.")

    try:
        resolved_kind = parse_kind(kind_value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=KIND_ERROR) from exc

    row = _get_owned(db, resolved_kind, source_id, user_email)
    db.delete(row)
    _commit(db, "DELETE")

    logger.info("Deleted %s %s", LABEL_FOR_KIND[resolved_kind], source_id)
    return {"ok": True, "kind": resolved_kind}
