# routes_root.py
"""
Root / basic endpoints (landing, health).
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from financeirox.deps import get_db
from models import Transaction

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
def read_root():
    """
    Simple landing endpoint.
    """
    return {"message": "FinanceiroX API is running"}


@router.get("/api/health")
def health(db: Session = Depends(get_db)):
    """
    Database reachability: reads at most one transaction id.
    """
    try:
        rows = db.query(Transaction.id).limit(1).all()
    except SQLAlchemyError as exc:
        logger.exception("Health check failed: %s", exc)
        return JSONResponse({"ok": False, "reason": "Banco de dados indisponível."}, status_code=500)
    return {"ok": True, "rows": len(rows)}
