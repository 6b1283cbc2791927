# financeirox/deps.py
# Role: Shared application-level dependencies.
#       Provides the standard SQLAlchemy database session dependency and the
#       identity dependency that resolves the current user's email from the
#       session cookie (or the single-user fallback).

"""
Shared dependencies for the FinanceiroX API.
"""

import logging
from typing import Generator

from fastapi import Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from db import SessionLocal
from financeirox import config
from financeirox.session import read_session, is_idle_expired, touch_session
from models import User

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
# Database dependency
# -------------------------------------------------------------------

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session and ensures it is closed.

    Typical usage in routes:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# -------------------------------------------------------------------
# Identity
# -------------------------------------------------------------------

def get_session_user(request: Request, db: Session) -> User | None:
    """
    User behind a valid, non-idle session cookie.

    Returns None when no cookie is sent. Raises 401 for a tampered or
    expired session, or one pointing at a deleted user.
    """
    raw = request.cookies.get(config.SESSION_COOKIE)
    if not raw:
        return None

    user_id = read_session(raw)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Sessão inválida.")

    if is_idle_expired(request.cookies.get(config.SESSION_LAST_COOKIE)):
        raise HTTPException(status_code=401, detail="Sessão expirada. Faça login novamente.")

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Usuário não encontrado.")
    return user


def get_user_email(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> str:
    """
    Email that scopes every transaction / source query.

    Session cookie first (refreshing its last-activity stamp), then
    FINX_SINGLE_USER_EMAIL; 401 when neither is available.
    """
    user = get_session_user(request, db)
    if user is not None:
        touch_session(response)
        return user.email

    if config.SINGLE_USER_EMAIL:
        return config.SINGLE_USER_EMAIL

    logger.warning("Unauthenticated request to %s", request.url.path)
    raise HTTPException(status_code=401, detail="Não autenticado.")
