# routes_auth.py
"""
Account routes: signup, login / logout (cookie session) and /api/me.
"""

import logging

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from financeirox import config
from financeirox.deps import get_db
from financeirox.schemas import LoginRequest, SignupRequest
from financeirox.services.transactions import clean_text
from financeirox.session import (
    set_session_cookies,
    clear_session_cookies,
    touch_session,
    read_session,
    is_idle_expired,
)
from models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def _normalize_email(value: str | None) -> str | None:
    email = clean_text(value)
    return email.lower() if email else None


# -------------------------------------------------------------------
# Signup
# -------------------------------------------------------------------

@router.post("/signup", status_code=201)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    name = clean_text(body.name)
    email = _normalize_email(body.email)
    password = body.password or ""

    if not name or not email or not password or not body.confirm_password:
        raise HTTPException(status_code=400, detail="Preencha todos os campos obrigatórios.")

    if password != body.confirm_password:
        raise HTTPException(status_code=400, detail="As senhas não conferem.")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres.",
        )

    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="Já existe uma conta com esse e-mail.")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        job_type=clean_text(body.job_type),
    )
    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Signup failed for %s", email)
        raise HTTPException(status_code=500, detail="Erro interno ao criar conta.")

    logger.info("Created user id=%s", user.id)
    return {"message": "Conta criada com sucesso."}


# -------------------------------------------------------------------
# Login / logout
# -------------------------------------------------------------------

@router.post("/login")
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    email = _normalize_email(body.email)
    if not email or not body.password:
        raise HTTPException(status_code=400, detail="E-mail e senha são obrigatórios.")

    user = db.query(User).filter(User.email == email).first()
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="E-mail ou senha inválidos.")

    set_session_cookies(response, user.id)
    logger.info("User id=%s logged in", user.id)

    return {"message": "Login realizado com sucesso.", "user": user.to_dict()}


@router.post("/logout")
def logout(response: Response):
    clear_session_cookies(response)
    return {"message": "Logout realizado com sucesso."}


# -------------------------------------------------------------------
# Current user
# -------------------------------------------------------------------

@router.get("/me")
def me(request: Request, response: Response, db: Session = Depends(get_db)):
    """
    Current user. Without a session cookie, falls back to the account
    registered under FINX_SINGLE_USER_EMAIL (if configured).
    """
    raw = request.cookies.get(config.SESSION_COOKIE)

    if raw:
        user_id = read_session(raw)
        if user_id is None:
            raise HTTPException(status_code=400, detail="Sessão inválida.")
        if is_idle_expired(request.cookies.get(config.SESSION_LAST_COOKIE)):
            raise HTTPException(status_code=401, detail="Sessão expirada. Faça login novamente.")

        user = db.get(User, user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="Usuário não encontrado.")

        touch_session(response)
        return user.to_dict()

    if config.SINGLE_USER_EMAIL:
        user = db.query(User).filter(User.email == config.SINGLE_USER_EMAIL).first()
        if user is None:
            raise HTTPException(status_code=404, detail="Usuário não encontrado.")
        return user.to_dict()

    raise HTTPException(status_code=401, detail="Não autenticado.")


# -------------------------------------------------------------------
# OAuth callback
# -------------------------------------------------------------------

@router.api_route("/auth/{path:path}", methods=["GET", "POST"])
def oauth_callback(path: str):
    """
    Third-party sign-in is not enabled; login goes through /api/login.
    """
    raise HTTPException(status_code=404, detail="Login social não está habilitado.")
