# db.py
# Role: Database bootstrap for FinanceiroX.
#       Defines the SQLAlchemy engine, session factory, and declarative Base.
#       Also ensures the on-disk database directory exists when the default SQLite file is used.

"""
Database setup for FinanceiroX.

- Uses FINX_DATABASE_URL when set (any SQLAlchemy URL)
- Otherwise uses SQLite at: <project_root>/database/finance.db
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from financeirox.config import DATABASE_URL as CONFIGURED_URL

# Base directory of the project (where this module lives)
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _default_sqlite_url() -> str:
    db_dir = os.path.join(BASE_DIR, "database")
    os.makedirs(db_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(db_dir, 'finance.db')}"


DATABASE_URL = CONFIGURED_URL or _default_sqlite_url()

engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    # FastAPI serves sync routes from a threadpool
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty DB
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, **engine_kwargs)

# Standard session factory used via dependency injection (see financeirox/deps.py:get_db)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Declarative base class for ORM models
Base = declarative_base()
