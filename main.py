# main.py
# Role: Application entry point for FinanceiroX.
#       Configures logging, creates database tables, installs the JSON
#       error handlers, and registers all route modules.

"""
Main FastAPI app for FinanceiroX.

Here we only:
- set up logging
- create DB tables
- map errors to {"error": "..."} responses
- include route modules
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from db import Base, engine
from financeirox import config
from financeirox.routes_root import router as root_router
from financeirox.routes_auth import router as auth_router
from financeirox.routes_sources import router as sources_router
from financeirox.routes_transactions import router as transactions_router
from financeirox.routes_reports import router as reports_router


# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("financeirox")


# -------------------------------------------------------------------
# App & DB setup
# -------------------------------------------------------------------

# Create database tables (only if they don't exist yet).
Base.metadata.create_all(bind=engine)

# FastAPI application instance
app = FastAPI(title="FinanceiroX")


# -------------------------------------------------------------------
# Error handlers
# -------------------------------------------------------------------

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies / query values are plain 400s for the client
    logger.info("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse({"error": "Requisição inválida."}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Erro interno do servidor."}, status_code=500)


# -------------------------------------------------------------------
# Include routers
# -------------------------------------------------------------------

# Landing + health check
app.include_router(root_router)

# Signup, login/logout, current user
app.include_router(auth_router)

# Income sources / expense categories
app.include_router(sources_router)

# Transactions CRUD + CSV export
app.include_router(transactions_router)

# Tax, chart, balance and breakdown reports
app.include_router(reports_router)
