"""
walletbank/app.py

FastAPI application entrypoint for the wallet bank service.

This module wires together:
- Logging configuration (file-based under logs/)
- CORS and request-logging middleware
- Error rendering: every failure is answered as {"error": "..."}
- Resource routers under walletbank.api (auth, balance, transactions, loans)
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from walletbank import __version__, config
from walletbank.db import session as db_session_module
from walletbank.errors import WalletBankError
from walletbank.logging_config import get_logger, setup_logging
from walletbank.api.auth import router as auth_router
from walletbank.api.balance import router as balance_router
from walletbank.api.loans import router as loans_router
from walletbank.api.transactions import router as transactions_router

# Configure logging before creating the app
setup_logging()
logger = get_logger("walletbank")

app = FastAPI(title="Wallet Bank API", version=__version__)

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]

# Permissive CORS headers on actual requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
)


@app.middleware("http")
async def answer_options(request: Request, call_next):
    """
    Every OPTIONS request (preflight or not) gets 200 with CORS headers and no body.
    """
    if request.method != "OPTIONS":
        return await call_next(request)

    origin = request.headers.get("origin")
    if "*" in config.CORS_ORIGINS:
        allow_origin = "*"
    elif origin in config.CORS_ORIGINS:
        allow_origin = origin
    else:
        allow_origin = None

    headers = {
        "Access-Control-Allow-Methods": ", ".join(CORS_METHODS),
        "Access-Control-Allow-Headers": ", ".join(CORS_HEADERS),
        "Vary": "Origin",
    }
    if allow_origin:
        headers["Access-Control-Allow-Origin"] = allow_origin
    return Response(status_code=200, headers=headers)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Lightweight request logger to help trace API traffic.
    """
    try:
        body = await request.body()
        logger.info(
            "HTTP %s %s from %s body=%s",
            request.method,
            request.url.path,
            request.client.host if request.client else "?",
            body.decode(errors="ignore")[:200],
        )
    except Exception:
        logger.exception("Failed to read request body for logging")
    response = await call_next(request)
    return response


@app.exception_handler(WalletBankError)
async def wallet_bank_error_handler(request: Request, exc: WalletBankError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # unknown paths (404) and unsupported methods (405) land here
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, errors)
    if any(e.get("type") == "missing" for e in errors):
        message = "Missing required fields"
    else:
        message = "Invalid request payload"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # anything unmapped, e.g. a SQLAlchemyError on a read path
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/api/health")
async def health():
    """
    Simple health check endpoint.
    """
    return {"status": "healthy"}


# Route table: one router per resource, all under /api
app.include_router(auth_router, prefix="/api")
app.include_router(balance_router, prefix="/api")
app.include_router(transactions_router, prefix="/api")
app.include_router(loans_router, prefix="/api")


@app.on_event("startup")
async def on_startup():
    logger.info("Wallet bank starting up database=%s", db_session_module.DATABASE_URL.split("@")[-1])
    if config.AUTO_CREATE_TABLES:
        await db_session_module.init_models()


@app.on_event("shutdown")
async def on_shutdown():
    try:
        await db_session_module.dispose_engine()
    except Exception:
        logger.exception("Error disposing engine on shutdown")
    logger.info("Wallet bank shutting down")
