"""
Scrooge Bank API: FastAPI application.

This is the entry point for the application.
All routers and error handlers are registered here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from scrooge_bank.config import get_settings
from scrooge_bank.logging_config import setup_logging, get_logger
from scrooge_bank.middleware import (
    SecurityHeadersMiddleware,
    limiter,
    rate_limit_exceeded_handler,
)
from scrooge_bank.models import Base
from scrooge_bank.models.base import engine
from scrooge_bank.api.health import router as health_router
from scrooge_bank.api.auth import router as auth_router
from scrooge_bank.api.accounts import router as accounts_router
from scrooge_bank.api.loans import router as loans_router
from scrooge_bank.api.transactions import router as transactions_router
from scrooge_bank.api.admin import router as admin_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Development convenience; managed databases are migrated with Alembic
    Base.metadata.create_all(bind=engine)
    logger.info("Scrooge Bank API started", extra={"extra": {"env": settings.ENVIRONMENT}})
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Accounts, loans and a transaction ledger behind bearer-token auth",
    lifespan=lifespan,
)

# --- Middleware ---
# Added innermost first: CORS wraps the security headers, which
# wrap the rate limit, so a 429 still carries both.

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error responses ---
# Every error body has the shape {"error": "<message>"}.

NOT_FOUND_MESSAGES = {
    "account_id": "Account not found",
    "loan_id": "Loan not found",
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # An id that cannot be a number names no record
    for error in errors:
        loc = error.get("loc", ())
        if loc and loc[0] == "path":
            message = NOT_FOUND_MESSAGES.get(loc[-1], "Not Found")
            return JSONResponse(status_code=404, content={"error": message})

    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"] if part != "body")
        message = f"{field}: {first['msg']}" if field else first["msg"]
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"resource": f"{request.method} {request.url.path}"},
    )
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or "Internal Server Error"},
    )


# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(accounts_router)
app.include_router(loans_router)
app.include_router(transactions_router)
app.include_router(admin_router)
