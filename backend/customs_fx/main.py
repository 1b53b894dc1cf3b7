"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from customs_fx.config import get_settings
from customs_fx.database import init_db
from customs_fx.errors import AppError, Unauthenticated
from customs_fx.logging_config import get_logger, setup_logging
from customs_fx.routers import admin_users, auth, currencies, transactions

settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Started (env=%s)", settings.app_env)
    yield


app = FastAPI(
    title="Customs Declaration Currency Converter",
    description="Declaration and invoice amounts converted to THB at BOT or manual exchange rates",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.setdefault(".".join(loc) or "request", []).append(error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(auth.router)
app.include_router(currencies.router)
app.include_router(transactions.router)
app.include_router(admin_users.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
