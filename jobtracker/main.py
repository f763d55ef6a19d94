import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobtracker.config import settings
from jobtracker.core.errors import AppError
from jobtracker.database import init_db, engine
from jobtracker.logging_config import setup_logging
from jobtracker.routers import auth, calendar, companies, connections

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"

app = FastAPI(
    title="Job Tracker API",
    description="Job application tracking, action calendar, and connections.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(companies.router)
app.include_router(calendar.router)
app.include_router(connections.router)


def _validation_message(error: dict) -> str:
    field = ".".join(str(p) for p in error.get("loc", ())[1:]) or "request"
    if error.get("type") == "missing":
        return f"{field} is required"
    msg = error.get("msg", "Invalid request")
    return msg.removeprefix("Value error, ")


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("Server error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    errors = exc.errors()
    message = _validation_message(errors[0]) if errors else "Invalid request"
    details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]
    return JSONResponse(status_code=400, content={"error": message, "details": details})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


def check_production_settings() -> None:
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if not settings.session_cookie_secure:
            logger.warning("SESSION_COOKIE_SECURE is off in production; cookies will be sent over plain HTTP.")
    elif settings.secret_key == PLACEHOLDER_SECRET:
        logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")


@app.on_event("startup")
def on_startup():
    logger.info("Starting Job Tracker API")
    check_production_settings()
    init_db()


@app.get("/")
def root():
    return {"message": "Job Tracker API is running!"}
