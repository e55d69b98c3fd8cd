"""Riteway Admin API - driver accounts, loads, scale tickets and ratings."""
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from riteway_admin.core.config import REQUIRED_ENV_VARS, Settings, get_settings
from riteway_admin.core.logging import configure_logging, logger
from riteway_admin.routers import drivers
from riteway_admin.services.firebase import initialize_firebase, shutdown_firebase

SERVICE_NAME = "riteway-admin-api"
VERSION = "0.2.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    app.state.firebase = initialize_firebase(settings)
    logger.info("Riteway Admin API starting", version=VERSION, project_id=settings.fb_project_id)
    yield
    # Shutdown
    shutdown_firebase(app.state.firebase)
    logger.info("Riteway Admin API shutting down")


app = FastAPI(
    title="Riteway Admin API",
    description="Administrative read/aggregation API over driver accounts, deliveries, scale tickets and ratings",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(drivers.router)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "OK"


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": SERVICE_NAME}


def load_settings_or_exit() -> Settings:
    """Build settings, exiting the process when required variables are missing."""
    try:
        return get_settings()
    except ValidationError as exc:
        configure_logging()
        invalid = sorted({str(error["loc"][0]).upper() for error in exc.errors() if error.get("loc")})
        logger.error(
            "Missing or invalid required environment variables",
            invalid=invalid,
            required=list(REQUIRED_ENV_VARS),
        )
        sys.exit(1)


def run() -> None:
    import uvicorn

    settings = load_settings_or_exit()
    configure_logging(settings.log_level, settings.log_json)
    logger.info("Riteway Admin API listening", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
