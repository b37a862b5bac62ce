"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import AppError, app_error_handler, global_exception_handler

# Import all models so SQLAlchemy knows about them
from app.domain.models.admin import Admin  # noqa: F401
from app.domain.models.guest_account import GuestAccount  # noqa: F401
from app.domain.models.credential_notification import CredentialNotification  # noqa: F401

from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.guest_accounts import router as guest_accounts_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Guest Access Admin...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    from app.application.services.auth_service import ensure_default_admin
    db = SessionLocal()
    try:
        admin = ensure_default_admin(db)
        if admin:
            logger.info("Default admin created", email=admin.email)
    finally:
        db.close()

    yield

    logger.info("Guest Access Admin stopped")


app = FastAPI(
    title="Guest Access Admin",
    description="API Backend — provisioning of time-limited guest accounts",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Added last so it runs first on every request
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(guest_accounts_router)


@app.get("/")
def root():
    return {
        "name": "Guest Access Admin",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
