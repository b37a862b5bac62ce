"""FastAPI dependency — JWT auth."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.application.services.auth_service import decode_access_token, get_admin_by_email
from app.core.exceptions import UnauthorizedException
from app.domain.models.admin import Admin
from app.domain.schemas.auth import AdminContext

security = HTTPBearer(auto_error=False)


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Admin:
    """Extract and validate the current admin from the JWT token."""
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Invalid or expired token")

    email: Optional[str] = payload.get("sub")
    if email is None:
        raise UnauthorizedException("Invalid token")

    admin = get_admin_by_email(db, email)
    if admin is None or not admin.is_active:
        raise UnauthorizedException("Admin not found or inactive")

    return admin


def get_admin_context(admin: Admin = Depends(get_current_admin)) -> AdminContext:
    """Identity passed explicitly into every guest operation."""
    return AdminContext.model_validate(admin)
