"""Auth API routes — login, me."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.application.services.auth_service import authenticate_admin, create_access_token
from app.core.exceptions import UnauthorizedException
from app.domain.schemas.auth import AdminRead, LoginRequest, TokenResponse
from app.interfaces.api.deps import get_current_admin
from app.domain.models.admin import Admin

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    admin = authenticate_admin(db, body.email, body.password)
    if not admin:
        raise UnauthorizedException("Incorrect email or password")

    access_token = create_access_token(data={"sub": admin.email})

    return TokenResponse(
        access_token=access_token,
        admin=AdminRead.model_validate(admin),
    )


@router.get("/me", response_model=AdminRead)
def get_me(admin: Admin = Depends(get_current_admin)):
    return AdminRead.model_validate(admin)
