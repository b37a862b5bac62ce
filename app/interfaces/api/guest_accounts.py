"""Guest account API routes — create, list, update, toggle, delete."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_admin_context
from app.interfaces.deps import get_guest_account_repository
from app.domain.repositories.guest_account_repository import GuestAccountRepository
from app.domain.schemas.auth import AdminContext
from app.domain.schemas.guest_account import (
    GuestAccountCreate,
    GuestAccountCreated,
    GuestAccountRead,
    GuestAccountUpdate,
    GuestStatusToggled,
)
from app.application.services import guest_service

router = APIRouter(prefix="/api/guest-users", tags=["Guest Users"])


@router.post("", response_model=GuestAccountCreated, status_code=status.HTTP_201_CREATED)
def create_guest_user(
    body: GuestAccountCreate,
    db: Session = Depends(get_db),
    repo: GuestAccountRepository = Depends(get_guest_account_repository),
    admin: AdminContext = Depends(get_admin_context),
):
    return guest_service.create_guest_account(db, repo, admin, body)


@router.get("", response_model=List[GuestAccountRead])
def list_guest_users(
    repo: GuestAccountRepository = Depends(get_guest_account_repository),
    admin: AdminContext = Depends(get_admin_context),
):
    return guest_service.list_guest_accounts(repo, admin)


@router.get("/{guest_id}", response_model=GuestAccountRead)
def get_guest_user(
    guest_id: int,
    repo: GuestAccountRepository = Depends(get_guest_account_repository),
    admin: AdminContext = Depends(get_admin_context),
):
    return guest_service.to_read(guest_service.get_owned_account(repo, admin, guest_id))


@router.patch("/{guest_id}", response_model=GuestAccountRead)
def update_guest_user(
    guest_id: int,
    body: GuestAccountUpdate,
    repo: GuestAccountRepository = Depends(get_guest_account_repository),
    admin: AdminContext = Depends(get_admin_context),
):
    return guest_service.update_guest_account(repo, admin, guest_id, body)


@router.patch("/{guest_id}/toggle-status", response_model=GuestStatusToggled)
def toggle_guest_user_status(
    guest_id: int,
    repo: GuestAccountRepository = Depends(get_guest_account_repository),
    admin: AdminContext = Depends(get_admin_context),
):
    return guest_service.toggle_guest_status(repo, admin, guest_id)


@router.delete("/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guest_user(
    guest_id: int,
    repo: GuestAccountRepository = Depends(get_guest_account_repository),
    admin: AdminContext = Depends(get_admin_context),
):
    guest_service.delete_guest_account(repo, admin, guest_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
