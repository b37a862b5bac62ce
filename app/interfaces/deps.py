"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.domain.models.guest_account import GuestAccount
from app.domain.repositories.guest_account_repository import GuestAccountRepository
from app.infrastructure.repositories.guest_account_repository import SQLAlchemyGuestAccountRepository


def get_guest_account_repository(db: Session = Depends(get_db)) -> GuestAccountRepository:
    """Get guest account repository instance."""
    return SQLAlchemyGuestAccountRepository(db, GuestAccount)
