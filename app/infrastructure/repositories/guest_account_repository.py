"""
SQLAlchemy Implementation of Guest Account Repository.
"""

from typing import Any, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, StorageError
from app.domain.models.guest_account import GuestAccount
from app.domain.repositories.guest_account_repository import GuestAccountRepository
from app.domain.schemas.guest_account import GuestAccountPatch
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = structlog.get_logger(__name__)


class SQLAlchemyGuestAccountRepository(SQLAlchemyRepository[GuestAccount], GuestAccountRepository):
    """Guest account repository implementation using SQLAlchemy."""

    def get_by_username(self, username: str) -> Optional[GuestAccount]:
        return self.db.query(GuestAccount).filter(GuestAccount.username == username).first()

    def get_owned(self, account_id: int, admin_id: int) -> Optional[GuestAccount]:
        return (
            self.db.query(GuestAccount)
            .filter(GuestAccount.id == account_id, GuestAccount.created_by == admin_id)
            .first()
        )

    def list_by_creator(self, admin_id: int) -> List[GuestAccount]:
        return (
            self.db.query(GuestAccount)
            .filter(GuestAccount.created_by == admin_id)
            .order_by(GuestAccount.created_at.desc(), GuestAccount.id.desc())
            .all()
        )

    def create(self, obj_in: Any) -> GuestAccount:
        """Insert a guest account. A duplicate username raises ConflictError."""
        data = self._as_dict(obj_in)
        account = GuestAccount(**data)
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            username = data.get("username")
            if self.get_by_username(username) is not None:
                logger.info("Guest username taken at insert", username=username)
                raise ConflictError("Username already exists", details={"username": username}) from e
            logger.error("Guest account insert failed", username=username, error=str(e))
            raise StorageError("Failed to create guest user") from e
        self.db.refresh(account)
        return account

    def update_fields(self, account: GuestAccount, patch: GuestAccountPatch) -> GuestAccount:
        return self.update(account, patch.changes())
