"""
Guest Account Repository Interface.
Defines specific data access operations for guest accounts.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.guest_account import GuestAccount
from app.domain.schemas.guest_account import GuestAccountPatch


class GuestAccountRepository(BaseRepository[GuestAccount]):
    """Interface for guest-account-specific operations."""

    def get_by_username(self, username: str) -> Optional[GuestAccount]:
        """Look up a guest account by its (unique) username."""
        ...

    def get_owned(self, account_id: int, admin_id: int) -> Optional[GuestAccount]:
        """Get an account only if it was created by the given admin."""
        ...

    def list_by_creator(self, admin_id: int) -> List[GuestAccount]:
        """List accounts created by an admin, newest first."""
        ...

    def update_fields(self, account: GuestAccount, patch: GuestAccountPatch) -> GuestAccount:
        """Write the fields present in the patch."""
        ...
