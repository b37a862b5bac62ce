"""Pydantic schemas for guest accounts."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator


class GuestAccountCreate(BaseModel):
    # Presence and shape are checked by the guest service so errors name the field
    base_username: Optional[str] = None
    password: Optional[str] = None
    expiration: Optional[Any] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("base_username", "full_name", "email", "phone_number")
    @classmethod
    def strip_whitespace(cls, value: Optional[str]) -> Optional[str]:
        # password is kept exactly as sent
        return value.strip() if value is not None else value


class GuestAccountUpdate(BaseModel):
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None
    expiration: Optional[Any] = None


class GuestAccountPatch(BaseModel):
    """Fields to write on an existing guest account; None means untouched."""
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.changes()


class GuestAccountRead(BaseModel):
    id: int
    username: str
    full_name: str
    email: str
    phone_number: str
    expires_at: datetime
    is_active: bool
    status: str
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GuestAccountCreated(BaseModel):
    user: GuestAccountRead
    plain_password: str
    email_sent: bool
    email_message: str


class GuestStatusToggled(BaseModel):
    id: int
    is_active: bool
    status: str
    message: str
