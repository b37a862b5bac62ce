"""Guest service — business logic for provisioning guest accounts.

Every operation receives the acting admin explicitly as an AdminContext.
Accounts are only visible to the admin who created them; an account owned by
someone else is reported exactly like a missing one.
"""

import re
import secrets
import string
from datetime import datetime
from typing import Callable, List, Optional

import structlog
from sqlalchemy.orm import Session

from app.application.services.auth_service import hash_password
from app.application.services.expiration_service import (
    apply_duration,
    as_utc,
    guest_status,
    utcnow,
    validate_duration,
)
from app.application.services.notification_service import NotificationResult, send_credentials
from app.config import get_settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.domain.models.guest_account import GuestAccount
from app.domain.repositories.guest_account_repository import GuestAccountRepository
from app.domain.schemas.auth import AdminContext
from app.domain.schemas.guest_account import (
    GuestAccountCreate,
    GuestAccountCreated,
    GuestAccountPatch,
    GuestAccountRead,
    GuestAccountUpdate,
    GuestStatusToggled,
)

settings = get_settings()
logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "!@#$%"
REQUIRED_CONTACT_FIELDS = ("full_name", "email", "phone_number")

Notifier = Callable[[Session, GuestAccount, str], NotificationResult]


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def derive_username(admin_email: str, base_username: str) -> str:
    """Build `<base>_<domain prefix>` from the admin's email.

    "a@sub.example.com" + "bob" -> "bob_sub". Inputs are used as given.
    """
    if "@" not in admin_email:
        raise ValidationError("Admin email is malformed", field="admin_email")
    domain = admin_email.split("@")[1]
    if "." not in domain:
        raise ValidationError("Admin email domain is malformed", field="admin_email")
    domain_prefix = domain.split(".")[0]
    if not domain_prefix:
        raise ValidationError("Admin email domain is malformed", field="admin_email")
    return f"{base_username}_{domain_prefix}"


def generate_password(length: Optional[int] = None) -> str:
    length = length or settings.GENERATED_PASSWORD_LENGTH
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def to_read(account: GuestAccount, now: Optional[datetime] = None) -> GuestAccountRead:
    return GuestAccountRead(
        id=account.id,
        username=account.username,
        full_name=account.full_name,
        email=account.email,
        phone_number=account.phone_number,
        expires_at=as_utc(account.expires_at),
        is_active=account.is_active,
        status=guest_status(account.expires_at, account.is_active, now).value,
        created_by=account.created_by,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def _validate_contact(payload: GuestAccountCreate) -> None:
    missing = [f for f in REQUIRED_CONTACT_FIELDS if not getattr(payload, f)]
    if missing:
        raise ValidationError(
            "Full name, email, and phone number are required",
            field=missing[0],
            details={"missing": missing},
        )
    if not is_valid_email(payload.email):
        raise ValidationError("Email address is malformed", field="email")
    if not payload.base_username:
        raise ValidationError("Base username is required", field="base_username")


def create_guest_account(
    db: Session,
    repo: GuestAccountRepository,
    admin: AdminContext,
    payload: GuestAccountCreate,
    now: Optional[datetime] = None,
    notify: Optional[Notifier] = None,
) -> GuestAccountCreated:
    """Create a guest account owned by `admin` and email its credentials.

    A failed email does not undo the account; the result reports it in
    `email_sent` / `email_message`.

    Raises:
        ValidationError: missing/malformed contact fields, malformed admin
            email, or an invalid expiration.
        ConflictError: the derived username is taken.
    """
    _validate_contact(payload)
    if not is_valid_email(admin.email):
        raise ValidationError("Admin email is malformed", field="admin_email")
    username = derive_username(admin.email, payload.base_username)
    duration = validate_duration(payload.expiration)

    # Friendly early error; the unique index still decides concurrent inserts
    if repo.get_by_username(username) is not None:
        logger.info("Guest username already exists", username=username, admin_id=admin.id)
        raise ConflictError("Username already exists", details={"username": username})

    now = now or utcnow()
    plain_password = payload.password or generate_password()

    account = repo.create(
        {
            "username": username,
            "password_hash": hash_password(plain_password),
            "expires_at": apply_duration(now, duration),
            "created_by": admin.id,
            "full_name": payload.full_name,
            "email": payload.email,
            "phone_number": payload.phone_number,
        }
    )
    logger.info(
        "Guest account created",
        guest_id=account.id,
        username=username,
        admin_id=admin.id,
        expires_at=account.expires_at.isoformat(),
    )

    notify = notify or send_credentials
    result = notify(db, account, plain_password)

    return GuestAccountCreated(
        user=to_read(account, now),
        plain_password=plain_password,
        email_sent=result.success,
        email_message=result.message,
    )


def list_guest_accounts(
    repo: GuestAccountRepository, admin: AdminContext, now: Optional[datetime] = None
) -> List[GuestAccountRead]:
    """List the admin's guest accounts, newest first, with derived status."""
    now = now or utcnow()
    return [to_read(a, now) for a in repo.list_by_creator(admin.id)]


def get_owned_account(repo: GuestAccountRepository, admin: AdminContext, account_id: int) -> GuestAccount:
    account = repo.get_owned(account_id, admin.id)
    if account is None:
        raise NotFoundError("Guest user not found")
    return account


def build_patch(update: GuestAccountUpdate, now: datetime) -> GuestAccountPatch:
    """Turn an update request into a patch.

    A relative expiration replaces expires_at (it is not added to the old
    value) and wins over an absolute expires_at sent alongside it.
    """
    expires_at = None
    if update.expiration is not None:
        expires_at = apply_duration(now, validate_duration(update.expiration))
    elif update.expires_at is not None:
        expires_at = as_utc(update.expires_at)

    patch = GuestAccountPatch(is_active=update.is_active, expires_at=expires_at)
    if patch.is_empty():
        raise ValidationError("No valid fields to update", field="body")
    return patch


def update_guest_account(
    repo: GuestAccountRepository,
    admin: AdminContext,
    account_id: int,
    update: GuestAccountUpdate,
    now: Optional[datetime] = None,
) -> GuestAccountRead:
    account = get_owned_account(repo, admin, account_id)
    now = now or utcnow()
    patch = build_patch(update, now)

    account = repo.update_fields(account, patch)
    logger.info("Guest account updated", guest_id=account.id, admin_id=admin.id, fields=sorted(patch.changes()))
    return to_read(account, now)


def toggle_guest_status(
    repo: GuestAccountRepository,
    admin: AdminContext,
    account_id: int,
    now: Optional[datetime] = None,
) -> GuestStatusToggled:
    """Flip is_active. expires_at is left untouched."""
    account = get_owned_account(repo, admin, account_id)
    account = repo.update_fields(account, GuestAccountPatch(is_active=not account.is_active))
    logger.info("Guest account status toggled", guest_id=account.id, admin_id=admin.id, is_active=account.is_active)

    return GuestStatusToggled(
        id=account.id,
        is_active=account.is_active,
        status=guest_status(account.expires_at, account.is_active, now).value,
        message=f"User {'activated' if account.is_active else 'deactivated'} successfully",
    )


def delete_guest_account(repo: GuestAccountRepository, admin: AdminContext, account_id: int) -> None:
    account = get_owned_account(repo, admin, account_id)
    repo.delete(account)
    logger.info("Guest account deleted", guest_id=account_id, admin_id=admin.id)
