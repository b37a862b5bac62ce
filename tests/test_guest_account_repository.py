from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import ConflictError
from app.domain.models.guest_account import GuestAccount
from app.domain.schemas.guest_account import GuestAccountPatch
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories.guest_account_repository import SQLAlchemyGuestAccountRepository

UTC = timezone.utc
EXPIRES = datetime(2030, 5, 1, 12, 0, tzinfo=UTC)


def _row(admin_id, username="bob_sub", **overrides):
    data = {
        "username": username,
        "password_hash": "not-a-real-hash",
        "expires_at": EXPIRES,
        "created_by": admin_id,
        "full_name": "Bob Guest",
        "email": "bob@guest.org",
        "phone_number": "+4712345678",
    }
    data.update(overrides)
    return data


def test_unique_username_enforced_by_storage(admin):
    # Two independent sessions that both skipped the friendly pre-check
    first_session, second_session = SessionLocal(), SessionLocal()
    try:
        first = SQLAlchemyGuestAccountRepository(first_session, GuestAccount)
        second = SQLAlchemyGuestAccountRepository(second_session, GuestAccount)

        first.create(_row(admin.id))
        with pytest.raises(ConflictError) as excinfo:
            second.create(_row(admin.id, email="someone@else.org"))

        assert excinfo.value.details == {"username": "bob_sub"}
        assert second_session.query(GuestAccount).filter_by(username="bob_sub").count() == 1
    finally:
        first_session.close()
        second_session.close()


def test_update_fields_writes_only_present_fields(repo, admin):
    account = repo.create(_row(admin.id))

    repo.update_fields(account, GuestAccountPatch(is_active=False))
    assert account.is_active is False
    assert account.expires_at.replace(tzinfo=UTC) == EXPIRES

    new_expiry = EXPIRES + timedelta(days=30)
    repo.update_fields(account, GuestAccountPatch(expires_at=new_expiry))
    assert account.is_active is False
    assert account.expires_at.replace(tzinfo=UTC) == new_expiry


def test_get_owned_filters_by_creator(repo, admin, other_admin):
    account = repo.create(_row(admin.id))
    assert repo.get_owned(account.id, admin.id).id == account.id
    assert repo.get_owned(account.id, other_admin.id) is None


def test_list_by_creator_newest_first(repo, admin, other_admin):
    repo.create(_row(admin.id, username="one_sub"))
    repo.create(_row(admin.id, username="two_sub"))
    repo.create(_row(other_admin.id, username="three_other"))

    assert [a.username for a in repo.list_by_creator(admin.id)] == ["two_sub", "one_sub"]
