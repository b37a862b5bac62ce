"""Interactively create an admin account."""

import getpass
import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.infrastructure.database import Base, SessionLocal, engine
from app.application.services.auth_service import create_admin, get_admin_by_email
from app.application.services.guest_service import is_valid_email
import app.domain.models.admin  # noqa: F401
import app.domain.models.guest_account  # noqa: F401
import app.domain.models.credential_notification  # noqa: F401


def main() -> int:
    name = input("Name: ").strip()
    email = input("Email: ").strip()
    if not is_valid_email(email):
        print(f"❌ Invalid email: {email}")
        return 1
    password = getpass.getpass("Password: ")
    if not password:
        print("❌ Password is required")
        return 1

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if get_admin_by_email(db, email):
            print(f"Admin '{email}' already exists.")
            return 1
        admin = create_admin(db, name=name or email, email=email, password=password)
        print(f"✅ Admin created (id={admin.id})")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
