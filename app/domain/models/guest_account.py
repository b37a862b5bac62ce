"""Guest account domain model — maps to the 'guest_accounts' table."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class GuestAccount(Base):
    __tablename__ = "guest_accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Uniqueness is enforced here, not by the pre-insert lookup
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(Integer, ForeignKey("admins.id", ondelete="CASCADE"), nullable=False, index=True)

    # Contact details
    full_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    phone_number = Column(String(30), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<GuestAccount {self.username}>"
