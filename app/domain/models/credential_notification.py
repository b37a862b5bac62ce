"""Credential notification log — one row per credential email attempt."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class CredentialNotification(Base):
    __tablename__ = "credential_notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    guest_account_id = Column(
        Integer, ForeignKey("guest_accounts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    recipient = Column(String(255), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, sent, logged, failed
    error = Column(Text, nullable=True)
    sent_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<CredentialNotification {self.recipient} - {self.status}>"
