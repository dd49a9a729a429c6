from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column

from app.tuition.models import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class InquiryRecord(Base):
    """
    One tuition-inquiry form submission.

    Only `actioned` changes after insert; rows are removed in bulk once actioned.
    Column names are camelCase so existing responses.db files open unchanged.
    """

    __tablename__ = "responses"
    # AUTOINCREMENT keeps SQLite from handing out ids of deleted rows again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Who / what
    parent_name: Mapped[str | None] = mapped_column("parentName", Text, nullable=True)
    child_name: Mapped[str | None] = mapped_column("childName", Text, nullable=True)
    child_age: Mapped[str | None] = mapped_column("childAge", Text, nullable=True)
    tuition_reason: Mapped[str | None] = mapped_column("tuitionReason", Text, nullable=True)
    needs: Mapped[str | None] = mapped_column(Text, nullable=True, default="[]")  # JSON array of strings
    other_needs: Mapped[str | None] = mapped_column("otherNeeds", Text, nullable=True)
    additional_info: Mapped[str | None] = mapped_column("additionalInfo", Text, nullable=True)

    # Contact
    contact_method: Mapped[str | None] = mapped_column("contactMethod", Text, nullable=True)  # e.g. "phone", "email", "other"
    phone_number: Mapped[str | None] = mapped_column("phoneNumber", Text, nullable=True)
    email_address: Mapped[str | None] = mapped_column("emailAddress", Text, nullable=True)
    other_contact: Mapped[str | None] = mapped_column("otherContact", Text, nullable=True)

    # Triage
    actioned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    submitted_at: Mapped[datetime] = mapped_column(
        "submittedAt", DateTime(timezone=False), nullable=False, default=utcnow, server_default=func.current_timestamp()
    )
