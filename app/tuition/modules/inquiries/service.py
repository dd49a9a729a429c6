from __future__ import annotations

import json
import logging
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.tuition.modules.inquiries.models import InquiryRecord, utcnow

logger = logging.getLogger(__name__)

# Form field name -> column attribute. `needs` is handled separately.
TEXT_FIELDS = {
    "parentName": "parent_name",
    "childName": "child_name",
    "childAge": "child_age",
    "tuitionReason": "tuition_reason",
    "otherNeeds": "other_needs",
    "additionalInfo": "additional_info",
    "contactMethod": "contact_method",
    "phoneNumber": "phone_number",
    "emailAddress": "email_address",
    "otherContact": "other_contact",
}


# Signed 64-bit range; ids outside it cannot exist and do not bind on SQLite.
MIN_RECORD_ID = -(2**63)
MAX_RECORD_ID = 2**63 - 1


class PersistenceError(RuntimeError):
    pass


def coerce_text(value: Any) -> str | None:
    """Coerce a form value to text without validating it."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def normalize_needs(value: Any) -> list[str]:
    """
    Normalize the `needs` checkbox selection to an ordered list of strings.

    Accepts:
    - a list (kept in order, None items dropped)
    - a comma-joined string (legacy form encoding)
    - None -> []
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [coerce_text(v) for v in value if v is not None]  # type: ignore[misc]
    return [coerce_text(value)]  # type: ignore[list-item]


def encode_needs(value: Any) -> str:
    return json.dumps(normalize_needs(value))


def decode_needs(raw: str | None) -> list[str]:
    """Decode a stored `needs` value; rows written as comma-joined text are split."""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return normalize_needs(raw)
    if isinstance(value, list):
        return [str(v) for v in value]
    return normalize_needs(raw)


def serialize_record(record: InquiryRecord) -> dict[str, Any]:
    out: dict[str, Any] = {"id": record.id}
    for field, attr in TEXT_FIELDS.items():
        out[field] = getattr(record, attr)
    out["needs"] = decode_needs(record.needs)
    out["actioned"] = bool(record.actioned)
    out["submittedAt"] = record.submitted_at.isoformat() if record.submitted_at else None
    return out


class InquiryStore:
    """
    Persistence for inquiry submissions.

    Every operation runs in its own transaction and either commits fully or
    raises PersistenceError.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        s: Session = self._session_factory()
        try:
            yield s
            s.commit()
        except SQLAlchemyError as e:
            s.rollback()
            raise PersistenceError(str(e)) from e
        except Exception:
            s.rollback()
            raise
        finally:
            s.close()

    def create_record(self, fields: Mapping[str, Any]) -> int:
        values = {attr: coerce_text(fields.get(field)) for field, attr in TEXT_FIELDS.items()}
        with self._session() as s:
            record = InquiryRecord(
                **values,
                needs=encode_needs(fields.get("needs")),
                actioned=False,
                submitted_at=utcnow(),
            )
            s.add(record)
            s.flush()
            new_id = record.id
        logger.info("Inserted response id=%s", new_id)
        return new_id

    def list_records(self) -> list[InquiryRecord]:
        stmt = select(InquiryRecord).order_by(
            InquiryRecord.actioned.asc(),
            InquiryRecord.submitted_at.desc(),
            InquiryRecord.id.desc(),
        )
        with self._session() as s:
            return list(s.scalars(stmt).all())

    def get_record(self, record_id: int) -> InquiryRecord | None:
        if not MIN_RECORD_ID <= record_id <= MAX_RECORD_ID:
            return None
        with self._session() as s:
            return s.get(InquiryRecord, record_id)

    def set_actioned(self, record_id: int, value: bool) -> int:
        """
        Set the triage flag. An unknown id updates nothing and is not an error.
        Returns the number of rows affected.
        """
        if not MIN_RECORD_ID <= record_id <= MAX_RECORD_ID:
            # Cannot match any row; the driver would refuse to bind it.
            count = 0
        else:
            stmt = update(InquiryRecord).where(InquiryRecord.id == record_id).values(actioned=bool(value))
            with self._session() as s:
                count = s.execute(stmt).rowcount
        logger.info("Response id=%s actioned=%s (rows=%s)", record_id, bool(value), count)
        return count

    def delete_actioned(self) -> int:
        stmt = delete(InquiryRecord).where(InquiryRecord.actioned.is_(True))
        with self._session() as s:
            count = s.execute(stmt).rowcount
        logger.info("Deleted %s actioned responses", count)
        return count
