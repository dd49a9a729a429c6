from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from app.tuition.auth import AuthorizationError, require_admin_password
from app.tuition.modules.inquiries.service import InquiryStore, PersistenceError, serialize_record

bp = Blueprint("inquiries", __name__)


def _store() -> InquiryStore:
    return current_app.extensions["inquiry_store"]


def _payload() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@bp.errorhandler(AuthorizationError)
def _auth_error(e: AuthorizationError):
    return jsonify({"error": "Incorrect password"}), 401


@bp.errorhandler(PersistenceError)
def _persistence_error(e: PersistenceError):
    current_app.logger.exception("Database error on %s", request.path)
    return jsonify({"error": "Database error."}), 500


# ---------- Public ----------
@bp.post("/submit")
def submit():
    try:
        new_id = _store().create_record(_payload())
    except PersistenceError:
        current_app.logger.exception("Database insert error")
        return jsonify({"error": "Failed to submit response."}), 500
    return jsonify({"success": True, "id": new_id})


# ---------- Admin ----------
@bp.post("/responses")
@require_admin_password
def list_responses():
    records = _store().list_records()
    return jsonify([serialize_record(r) for r in records])


@bp.post("/actioned/<int:record_id>")
@require_admin_password
def mark_actioned(record_id: int):
    _store().set_actioned(record_id, True)
    return jsonify({"success": True})


@bp.post("/unactioned/<int:record_id>")
@require_admin_password
def mark_unactioned(record_id: int):
    _store().set_actioned(record_id, False)
    return jsonify({"success": True})


@bp.post("/delete-actioned")
@require_admin_password
def delete_actioned():
    _store().delete_actioned()
    return jsonify({"success": True})
