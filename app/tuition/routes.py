from flask import Blueprint, current_app

bp = Blueprint("routes", __name__)


@bp.get("/")
def index():
    return current_app.send_static_file("index.html")


@bp.get("/responses.html")
def responses_page():
    return current_app.send_static_file("responses.html")


@bp.get("/health")
def health():
    """Health check endpoint. Returns JSON."""
    return {"ok": True}


@bp.get("/healthz")
def healthz():
    """
    Fast health check for container liveness checks. No DB access, minimal overhead.
    """
    return "ok", 200
