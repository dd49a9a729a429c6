import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from app.tuition.config import DEFAULT_ADMIN_PASSWORD, load_config
from app.tuition.db import init_db
from app.tuition.routes import bp as routes_bp
from app.tuition.modules.inquiries.api import bp as inquiries_bp
from app.tuition.modules.inquiries.service import InquiryStore


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL") or "INFO"
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__, static_folder="static")
    app.config.from_mapping(load_config())
    app.json.sort_keys = False  # type: ignore[attr-defined]
    _configure_logging(app)

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if app.config["ADMIN_PASSWORD"] == DEFAULT_ADMIN_PASSWORD:
            raise RuntimeError("ADMIN_PASSWORD must be set to a strong value in production (not default).")

    # Storage dir -> engine -> schema. Nothing is served if this fails.
    try:
        init_db(app)
    except Exception as e:
        app.logger.critical("Startup failed: could not open storage at %s: %s", app.config.get("DB_PATH"), e)
        raise RuntimeError(f"Could not initialise storage: {e}") from e

    app.extensions["inquiry_store"] = InquiryStore(app.extensions["sqlalchemy_sessionmaker"])

    # Lets the form be hosted on a different origin than the API.
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    app.register_blueprint(routes_bp)
    app.register_blueprint(inquiries_bp, url_prefix="/api")

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        if request.path.startswith("/api/"):
            return jsonify({"error": e.description}), e.code
        return e

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        app.logger.exception("Unhandled 500 on %s", request.path)
        return jsonify({"error": "Internal server error."}), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
