import os
from dataclasses import dataclass

DEFAULT_ADMIN_PASSWORD = "CorrectHorseBatteryStaple"


@dataclass(frozen=True)
class Settings:
    env: str
    port: int
    db_path: str
    database_url: str
    admin_password: str
    log_level: str
    cors_origins: str | list[str]


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _parse_origins(raw: str) -> str | list[str]:
    if raw == "*":
        return raw
    return [o.strip() for o in raw.split(",") if o.strip()]


def load_settings() -> Settings:
    db_path = _getenv("DB_PATH", "responses.db")
    port = _getenv("PORT", "3000")
    return Settings(
        env=_getenv("ENV", "development"),
        port=int(port),
        db_path=db_path,
        # DATABASE_URL wins over DB_PATH so a hosted Postgres can be used instead of the SQLite file.
        database_url=_getenv("DATABASE_URL", f"sqlite:///{db_path}"),
        # Not stripped: the secret is compared verbatim.
        admin_password=os.environ.get("ADMIN_PASSWORD") or DEFAULT_ADMIN_PASSWORD,
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        # Allowed origins for /api/*: "*" or a comma-separated list.
        cors_origins=_parse_origins(_getenv("CORS_ORIGINS", "*")),
    )


def load_config() -> dict:
    s = load_settings()
    return {
        "ENV": s.env,
        "PORT": s.port,
        "DB_PATH": s.db_path,
        "DATABASE_URL": s.database_url,
        "ADMIN_PASSWORD": s.admin_password,
        "LOG_LEVEL": s.log_level,
        "CORS_ORIGINS": s.cors_origins,
        # form submissions are small; 1MB is plenty
        "MAX_CONTENT_LENGTH": 1 * 1024 * 1024,
    }
