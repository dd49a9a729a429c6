"""
Release-phase helper.

Goal:
- Refuse to deploy production with the default admin password.
- Run alembic migrations against DATABASE_URL (or the DB_PATH SQLite file).

Usage:
  python scripts/release.py
"""

from __future__ import annotations

import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def run_release(database_url: str | None = None) -> None:
    from dotenv import load_dotenv

    from app.tuition.config import DEFAULT_ADMIN_PASSWORD, load_settings

    load_dotenv()
    settings = load_settings()
    db_url = (database_url or settings.database_url).strip()
    env = settings.env.lower()
    if env in ("prod", "production") and settings.admin_password == DEFAULT_ADMIN_PASSWORD:
        raise RuntimeError("Refusing to release with the default ADMIN_PASSWORD in production.")

    print("=== Tuition release start ===", flush=True)
    print(f"ENV={env or '(unset)'}", flush=True)
    print("Running Alembic migrations...", flush=True)

    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(cfg, "head")
    print("Migrations complete.", flush=True)
    print("=== Tuition release done ===", flush=True)


def main() -> None:
    run_release()


if __name__ == "__main__":
    main()
