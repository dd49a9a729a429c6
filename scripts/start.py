#!/usr/bin/env python3
"""
Production entry point: migrate the database, then hand the process to gunicorn.

Reads PORT / WEB_CONCURRENCY through the app settings so the bind address and
the dev server (app/wsgi.py) agree.

Usage:
    python scripts/start.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def gunicorn_argv(port: int, workers: int) -> list[str]:
    return [
        "gunicorn",
        "app.wsgi:app",
        "--bind", f"0.0.0.0:{port}",
        "--workers", str(workers),
        "--timeout", "60",
        "--access-logfile", "-",
        "--error-logfile", "-",
    ]


def _workers() -> int:
    raw = (os.environ.get("WEB_CONCURRENCY") or "2").strip()
    return max(1, int(raw))


def main() -> None:
    from dotenv import load_dotenv

    from app.tuition.config import load_settings

    load_dotenv()
    try:
        settings = load_settings()
        workers = _workers()
    except ValueError as e:
        print(f"ERROR: invalid PORT or WEB_CONCURRENCY: {e}", flush=True)
        sys.exit(1)
    if not 1 <= settings.port <= 65535:
        print(f"ERROR: PORT {settings.port} out of range 1-65535.", flush=True)
        sys.exit(1)

    from scripts import release

    try:
        release.run_release(settings.database_url)
    except Exception as e:
        print(f"Release failed: {e}", flush=True)
        sys.exit(1)

    print(f"Starting gunicorn on 0.0.0.0:{settings.port} with {workers} workers", flush=True)
    # exec so gunicorn becomes PID 1 and receives signals directly
    os.execvp("gunicorn", gunicorn_argv(settings.port, workers))


if __name__ == "__main__":
    main()
