from __future__ import annotations

from pathlib import Path

from flask import Flask
from sqlalchemy import create_engine, event, inspect as sa_inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from app.tuition.models import Base


def sqlite_file_path(db_url: str) -> Path | None:
    """
    Filesystem path of a file-backed SQLite URL, or None for any other database.
    """
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def ensure_storage_dir(db_url: str) -> None:
    path = sqlite_file_path(db_url)
    if path is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(db_url: str) -> Engine:
    engine_kwargs: dict[str, object] = {
        "future": True,
        "pool_pre_ping": True,
    }
    if db_url.startswith("postgres"):
        engine_kwargs.update(
            {
                "pool_recycle": 1800,
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
            }
        )
    return create_engine(db_url, **engine_kwargs)


def add_missing_columns(engine: Engine) -> list[str]:
    """
    Add nullable model columns missing from existing tables.

    Databases written by older form revisions lack e.g. childName; create_all()
    skips tables that already exist, so they are patched here.
    """
    insp = sa_inspect(engine)
    quote = engine.dialect.identifier_preparer.quote
    added: list[str] = []
    for table in Base.metadata.sorted_tables:
        if not insp.has_table(table.name):
            continue
        existing = {c["name"] for c in insp.get_columns(table.name)}
        for col in table.columns:
            if col.name in existing or not col.nullable:
                continue
            col_type = col.type.compile(dialect=engine.dialect)
            with engine.begin() as conn:
                conn.execute(text(f"ALTER TABLE {quote(table.name)} ADD COLUMN {quote(col.name)} {col_type}"))
            added.append(f"{table.name}.{col.name}")
    return added


def init_db(app: Flask) -> None:
    """
    Startup sequence: storage directory -> engine -> schema.

    Runs once per process; any failure propagates to create_app().
    """
    db_url = app.config["DATABASE_URL"]
    ensure_storage_dir(db_url)
    engine = create_db_engine(db_url)
    if app.config.get("ENV") != "production":
        @event.listens_for(engine, "checkout")
        def _receive_checkout(dbapi_connection, connection_record, connection_proxy):  # type: ignore[no-redef]
            app.logger.debug("DB connection checkout from pool")

    Base.metadata.create_all(bind=engine)
    added = add_missing_columns(engine)
    if added:
        app.logger.warning("Added missing columns to existing schema: %s", ", ".join(added))
    app.logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))

    app.extensions["sqlalchemy_engine"] = engine
    app.extensions["sqlalchemy_sessionmaker"] = sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
