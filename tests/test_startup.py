"""Tests for configuration loading and the startup sequence."""
import pytest

from app.tuition import create_app
from app.tuition.config import DEFAULT_ADMIN_PASSWORD, load_config, load_settings
from app.tuition.db import sqlite_file_path


@pytest.fixture()
def clean_env(monkeypatch):
    for k in ("ENV", "PORT", "DB_PATH", "DATABASE_URL", "ADMIN_PASSWORD", "LOG_LEVEL", "CORS_ORIGINS"):
        monkeypatch.delenv(k, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()
    assert s.env == "development"
    assert s.port == 3000
    assert s.db_path == "responses.db"
    assert s.database_url == "sqlite:///responses.db"
    assert s.admin_password == DEFAULT_ADMIN_PASSWORD
    assert s.log_level == "INFO"
    assert s.cors_origins == "*"


def test_env_overrides(clean_env, tmp_path):
    clean_env.setenv("PORT", "8081")
    clean_env.setenv("DB_PATH", str(tmp_path / "x.db"))
    clean_env.setenv("ADMIN_PASSWORD", "s3cret ")
    clean_env.setenv("LOG_LEVEL", "debug")
    s = load_settings()
    assert s.port == 8081
    assert s.database_url == f"sqlite:///{tmp_path / 'x.db'}"
    assert s.admin_password == "s3cret "
    assert s.log_level == "DEBUG"


def test_database_url_wins_over_db_path(clean_env):
    clean_env.setenv("DB_PATH", "ignored.db")
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@db/tuition")
    cfg = load_config()
    assert cfg["DATABASE_URL"] == "postgresql://u:p@db/tuition"


def test_sqlite_file_path():
    assert str(sqlite_file_path("sqlite:////data/app/responses.db")) == "/data/app/responses.db"
    assert sqlite_file_path("sqlite://") is None
    assert sqlite_file_path("sqlite:///:memory:") is None
    assert sqlite_file_path("postgresql://u:p@db/tuition") is None


def test_startup_creates_storage_directory(clean_env, tmp_path):
    db_file = tmp_path / "nested" / "dir" / "responses.db"
    clean_env.setenv("DB_PATH", str(db_file))
    app = create_app()
    assert db_file.parent.is_dir()
    assert db_file.exists()
    assert app.extensions["inquiry_store"] is not None


def test_store_and_secret_are_per_app(clean_env, tmp_path):
    clean_env.setenv("DB_PATH", str(tmp_path / "a.db"))
    clean_env.setenv("ADMIN_PASSWORD", "first")
    a = create_app()
    clean_env.setenv("DB_PATH", str(tmp_path / "b.db"))
    clean_env.setenv("ADMIN_PASSWORD", "second")
    b = create_app()

    a.test_client().post("/api/submit", json={"parentName": "only-in-a"})
    assert len(a.test_client().post("/api/responses", json={"password": "first"}).json) == 1
    assert b.test_client().post("/api/responses", json={"password": "first"}).status_code == 401
    assert b.test_client().post("/api/responses", json={"password": "second"}).json == []


def test_startup_fails_when_storage_dir_cannot_be_created(clean_env, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    clean_env.setenv("DB_PATH", str(blocker / "responses.db"))
    with pytest.raises(RuntimeError, match="Could not initialise storage"):
        create_app()


def test_production_refuses_default_password(clean_env, tmp_path):
    clean_env.setenv("ENV", "production")
    clean_env.setenv("DB_PATH", str(tmp_path / "prod.db"))
    with pytest.raises(RuntimeError, match="ADMIN_PASSWORD"):
        create_app()


def test_production_with_password_starts(clean_env, tmp_path):
    clean_env.setenv("ENV", "production")
    clean_env.setenv("DB_PATH", str(tmp_path / "prod.db"))
    clean_env.setenv("ADMIN_PASSWORD", "a-real-secret")
    app = create_app()
    assert app.config["ADMIN_PASSWORD"] == "a-real-secret"


def test_cors_origins_list(clean_env):
    clean_env.setenv("CORS_ORIGINS", " https://tuition.example, https://www.tuition.example ,")
    assert load_settings().cors_origins == ["https://tuition.example", "https://www.tuition.example"]


def test_cors_allows_any_origin_by_default(clean_env, tmp_path):
    clean_env.setenv("DB_PATH", str(tmp_path / "responses.db"))
    client = create_app().test_client()
    r = client.post("/api/submit", json={"parentName": "x"}, headers={"Origin": "https://form.example"})
    assert r.status_code == 200
    assert r.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_restricted_to_configured_origins(clean_env, tmp_path):
    clean_env.setenv("DB_PATH", str(tmp_path / "responses.db"))
    clean_env.setenv("CORS_ORIGINS", "https://tuition.example")
    client = create_app().test_client()

    r = client.post("/api/submit", json={}, headers={"Origin": "https://tuition.example"})
    assert r.headers["Access-Control-Allow-Origin"] == "https://tuition.example"

    r = client.post("/api/submit", json={}, headers={"Origin": "https://evil.example"})
    assert r.status_code == 200
    assert "Access-Control-Allow-Origin" not in r.headers


def test_cors_preflight_on_api(clean_env, tmp_path):
    clean_env.setenv("DB_PATH", str(tmp_path / "responses.db"))
    client = create_app().test_client()
    r = client.options(
        "/api/submit",
        headers={
            "Origin": "https://form.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert r.status_code == 200
    assert r.headers["Access-Control-Allow-Origin"] == "*"
    assert "POST" in r.headers["Access-Control-Allow-Methods"]
