from pathlib import Path

from alembic import command
from alembic.config import Config
import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError


def _make_alembic_config(db_url: str) -> Config:
    backend_dir = Path(__file__).resolve().parents[1]
    alembic_ini = backend_dir / "alembic.ini"
    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(backend_dir / "alembic"))
    config.set_main_option("sqlalchemy.url", db_url)
    config.set_main_option("prepend_sys_path", str(backend_dir))
    return config


def _table_names(db_url: str) -> set[str]:
    engine = create_engine(db_url, future=True)
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    engine.dispose()
    return tables


def test_migration_upgrade_downgrade_cycle(tmp_path, monkeypatch):
    db_url = f"sqlite:///{tmp_path / 'migration_test.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)
    config = _make_alembic_config(db_url)

    command.upgrade(config, "head")
    assert {"sites", "site_urls", "site_access", "log_visit"} <= _table_names(db_url)

    command.downgrade(config, "base")
    assert _table_names(db_url) <= {"alembic_version"}

    command.upgrade(config, "head")
    assert "sites" in _table_names(db_url)


_INSERT_SITE = text(
    'INSERT INTO sites (name, "group", main_url, timezone, type, created_at) '
    "VALUES (:name, '', :url, 'UTC', 'website', '2024-01-01 00:00:00')"
)


def test_migrated_schema_never_reuses_site_ids(tmp_path, monkeypatch):
    db_url = f"sqlite:///{tmp_path / 'migration_ids.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)
    command.upgrade(_make_alembic_config(db_url), "head")

    engine = create_engine(db_url, future=True)
    with engine.begin() as conn:
        conn.execute(_INSERT_SITE, {"name": "First", "url": "http://first.example.com"})
        first_id = conn.execute(text("SELECT max(id) FROM sites")).scalar()
        conn.execute(text("DELETE FROM sites WHERE id = :id"), {"id": first_id})
        conn.execute(_INSERT_SITE, {"name": "Second", "url": "http://second.example.com"})
        second_id = conn.execute(text("SELECT max(id) FROM sites")).scalar()
        deleted = conn.execute(text("SELECT deleted FROM sites WHERE id = :id"), {"id": second_id}).scalar()
    engine.dispose()

    assert second_id > first_id
    assert not deleted


def test_migrated_schema_keeps_one_grant_per_login_and_site(tmp_path, monkeypatch):
    db_url = f"sqlite:///{tmp_path / 'migration_grants.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)
    command.upgrade(_make_alembic_config(db_url), "head")

    engine = create_engine(db_url, future=True)
    grant = text("INSERT INTO site_access (login, site_id, access) VALUES ('ana', 1, 'view')")
    try:
        with engine.begin() as conn:
            conn.execute(grant)
        with pytest.raises(IntegrityError):
            with engine.begin() as conn:
                conn.execute(grant)
    finally:
        engine.dispose()
