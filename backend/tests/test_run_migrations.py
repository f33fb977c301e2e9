from __future__ import annotations

import types

import pytest
from sqlalchemy import create_engine, inspect

from scripts import run_migrations as runner


def _config(monkeypatch, url: str):
    monkeypatch.setenv("REALTY_COACH_DATABASE_URL", url)
    config = runner.get_alembic_config(str(runner.BACKEND_ROOT / "alembic.ini"))
    return config


def test_resolve_database_url_prefers_env(monkeypatch) -> None:
    config = _config(monkeypatch, "sqlite://")
    assert config.get_main_option("sqlalchemy.url") == runner.DATABASE_URL_PLACEHOLDER
    assert runner.resolve_database_url(config) == "sqlite://"


def test_resolve_database_url_requires_env(monkeypatch) -> None:
    monkeypatch.delenv("REALTY_COACH_DATABASE_URL", raising=False)
    config = runner.get_alembic_config(None)
    with pytest.raises(RuntimeError):
        runner.resolve_database_url(config)


def test_single_head_revision(monkeypatch) -> None:
    config = _config(monkeypatch, "sqlite://")
    assert runner.head_revision(config) == "20261019_01_profile_schema"


def test_wait_for_database_succeeds_with_sqlite(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'ready.sqlite'}"
    runner.wait_for_database(url, timeout=2, poll_interval=0.1)


def test_wait_for_database_times_out(monkeypatch) -> None:
    class DummyEngine:
        def connect(self) -> types.SimpleNamespace:
            raise runner.OperationalError("SELECT 1", {}, Exception("boom"))

        def dispose(self) -> None:
            pass

    monkeypatch.setattr(runner, "create_engine", lambda *_, **__: DummyEngine())
    with pytest.raises(RuntimeError):
        runner.wait_for_database("postgresql://example", timeout=0, poll_interval=0)


def test_run_migrations_invokes_upgrade(monkeypatch) -> None:
    config = _config(monkeypatch, "sqlite://")
    recorded: dict[str, object] = {}

    def fake_wait(url: str, *, timeout: int, poll_interval: float) -> None:
        recorded["wait"] = (url, timeout, poll_interval)

    def fake_upgrade(cfg, revision: str) -> None:
        recorded["revision"] = revision
        recorded["script_location"] = cfg.get_main_option("script_location")

    monkeypatch.setattr(runner, "wait_for_database", fake_wait)
    monkeypatch.setattr(runner.command, "upgrade", fake_upgrade)

    runner.run_migrations("head", timeout=5, poll_interval=0.1, config=config)

    assert recorded["revision"] == "head"
    assert recorded["wait"] == ("sqlite://", 5, 0.1)
    assert str(recorded["script_location"]).endswith("alembic")


def test_upgrade_creates_profile_tables(tmp_path, monkeypatch) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.sqlite'}"
    config = _config(monkeypatch, url)

    runner.run_migrations("head", timeout=2, poll_interval=0.1, config=config)

    engine = create_engine(url, future=True)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"users", "coach_profiles", "listings", "goals", "audit_events", "alembic_version"} <= tables
