import psycopg

import postgisinit.update as update_cli
from postgisinit.db import EngineSession


def _patch_session(monkeypatch, engine):
    monkeypatch.setattr(update_cli, "EngineSession", lambda: EngineSession(engine.connect))


def test_parser_collects_trailing_databases():
    args = update_cli.build_parser().parse_args(["--target-version", "3.5.3", "gis1", "gis2"])
    assert args.databases == ["gis1", "gis2"]
    assert args.target_version == "3.5.3"
    assert args.check is False


def test_main_updates_defaults_then_extras(monkeypatch, engine):
    monkeypatch.setenv("POSTGRES_DB", "appdb")
    monkeypatch.setenv("POSTGIS_VERSION", "3.5.3+dfsg-1")
    _patch_session(monkeypatch, engine)
    assert update_cli.main(["gis1"]) == 0
    assert engine.connects == ["template_postgis", "appdb", "gis1"]
    assert engine.connections[-1].closed is True


def test_main_without_extras_still_covers_template_and_primary(monkeypatch, engine):
    monkeypatch.setenv("POSTGRES_USER", "directus")
    _patch_session(monkeypatch, engine)
    assert update_cli.main([]) == 0
    assert engine.connects == ["template_postgis", "directus"]


def test_main_returns_error_status_on_engine_failure(monkeypatch, make_engine):
    engine = make_engine(fail_on={"appdb": psycopg.Error("permission denied to create extension")})
    monkeypatch.setenv("POSTGRES_DB", "appdb")
    _patch_session(monkeypatch, engine)
    assert update_cli.main(["later"]) == 1
    assert "later" not in engine.connects


def test_run_with_check_flags_stale_databases(monkeypatch, make_engine, dummy_logger):
    engine = make_engine(rows=[("3.5.3", "3.5.3"), ("3.4.2", "3.5.3")])
    monkeypatch.setenv("POSTGRES_DB", "appdb")
    monkeypatch.setattr(update_cli, "logger", dummy_logger)
    ok = update_cli.run(EngineSession(engine.connect), [], target_version="3.5.3", check=True)
    assert ok is False
    assert any("appdb" in m and "installed=3.4.2" in m for m in dummy_logger.messages)


def test_run_with_check_passes_when_current(monkeypatch, make_engine, dummy_logger):
    engine = make_engine(rows=[("3.5.3", "3.5.3"), ("3.5.3", "3.5.3")])
    monkeypatch.setenv("POSTGRES_DB", "appdb")
    monkeypatch.setattr(update_cli, "logger", dummy_logger)
    assert update_cli.run(EngineSession(engine.connect), [], target_version="3.5.3+b1", check=True) is True
