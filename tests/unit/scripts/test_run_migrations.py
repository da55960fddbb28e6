"""Unit tests for the schema upgrade script."""

from pathlib import Path

import pytest

from scripts import run_migrations


@pytest.fixture
def quiet_startup(monkeypatch):
    """Skip process-wide logging and logfire setup."""
    monkeypatch.setattr(run_migrations, "setup_logging", lambda settings: None)
    monkeypatch.setattr(run_migrations, "configure_logfire", lambda settings: None)


class TestRunMigrations:
    """Tests for run_migrations."""

    def test_config_resolves_from_any_directory(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        cfg = run_migrations.alembic_config()

        assert Path(cfg.config_file_name) == run_migrations.ROOT / "alembic.ini"
        assert cfg.get_main_option("script_location") == str(
            run_migrations.ROOT / "migrations"
        )

    def test_upgrades_to_requested_revision(self, monkeypatch, quiet_startup):
        upgraded = []
        monkeypatch.setattr(
            run_migrations.command,
            "upgrade",
            lambda cfg, revision: upgraded.append(revision),
        )

        assert run_migrations.main([]) == 0
        assert run_migrations.main(["3f1c2a9d7b10"]) == 0
        assert upgraded == ["head", "3f1c2a9d7b10"]

    def test_failure_is_logged_and_raised(self, monkeypatch, quiet_startup):
        errors = []

        def fail(cfg, revision):
            raise RuntimeError("connection refused")

        monkeypatch.setattr(run_migrations.command, "upgrade", fail)
        monkeypatch.setattr(
            run_migrations.logfire,
            "error",
            lambda message, **attributes: errors.append((message, attributes)),
        )

        with pytest.raises(RuntimeError):
            run_migrations.main([])

        assert errors[0][0] == "Schema upgrade failed"
        assert errors[0][1]["error_type"] == "RuntimeError"
