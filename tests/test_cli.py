"""Tests for the design-drift command line."""

import importlib
import json

import pytest
from typer.testing import CliRunner

from design_drift import __version__
from design_drift.baseline import load_baseline, save_baseline
from design_drift.cli import app
from design_drift.exceptions import RemoteAPIError
from design_drift.snapshot import build_snapshot

from conftest import FakeFigmaClient, make_revision

runner = CliRunner()


class _ContextClient(FakeFigmaClient):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FIGMA_TOKEN", "tok")
    monkeypatch.setenv("FIGMA_FILE_KEY", "FILE123")
    monkeypatch.setenv("DESIGN_DRIFT_DISPLAY_TIMEZONE", "UTC")
    return tmp_path


def _patch_client(monkeypatch, client):
    run_module = importlib.import_module("design_drift.cli.run")
    monkeypatch.setattr(run_module, "FigmaClient", lambda *args, **kwargs: client)


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestRun:
    def test_dry_run_prints_initial_report(self, env, monkeypatch, revisions, document, styles):
        _patch_client(monkeypatch, _ContextClient(document=document, styles=styles, revisions=revisions))
        snapshot = env / "snap.json"

        result = runner.invoke(app, ["run", "--dry-run", "--snapshot", str(snapshot)])

        assert result.exit_code == 0, result.output
        assert "Design system watcher initialized" in result.output
        assert "Baseline initialized" in result.output
        assert not snapshot.exists()

    def test_missing_settings(self, env, monkeypatch):
        monkeypatch.delenv("FIGMA_FILE_KEY")
        result = runner.invoke(app, ["run", "--dry-run"])
        assert result.exit_code == 1
        assert "FIGMA_FILE_KEY" in result.output

    def test_mail_settings_required_without_dry_run(self, env, monkeypatch):
        for name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASS", "MAIL_FROM", "MAIL_TO"):
            monkeypatch.delenv(name, raising=False)
        result = runner.invoke(app, ["run"])
        assert result.exit_code == 1
        assert "SMTP_HOST" in result.output

    def test_failure_exits_nonzero_and_reports(self, env, monkeypatch, revisions):
        client = _ContextClient(revisions=revisions)

        def broken():
            raise RemoteAPIError("/files/FILE123", 500, reason="Server Error")

        client.get_file = broken
        _patch_client(monkeypatch, client)

        result = runner.invoke(app, ["run", "--dry-run"])

        assert result.exit_code == 1
        assert "Design system watcher error" in result.output
        assert "500" in result.output


class TestBaselineCommand:
    def test_no_baseline(self, env):
        result = runner.invoke(app, ["baseline"])
        assert result.exit_code == 0
        assert "No baseline found" in result.output

    def test_json_output(self, env, document, styles):
        snap = build_snapshot(document, styles, None)
        snap.stamp_revision(make_revision("R7", label="v7"))
        path = env / "snap.json"
        save_baseline(snap, path)

        result = runner.invoke(app, ["baseline", "--snapshot", str(path), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["meta"]["version_id"] == "R7"
        assert data["counts"] == {"components": 3, "styles": 2, "variables": 0}
        assert load_baseline(path) == snap

    def test_table_output(self, env, document, styles):
        path = env / "snap.json"
        snap = build_snapshot(document, styles, None)
        snap.stamp_revision(make_revision("R7"))
        save_baseline(snap, path)

        result = runner.invoke(app, ["baseline", "--snapshot", str(path)])

        assert result.exit_code == 0
        assert "R7" in result.output
        assert "Components" in result.output

    def test_corrupt_baseline(self, env):
        path = env / "snap.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["baseline", "--snapshot", str(path)])
        assert result.exit_code == 1
