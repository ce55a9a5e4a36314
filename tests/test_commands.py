"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from hybridengines.commands import cli
from hybridengines.config import load_preferences
from hybridengines.manifest import DeclaredEngineRef, WidgetModel

RUN_COMMAND = "hybridengines.engines.cordova.run_command_async"


@pytest.fixture
def runner():
    """Create a CliRunner for testing."""
    return CliRunner()


@pytest.fixture
def prefs(isolated_preferences: Path, engine_root: Path, local_android: Path) -> Path:
    isolated_preferences.parent.mkdir(parents=True, exist_ok=True)
    isolated_preferences.write_text(
        json.dumps(
            {
                "default_engines": None,
                "engine_root": str(engine_root),
                "local_engines": [str(local_android)],
            }
        )
    )
    return isolated_preferences


def _invoke(runner, project, *args, **kwargs):
    return runner.invoke(cli, ["--project", str(project.root), *args], **kwargs)


def _declared(project):
    WidgetModel.forget(project)
    return WidgetModel.for_project(project).get_widget_for_read().get_engines()


class TestList:
    def test_manifest_engines(self, runner, make_project, prefs):
        project = make_project(engines=[("android", "^9.0.0"), ("ios", "6.2.0")])
        result = _invoke(runner, project, "list")

        assert result.exit_code == 0
        assert "Active engines (from config.xml):" in result.output
        assert "android 9.0.0" in result.output
        assert "ios 6.2.0" in result.output

    def test_platforms_json(self, runner, make_project, prefs):
        project = make_project(engines=[("android", "9.0.0")], platforms_json={"android": "8.1.0"})
        result = _invoke(runner, project, "list")

        assert "Active engines (from platforms.json):" in result.output
        assert "android 8.1.0" in result.output

    def test_dropped_engines(self, runner, make_project, prefs):
        project = make_project(engines=[("ios", "99.0.0")])

        result = _invoke(runner, project, "list")
        assert "No active engines." in result.output
        assert "1 declared engine(s) are not installed" in result.output

        result = _invoke(runner, project, "list", "-v")
        assert "ios 99.0.0" in result.output

    def test_defaults_when_nothing_declared(self, runner, make_project, prefs):
        project = make_project(engines=[])
        result = _invoke(runner, project, "list")

        assert "Active engines (from defaults):" in result.output
        assert "android 9.0.0" in result.output

    def test_malformed_preferences(self, runner, make_project, isolated_preferences):
        isolated_preferences.parent.mkdir(parents=True, exist_ok=True)
        isolated_preferences.write_text('{"local_engines": 5}')
        project = make_project(engines=[])

        result = _invoke(runner, project, "list")
        assert result.exit_code == 1
        assert "Error: local_engines must be a list" in result.output


def test_installed(runner, make_project, prefs, local_android):
    project = make_project(engines=[])
    result = _invoke(runner, project, "installed")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[:3] == ["android 8.1.0", "android 9.0.0", "ios 6.2.0"]
    assert f"android (local) {local_android}" in lines


def test_installed_without_engines(runner, make_project, temp_dir, monkeypatch):
    monkeypatch.setenv("HOME", str(temp_dir))
    project = make_project(engines=[])
    result = _invoke(runner, project, "installed")
    assert "No engines installed." in result.output


def test_defaults_with_preference(runner, make_project, prefs):
    data = json.loads(prefs.read_text())
    data["default_engines"] = "android:8.1.0"
    prefs.write_text(json.dumps(data))
    project = make_project(engines=[])

    result = _invoke(runner, project, "defaults")
    assert "Preferred: android:8.1.0" in result.output
    assert "android 8.1.0" in result.output
    assert "ios" not in result.output


class TestUse:
    def test_dry_run(self, runner, make_project, prefs):
        project = make_project(engines=[("android", "8.1.0")])

        with patch(RUN_COMMAND, new_callable=AsyncMock) as mock_run:
            result = _invoke(runner, project, "use", "android@9.0.0", "--dry-run")

        assert result.exit_code == 0
        assert "$ cordova platform remove android" in result.output
        mock_run.assert_not_awaited()
        assert _declared(project) == [DeclaredEngineRef("android", "8.1.0")]

    def test_apply(self, runner, make_project, prefs, local_android):
        project = make_project(engines=[("android", "8.1.0")])

        with patch(RUN_COMMAND, new_callable=AsyncMock, return_value=("ok", 0)):
            result = _invoke(runner, project, "use", "ios@^6.2.0", str(local_android), "--yes")

        assert result.exit_code == 0, result.output
        assert "updated" in result.output
        assert _declared(project) == [
            DeclaredEngineRef("ios", "6.2.0"),
            DeclaredEngineRef("android", str(local_android)),
        ]

    def test_confirmation_declined(self, runner, make_project, prefs):
        project = make_project(engines=[("android", "8.1.0")])

        with patch(RUN_COMMAND, new_callable=AsyncMock) as mock_run:
            result = _invoke(runner, project, "use", "android@9.0.0", input="n\n")

        assert "Aborted." in result.output
        mock_run.assert_not_awaited()

    def test_unknown_engine(self, runner, make_project, prefs):
        project = make_project(engines=[])
        result = _invoke(runner, project, "use", "android@1.0.0")

        assert result.exit_code == 1
        assert "Error: no engine 'android@1.0.0' is installed" in result.output
        assert "Hint:" in result.output

    def test_unregistered_path(self, runner, make_project, prefs, temp_dir):
        project = make_project(engines=[])
        result = _invoke(runner, project, "use", str(temp_dir))

        assert result.exit_code == 1
        assert "registered local engine" in result.output

    def test_missing_config_xml(self, runner, make_project, prefs):
        project = make_project()
        result = _invoke(runner, project, "use", "android@9.0.0", "--yes")

        assert result.exit_code == 1
        assert "config.xml not found" in result.output

    def test_failed_prepare_exits_nonzero(self, runner, make_project, prefs):
        project = make_project(engines=[])

        with patch(RUN_COMMAND, new_callable=AsyncMock, return_value=("Error: no sdk", 0)):
            result = _invoke(runner, project, "use", "android@9.0.0", "--yes")

        assert result.exit_code == 1
        assert "Error: no sdk" in result.output
        assert _declared(project) == [DeclaredEngineRef("android", "9.0.0")]


class TestConfigCommands:
    def test_init(self, runner, isolated_preferences):
        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0
        assert isolated_preferences.exists()

        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(cli, ["config", "init", "--force"])
        assert result.exit_code == 0
        assert isolated_preferences.with_suffix(".json.bak").exists()

    def test_set_default(self, runner, isolated_preferences):
        result = runner.invoke(cli, ["config", "set-default", "android:9.0.0, ios:6.2.0"])

        assert result.exit_code == 0
        assert load_preferences(isolated_preferences).default_engines == "android:9.0.0,ios:6.2.0"

    def test_clear_default(self, runner, isolated_preferences):
        runner.invoke(cli, ["config", "set-default", "android:9.0.0"])
        result = runner.invoke(cli, ["config", "set-default"])

        assert "cleared" in result.output
        assert load_preferences(isolated_preferences).default_engines is None

    def test_set_default_rejects_garbage(self, runner, isolated_preferences):
        result = runner.invoke(cli, ["config", "set-default", "android"])

        assert result.exit_code == 1
        assert "no valid ID:VERSION pair" in result.output
        assert not isolated_preferences.exists()
