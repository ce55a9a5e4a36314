"""Pytest fixtures and utilities for hybridengines tests."""

import json
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from hybridengines.engines import InstalledEngine, StaticCatalogProvider
from hybridengines.manifest import WidgetModel
from hybridengines.project import HybridProject

CONFIG_XML_TEMPLATE = """<?xml version='1.0' encoding='utf-8'?>
<widget id="org.example.hello" version="1.0.0" xmlns="http://www.w3.org/ns/widgets" xmlns:cdv="http://cordova.apache.org/ns/1.0">
    <name>HelloCordova</name>
    <content src="index.html" />
{engines}</widget>
"""


def render_config_xml(engines: list[tuple[str, str]]) -> str:
    lines = "".join(
        f'    <engine name="{name}" spec="{spec}" />\n' for name, spec in engines
    )
    return CONFIG_XML_TEMPLATE.format(engines=lines)


@pytest.fixture(autouse=True)
def clear_widget_models() -> Generator[None, None, None]:
    """Drop cached manifest models between tests."""
    WidgetModel._models.clear()
    yield
    WidgetModel._models.clear()


@pytest.fixture(autouse=True)
def isolated_preferences(tmp_path: Path, monkeypatch) -> Path:
    """Point the preferences file at a per-test location."""
    prefs_path = tmp_path / "prefs" / "preferences.json"
    monkeypatch.setenv("HYBRIDENGINES_CONFIG", str(prefs_path))
    return prefs_path


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_project(temp_dir: Path) -> Callable[..., HybridProject]:
    """Factory for project trees with config.xml and optional platforms.json."""

    def _create(
        engines: list[tuple[str, str]] | None = None,
        platforms_json: dict | str | None = None,
        config_xml: str | None = None,
        name: str = "hello",
    ) -> HybridProject:
        root = temp_dir / name
        root.mkdir(parents=True, exist_ok=True)
        if config_xml is not None:
            (root / "config.xml").write_text(config_xml, encoding="utf-8")
        elif engines is not None:
            (root / "config.xml").write_text(render_config_xml(engines), encoding="utf-8")
        if platforms_json is not None:
            state_dir = root / "platforms"
            state_dir.mkdir(exist_ok=True)
            text = platforms_json if isinstance(platforms_json, str) else json.dumps(platforms_json)
            (state_dir / "platforms.json").write_text(text, encoding="utf-8")
        return HybridProject(root)

    return _create


@pytest.fixture
def local_android(temp_dir: Path) -> Path:
    """A user-registered local android engine checkout."""
    location = temp_dir / "src" / "my-android"
    location.mkdir(parents=True)
    (location / "package.json").write_text(
        json.dumps({"name": "cordova-android", "version": "10.0.0-dev"}),
        encoding="utf-8",
    )
    return location


@pytest.fixture
def installed_engines(local_android: Path) -> list[InstalledEngine]:
    return [
        InstalledEngine("android", "8.1.0"),
        InstalledEngine("android", "9.0.0"),
        InstalledEngine("ios", "5.1.1"),
        InstalledEngine("ios", "6.2.0"),
        InstalledEngine("windows", "7.0.0"),
        InstalledEngine("android", str(local_android), managed=False, location=local_android),
    ]


@pytest.fixture
def provider(installed_engines: list[InstalledEngine]) -> StaticCatalogProvider:
    return StaticCatalogProvider(installed_engines)


@pytest.fixture
def engine_root(temp_dir: Path) -> Path:
    """Managed engine directory tree: <root>/<platform>/<version>/."""
    root = temp_dir / "engines"
    for platform, version in [
        ("android", "8.1.0"),
        ("android", "9.0.0"),
        ("ios", "6.2.0"),
        ("browser", "6.0.0"),
    ]:
        (root / platform / version).mkdir(parents=True)
    return root
