"""Shared pytest fixtures for config-snapshot tests."""

import pytest

from config_snapshot.discovery import StaticRoot
from config_snapshot.model import Mapping, Scalar, ScalarFormat, Sequence


@pytest.fixture
def server_tree():
    """A small mapping mixing raw, quoted, multiline and empty values."""
    return Mapping.of(
        {
            "port": Scalar("8080", ScalarFormat.NUMBER, raw=True),
            "host": Scalar("localhost"),
            "banner": Scalar("Welcome\nto the server", ScalarFormat.MULTILINE_STRING),
            "motd": Scalar(""),
            "tags": Sequence.of([Scalar("edge"), Scalar(None)]),
        }
    )


@pytest.fixture
def static_roots():
    """Roots registered out of alphabetical order."""
    return [
        StaticRoot("zeta", {"b": 1, "a": True}),
        StaticRoot("empty", {"nothing": None}),
        StaticRoot("alpha", ["first", "second"]),
    ]


@pytest.fixture
def clear_config_env(monkeypatch, tmp_path):
    """Isolate config discovery from the developer's environment."""
    monkeypatch.delenv("CONFIG_SNAPSHOT_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    return tmp_path
