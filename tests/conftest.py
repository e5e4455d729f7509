"""Shared pytest fixtures and test helpers for htmlbind tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from htmlbind.binding.resolver import BinderResolver
from htmlbind.serializers.html import HtmlSerializer

ASSETS = Path(__file__).parent / "assets"


def read_asset(name: str) -> str:
    """Return the contents of an HTML fixture under tests/assets."""
    return (ASSETS / name).read_text(encoding="utf-8")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def resolver() -> BinderResolver:
    """A fresh resolver with an empty cache."""
    return BinderResolver()


@pytest.fixture
def serializer(resolver: BinderResolver) -> HtmlSerializer:
    """Serializer backed by the per-test resolver."""
    return HtmlSerializer(resolver=resolver)


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no htmlbind env configuration."""
    monkeypatch.chdir(tmp_path)
    for name in ("HTMLBIND_CONFIG", "HTMLBIND_JSON_OUTPUT", "HTMLBIND_PLUGINS__ENABLED"):
        monkeypatch.delenv(name, raising=False)
