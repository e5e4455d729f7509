"""Tests for config models: defaults and sparse overrides."""

import pytest

from htmlbind.config.models import BindingConfig, HtmlBindConfig, PluginsConfig


class TestHtmlBindConfig:
    def test_full_defaults(self) -> None:
        cfg = HtmlBindConfig()
        assert cfg.parser.backend == "html.parser"
        assert cfg.binding.date_formats == []
        assert cfg.plugins.enabled is True
        assert cfg.plugins.disabled == []

    def test_sparse_override(self) -> None:
        """Only override fields you care about; the rest keeps defaults."""
        cfg = HtmlBindConfig.model_validate({"plugins": {"disabled": ["noisy"]}})
        assert cfg.plugins.disabled == ["noisy"]
        assert cfg.plugins.enabled is True  # default preserved
        assert cfg.parser.backend == "html.parser"

    def test_frozen(self) -> None:
        cfg = BindingConfig(date_formats=["%d/%m/%Y"])
        with pytest.raises(Exception):
            cfg.date_formats = []  # type: ignore[misc]

    def test_defaults_not_shared(self) -> None:
        assert PluginsConfig().disabled is not PluginsConfig().disabled
