"""Unit tests for settings."""

import pytest

from constellation.config import Settings


class TestSettings:
    """Tests for defaults, presets and env overrides."""

    def test_defaults(self) -> None:
        config = Settings(_env_file=None)
        assert config.api_base_url == "http://localhost:8000/api/v1"
        assert config.settle_ms_per_element == 100.0
        assert config.fit_view_delay == 1.5
        assert config.highlight_timeout == 0.9
        assert config.max_visible_nodes is None

    def test_test_preset_shortens_timings(self, test_settings) -> None:
        assert test_settings.api_base_url == "http://testserver"
        assert test_settings.fit_view_delay < 1.5
        assert test_settings.highlight_timeout < 0.9
        assert test_settings.settle_ms_per_element == 100.0

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HIGHLIGHT_TIMEOUT", "2.5")
        monkeypatch.setenv("API_TOKEN", "abc")
        config = Settings(_env_file=None)
        assert config.highlight_timeout == 2.5
        assert config.api_token == "abc"
