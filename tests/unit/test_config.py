"""
Unit tests for application settings.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from unitrade.config import Settings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def reset_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.mark.unit
class TestSettings:
    """Tests for Settings."""

    def test_view_window_defaults(self):
        settings = Settings()

        assert settings.view_suppression_window == timedelta(minutes=30)
        assert settings.view_retention_window == timedelta(hours=1)
        assert settings.view_sweep_interval == timedelta(hours=1)

    def test_view_windows_from_environment(self, monkeypatch):
        monkeypatch.setenv("UNITRADE_VIEW_SUPPRESSION_MINUTES", "10")
        monkeypatch.setenv("UNITRADE_VIEW_SWEEP_INTERVAL_MINUTES", "5")

        settings = get_settings()

        assert settings.view_suppression_window == timedelta(minutes=10)
        assert settings.view_sweep_interval == timedelta(minutes=5)

    def test_cors_origins_list(self, monkeypatch):
        monkeypatch.setenv("UNITRADE_CORS_ORIGINS", "http://a.test, http://b.test,,")

        assert Settings().cors_origins_list == ["http://a.test", "http://b.test"]

    def test_default_cors_origins_include_frontend(self):
        assert "https://unitrade-rho.vercel.app" in Settings().cors_origins_list

    def test_environment_flags(self):
        settings = Settings()

        assert settings.is_testing is True
        assert settings.is_production is False

    def test_suppression_longer_than_retention_rejected(self):
        with pytest.raises(ValidationError, match="view_retention_minutes"):
            Settings(view_suppression_minutes=90)

    def test_retention_equal_to_suppression_allowed(self):
        settings = Settings(view_suppression_minutes=60, view_retention_minutes=60)

        assert settings.view_retention_window == settings.view_suppression_window
