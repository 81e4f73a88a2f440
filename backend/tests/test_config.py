"""
Tests for environment-driven settings and their FastAPI dependency.
"""

import pytest
from fastapi.testclient import TestClient

from solar_snapshot.api.deps import get_settings
from solar_snapshot.config import AggregationMode, NSRDBSettings
from solar_snapshot.engine.errors import ConfigurationError
from solar_snapshot.main import app

client = TestClient(app)

_ENV_VARS = ("NSRDB_KEY", "NSRDB_MODE", "NSRDB_EMAIL", "NSRDB_TIMEOUT")


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestSettingsFromEnv:
    def test_defaults(self, clean_env):
        settings = NSRDBSettings.from_env()
        assert settings.api_key is None
        assert settings.mode == AggregationMode.FALLBACK
        assert settings.fallback_years == [2023, 2022]
        assert settings.timeout_s == 60.0

    def test_reads_environment(self, clean_env):
        clean_env.setenv("NSRDB_KEY", "abc123")
        clean_env.setenv("NSRDB_MODE", "multi_year")
        clean_env.setenv("NSRDB_EMAIL", "ops@example.com")
        clean_env.setenv("NSRDB_TIMEOUT", "15")
        settings = NSRDBSettings.from_env()
        assert settings.api_key == "abc123"
        assert settings.mode == AggregationMode.MULTI_YEAR
        assert settings.email == "ops@example.com"
        assert settings.timeout_s == 15.0

    def test_empty_key_is_missing(self, clean_env):
        clean_env.setenv("NSRDB_KEY", "")
        with pytest.raises(ConfigurationError):
            NSRDBSettings.from_env().require_api_key()

    def test_unknown_mode(self, clean_env):
        clean_env.setenv("NSRDB_MODE", "fastest")
        with pytest.raises(ConfigurationError, match="Invalid NSRDB configuration"):
            NSRDBSettings.from_env()

    @pytest.mark.parametrize("timeout", ["soon", "-5"])
    def test_bad_timeout(self, clean_env, timeout):
        clean_env.setenv("NSRDB_TIMEOUT", timeout)
        with pytest.raises(ConfigurationError):
            NSRDBSettings.from_env()


class TestGetSettings:
    def test_cached(self, clean_env):
        clean_env.setenv("NSRDB_KEY", "abc123")
        assert get_settings() is get_settings()
        assert get_settings().api_key == "abc123"

    def test_bad_configuration_reported_as_category(self, clean_env):
        clean_env.setenv("NSRDB_KEY", "abc123")
        clean_env.setenv("NSRDB_MODE", "fastest")
        resp = client.get("/api/v1/solar/snapshot?lat=40&lng=-105")
        assert resp.status_code == 500
        assert resp.json()["detail"]["error"] == "missing_configuration"

    def test_bad_timeout_reported_as_category(self, clean_env):
        clean_env.setenv("NSRDB_TIMEOUT", "soon")
        resp = client.get("/api/v1/solar/multi-year?lat=40&lng=-105")
        assert resp.status_code == 500
        assert resp.json()["detail"]["error"] == "missing_configuration"
