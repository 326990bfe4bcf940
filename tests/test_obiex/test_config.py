"""
Tests for environment-driven settings.
"""
import pytest
import os
from unittest.mock import patch

from obiex import config


class TestBaseUrl:
    def test_production(self) -> None:
        assert config.get_base_url(False) == "https://api.obiex.finance"

    def test_staging(self) -> None:
        assert config.get_base_url(True) == "https://staging.api.obiex.finance"


class TestEnvironmentSettings:
    """Test settings read from the environment."""

    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert config.get_sandbox_mode() is False
            assert config.get_currency_cache_ttl() == 86400
            assert config.get_request_timeout() == 30.0

    def test_sandbox_mode(self) -> None:
        with patch.dict(os.environ, {"OBIEX_SANDBOX_MODE": "TRUE"}):
            assert config.get_sandbox_mode() is True

    def test_currency_cache_ttl(self) -> None:
        with patch.dict(os.environ, {"OBIEX_CURRENCY_CACHE_TTL": "600"}):
            assert config.get_currency_cache_ttl() == 600

    def test_currency_cache_ttl_invalid(self) -> None:
        with patch.dict(os.environ, {"OBIEX_CURRENCY_CACHE_TTL": "one day"}):
            with pytest.raises(ValueError, match="must be an integer"):
                config.get_currency_cache_ttl()

    def test_currency_cache_ttl_negative(self) -> None:
        with patch.dict(os.environ, {"OBIEX_CURRENCY_CACHE_TTL": "-1"}):
            with pytest.raises(ValueError, match="must not be negative"):
                config.get_currency_cache_ttl()

    def test_request_timeout(self) -> None:
        with patch.dict(os.environ, {"OBIEX_REQUEST_TIMEOUT": "12.5"}):
            assert config.get_request_timeout() == 12.5

    def test_request_timeout_invalid(self) -> None:
        with patch.dict(os.environ, {"OBIEX_REQUEST_TIMEOUT": "soon"}):
            with pytest.raises(ValueError, match="must be a number"):
                config.get_request_timeout()
