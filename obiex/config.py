import os

PRODUCTION_BASE_URL = "https://api.obiex.finance"
STAGING_BASE_URL = "https://staging.api.obiex.finance"

API_VERSION_PREFIX = "/v1"

# Cache key for the supported-currency catalog
CURRENCIES_CACHE_KEY = "currencies"

# Environment variables, read at call time
SANDBOX_MODE_ENV = "OBIEX_SANDBOX_MODE"
CURRENCY_CACHE_TTL_ENV = "OBIEX_CURRENCY_CACHE_TTL"
REQUEST_TIMEOUT_ENV = "OBIEX_REQUEST_TIMEOUT"

DEFAULT_CURRENCY_CACHE_TTL = 86400  # 24 hours
DEFAULT_REQUEST_TIMEOUT = 30.0


def get_base_url(sandbox_mode: bool) -> str:
    """Return the staging base URL in sandbox mode, production otherwise."""
    return STAGING_BASE_URL if sandbox_mode else PRODUCTION_BASE_URL


def get_sandbox_mode() -> bool:
    return os.getenv(SANDBOX_MODE_ENV, "false").lower() == "true"


def get_currency_cache_ttl() -> int:
    """
    Currency catalog TTL in seconds.

    Raises:
        ValueError: If the environment value is not a non-negative integer
    """
    raw = os.getenv(CURRENCY_CACHE_TTL_ENV)
    if not raw:
        return DEFAULT_CURRENCY_CACHE_TTL
    try:
        ttl = int(raw)
    except ValueError:
        raise ValueError(f"'{CURRENCY_CACHE_TTL_ENV}' must be an integer number of seconds, got {raw!r}")
    if ttl < 0:
        raise ValueError(f"'{CURRENCY_CACHE_TTL_ENV}' must not be negative")
    return ttl


def get_request_timeout() -> float:
    raw = os.getenv(REQUEST_TIMEOUT_ENV)
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"'{REQUEST_TIMEOUT_ENV}' must be a number of seconds, got {raw!r}")
