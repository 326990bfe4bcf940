"""
Obiex API credentials and HMAC request signing.
"""
from dataclasses import dataclass
from typing import Dict, Any, Optional, Protocol
import hashlib
import hmac
import json
import os
import logging
import time


@dataclass(frozen=True)
class SignedRequest:
    """Timestamp and signature pair for a single outbound request."""

    timestamp: int
    signature: str


def current_timestamp_ms() -> int:
    """Return the current wall-clock time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def build_signing_payload(method: str, path: str, timestamp: int) -> str:
    """
    Build the string that gets signed for a request.

    Args:
        method: HTTP method (any case)
        path: Request path exactly as transmitted, including query string
        timestamp: Milliseconds since the Unix epoch

    Returns:
        Upper-cased method, path and decimal timestamp concatenated

    Examples:
        >>> build_signing_payload("get", "/v1/trades/pairs", 1700000000000)
        'GET/v1/trades/pairs1700000000000'
    """
    return f"{method.upper()}{path}{timestamp}"


def sign_request(
    method: str,
    path: str,
    secret: str | bytes,
    timestamp: Optional[int] = None
) -> SignedRequest:
    """
    Sign a request with HMAC-SHA256.

    Args:
        method: HTTP method (GET, POST, etc.)
        path: Request path exactly as transmitted, including query string
        secret: API secret used as the HMAC key
        timestamp: Milliseconds since the epoch (defaults to now)

    Returns:
        SignedRequest with the timestamp used and the lowercase hex digest
    """
    if timestamp is None:
        timestamp = current_timestamp_ms()

    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    payload = build_signing_payload(method, path, timestamp)
    signature = hmac.new(key, payload.encode("utf-8"), hashlib.sha256).hexdigest()

    return SignedRequest(timestamp=timestamp, signature=signature)


class ObiexCredentials:
    """Store Obiex API credentials."""

    def __init__(self, api_key: str, api_secret: str, name: str = "default", **kwargs: Any):
        """
        Initialize Obiex credentials.

        Args:
            api_key: Public API key, sent in the x-api-key header
            api_secret: Private API secret, used only as the HMAC key
            name: Label for the credential set (used in logs)
            **kwargs: Additional credential fields
        """
        self._api_key = api_key
        self._api_secret = api_secret
        self.name = name
        self.extra = kwargs

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def api_secret(self) -> str:
        return self._api_secret

    def __repr__(self) -> str:
        return f"ObiexCredentials(name={self.name!r}, api_key={self._api_key!r})"

    @classmethod
    def from_env(cls, env_var: str = "OBIEX_CREDENTIALS") -> "ObiexCredentials":
        """
        Load credentials from environment variable containing JSON.

        Expected JSON format:
        {
            "name": "my-account",
            "api_key": "...",
            "api_secret": "..."
        }

        Args:
            env_var: Environment variable name containing JSON credentials

        Returns:
            ObiexCredentials instance

        Raises:
            ValueError: If credentials are missing or invalid
        """
        creds_json = os.getenv(env_var)
        if not creds_json:
            raise ValueError(f"Environment variable '{env_var}' is not set")

        try:
            creds_data: Dict[str, Any] = json.loads(creds_json)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in '{env_var}': {e}")
        if not isinstance(creds_data, dict):
            raise ValueError(f"Credentials in '{env_var}' must be a JSON object")

        required_fields = ["api_key", "api_secret"]
        missing = [f for f in required_fields if not creds_data.get(f)]
        if missing:
            raise ValueError(f"Missing required credential fields: {', '.join(missing)}")

        return cls(
            api_key=creds_data["api_key"],
            api_secret=creds_data["api_secret"],
            name=creds_data.get("name", "default"),
            **{k: v for k, v in creds_data.items() if k not in required_fields + ["name"]}
        )


class ExchangeAuthenticator(Protocol):
    """Anything that can produce signed headers for a request."""

    def get_auth_headers(
        self,
        request_method: str,
        request_path: str,
        **kwargs: Any
    ) -> Dict[str, str]:
        ...


class ObiexAuthenticator:
    """Produce signed headers for Obiex API requests."""

    def __init__(self, credentials: ObiexCredentials):
        self.credentials = credentials

    def sign(self, request_method: str, request_path: str) -> SignedRequest:
        """Sign a request with a fresh timestamp."""
        return sign_request(request_method, request_path, self.credentials.api_secret)

    def get_auth_headers(
        self,
        request_method: str,
        request_path: str,
        **kwargs: Any
    ) -> Dict[str, str]:
        """
        Get HTTP headers for an authenticated Obiex API request.

        The path must be the exact string that will be transmitted, query
        string included, since the server recomputes the signature over
        what it receives.

        Args:
            request_method: HTTP method
            request_path: Request path relative to the base URL
            **kwargs: Ignored, accepted for protocol compatibility

        Returns:
            Dictionary of HTTP headers
        """
        signed = self.sign(request_method, request_path)
        logging.debug(f"Signed {request_method.upper()} {request_path} at {signed.timestamp}")

        return {
            "Content-Type": "application/json",
            "x-api-key": self.credentials.api_key,
            "x-api-timestamp": str(signed.timestamp),
            "x-api-signature": signed.signature,
        }
