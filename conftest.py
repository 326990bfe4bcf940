"""
Configuration file for pytest.
"""
import sys
import os
import json
from typing import Any, Callable, Tuple
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

# Add the project root to Python path so tests can import modules
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from obiex.client import ObiexClient  # noqa: E402


@pytest.fixture
def mock_session() -> MagicMock:
    """aiohttp session stand-in; queue responses with the respond fixture."""
    return MagicMock(spec=aiohttp.ClientSession)


@pytest.fixture
def respond(mock_session: MagicMock) -> Callable[..., None]:
    """
    Queue (status, body) responses on mock_session, one per request.

    A str body is returned as raw text, anything else is JSON encoded.
    """
    def _respond(*responses: Tuple[int, Any]) -> None:
        context_managers = []
        for status, body in responses:
            resp = MagicMock()
            resp.status = status
            resp.text = AsyncMock(return_value=body if isinstance(body, str) else json.dumps(body))

            cm = MagicMock()
            cm.__aenter__ = AsyncMock(return_value=resp)
            cm.__aexit__ = AsyncMock(return_value=None)
            context_managers.append(cm)

        mock_session.request.side_effect = context_managers

    return _respond


@pytest.fixture
def client(mock_session: MagicMock) -> ObiexClient:
    """Production client with test credentials and the mocked session."""
    return ObiexClient(
        api_key="test-key",
        api_secret="s3cr3t",
        session=mock_session,
        currency_cache_ttl=86400,
        timeout=30,
    )
