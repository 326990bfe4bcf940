"""
Obiex exchange API client package.

Signs every request with HMAC-SHA256 and caches the currency catalog.
"""
from .auth import (
    ExchangeAuthenticator,
    ObiexAuthenticator,
    ObiexCredentials,
    SignedRequest,
    sign_request,
)
from .cache import TTLCache
from .client import ObiexClient
from .errors import ObiexServerError
from .models import (
    BankAccountPayout,
    CryptoAccountPayout,
    DepositAddress,
    TradeSide,
    TransactionCategory,
)

__all__ = [
    'ExchangeAuthenticator',
    'ObiexAuthenticator',
    'ObiexCredentials',
    'SignedRequest',
    'sign_request',
    'TTLCache',
    'ObiexClient',
    'ObiexServerError',
    'BankAccountPayout',
    'CryptoAccountPayout',
    'DepositAddress',
    'TradeSide',
    'TransactionCategory',
]
