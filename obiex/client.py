"""
Async client for the Obiex REST API.
"""
from typing import Any, Dict, List, Optional
import json
import logging

import aiohttp
from yarl import URL

from .auth import ExchangeAuthenticator, ObiexAuthenticator, ObiexCredentials
from .cache import TTLCache
from .config import (
    API_VERSION_PREFIX,
    CURRENCIES_CACHE_KEY,
    get_base_url,
    get_currency_cache_ttl,
    get_request_timeout,
    get_sandbox_mode,
)
from .errors import ObiexServerError
from .models import (
    BankAccountPayout,
    CryptoAccountPayout,
    DepositAddress,
    TradeSide,
    TransactionCategory,
)
from .query import build_path_segment, build_request_path


def _payload(body: Any) -> Any:
    """Return the "data" field of an enveloped response, or the body itself."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


def _records(body: Any) -> List[Dict[str, Any]]:
    """Return the list of records in a collection response."""
    data = _payload(body)
    if isinstance(data, list):
        return data
    return []


class ObiexClient:
    """
    Async client for the Obiex API.

    Every request is signed with the client's credentials just before it is
    sent. The currency catalog is read through a TTL cache owned by this
    instance, so separate clients never share cached data.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        sandbox_mode: bool = False,
        session: Optional[aiohttp.ClientSession] = None,
        currency_cache_ttl: Optional[int] = None,
        timeout: Optional[float] = None,
        name: str = "default",
        authenticator: Optional[ExchangeAuthenticator] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Obiex API key
            api_secret: Obiex API secret
            sandbox_mode: Use the staging environment instead of production
            session: Existing aiohttp session to use (not closed by the client)
            currency_cache_ttl: Currency catalog TTL in seconds (default from config)
            timeout: Total request timeout in seconds (default from config)
            name: Label for the credential set (used in logs)
            authenticator: Header signer to use instead of the HMAC default
        """
        self.credentials = ObiexCredentials(api_key=api_key, api_secret=api_secret, name=name)
        self.authenticator: ExchangeAuthenticator = authenticator or ObiexAuthenticator(self.credentials)
        self.sandbox_mode = sandbox_mode
        self.base_url = get_base_url(sandbox_mode)
        self.currency_cache_ttl = (
            currency_cache_ttl if currency_cache_ttl is not None else get_currency_cache_ttl()
        )
        self.timeout = aiohttp.ClientTimeout(total=timeout if timeout is not None else get_request_timeout())
        self.cache = TTLCache()

        self._session = session
        self._owns_session = session is None

        logging.info(
            f"Initialized Obiex client for account: {name} "
            f"({'staging' if sandbox_mode else 'production'})"
        )

    @classmethod
    def from_env(
        cls,
        env_var: str = "OBIEX_CREDENTIALS",
        session: Optional[aiohttp.ClientSession] = None
    ) -> "ObiexClient":
        """
        Create a client from environment configuration.

        Reads credentials JSON from env_var, plus OBIEX_SANDBOX_MODE,
        OBIEX_CURRENCY_CACHE_TTL and OBIEX_REQUEST_TIMEOUT.

        Raises:
            ValueError: If credentials or settings are missing or invalid
        """
        credentials = ObiexCredentials.from_env(env_var)
        return cls(
            api_key=credentials.api_key,
            api_secret=credentials.api_secret,
            sandbox_mode=get_sandbox_mode(),
            session=session,
            name=credentials.name,
        )

    async def __aenter__(self) -> "ObiexClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send a signed request and return the parsed JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL, including the /v1 prefix
            params: Query parameters, serialized in the given order
            json_body: JSON request body

        Returns:
            Parsed JSON response body (None for an empty body)

        Raises:
            ObiexServerError: If the API returns a non-success status
            aiohttp.ClientError: On transport failures
            ValueError: If a success response body is not valid JSON
        """
        session = await self._ensure_session()
        method = method.upper()

        # The signed path and the transmitted path must be the same string
        request_path = build_request_path(path, params)
        headers = self.authenticator.get_auth_headers(method, request_path)
        url = URL(f"{self.base_url}{request_path}", encoded=True)

        logging.debug(f"{method} {url}")

        async with session.request(
            method,
            url,
            headers=headers,
            json=json_body,
            timeout=self.timeout,
        ) as response:
            text = await response.text()

            if not 200 <= response.status < 300:
                try:
                    body = json.loads(text) if text else None
                except ValueError:
                    body = None
                error = ObiexServerError.from_response_body(body, response.status, text)
                logging.error(f"Obiex API error on {method} {request_path}: {error}")
                raise error

            return json.loads(text) if text else None

    # Trading

    async def get_trade_pairs(self) -> Any:
        return await self._request("GET", f"{API_VERSION_PREFIX}/trades/pairs")

    async def get_trade_pairs_by_currency(self, currency_id: str) -> Any:
        return await self._request("GET", f"{API_VERSION_PREFIX}/currencies/{build_path_segment(currency_id)}/pairs")

    async def create_quote(
        self,
        source: str,
        target: str,
        side: "str | TradeSide",
        amount: float
    ) -> Any:
        """
        Create a quote for a trade.

        Args:
            source: Left hand side of the pair, i.e. BTC in BTC/USDT
            target: Right hand side of the pair, i.e. USDT in BTC/USDT
            side: BUY (USDT -> BTC) or SELL (BTC -> USDT) for BTC/USDT
            amount: The amount to trade

        Returns:
            Quote response from the API

        Raises:
            ValueError: If side is invalid or a currency code is unknown
            ObiexServerError: If the API rejects the quote
        """
        trade_side = TradeSide.parse(side)

        source_currency = await self.get_currency_by_code(source)
        if source_currency is None:
            raise ValueError(f"Unknown currency code: {source}")
        target_currency = await self.get_currency_by_code(target)
        if target_currency is None:
            raise ValueError(f"Unknown currency code: {target}")

        return await self._request("POST", f"{API_VERSION_PREFIX}/trades/quote", json_body={
            "sourceId": source_currency["id"],
            "targetId": target_currency["id"],
            "side": trade_side.value,
            "amount": amount,
        })

    async def accept_quote(self, quote_id: str) -> Any:
        """
        Accept a quote returned by create_quote.

        Args:
            quote_id: Quote ID from create_quote
        """
        return await self._request("POST", f"{API_VERSION_PREFIX}/trades/quote/{build_path_segment(quote_id)}")

    async def trade(
        self,
        source: str,
        target: str,
        side: "str | TradeSide",
        amount: float
    ) -> Any:
        """
        Swap one currency for another without reviewing the quoted price.

        Arguments are the same as create_quote.
        """
        trade_side = TradeSide.parse(side)
        quote = _payload(await self.create_quote(source, target, trade_side, amount))
        quote_id = quote.get("id") if isinstance(quote, dict) else None
        if not quote_id:
            raise ValueError("Quote response did not include an id")

        logging.info(f"Accepting quote {quote_id} for {trade_side.value} {amount} {source}/{target}")
        return await self.accept_quote(quote_id)

    async def get_trade_history(self, page: int = 1, page_size: int = 30) -> Any:
        return await self._request(
            "GET",
            f"{API_VERSION_PREFIX}/trades/me",
            params={"page": page, "pageSize": page_size},
        )

    async def get_trade_by_id(self, trade_id: str) -> Optional[Dict[str, Any]]:
        """
        Find a trade in the first page of trade history.

        Returns:
            The trade record, or None if it is not on that page
        """
        trades = _records(await self.get_trade_history())
        trade = next((t for t in trades if t.get("id") == trade_id), None)
        if trade is None:
            logging.warning(f"Trade {trade_id} not found in recent trade history")
        return trade

    # Wallets

    async def get_deposit_address(self, currency: str, network: str, identifier: str) -> DepositAddress:
        """
        Generate a deposit address for a currency.

        Re-using the same identifier always returns the same address.

        Args:
            currency: The currency code, e.g. BTC or USDT
            network: The network to receive on
            identifier: A unique identifier to tie to your users

        Returns:
            DepositAddress for the identifier
        """
        body = await self._request("POST", f"{API_VERSION_PREFIX}/addresses/broker", json_body={
            "currency": currency,
            "network": network,
            "purpose": identifier,
        })
        return DepositAddress.from_api(_payload(body) or {})

    async def withdraw_crypto(self, currency_code: str, amount: float, wallet: CryptoAccountPayout) -> Any:
        return await self._request("POST", f"{API_VERSION_PREFIX}/wallets/ext/debit/crypto", json_body={
            "amount": amount,
            "currency": currency_code,
            "destination": wallet.to_dict(),
        })

    async def withdraw_naira(self, amount: float, account: BankAccountPayout) -> Any:
        return await self._request("POST", f"{API_VERSION_PREFIX}/wallets/ext/debit/fiat", json_body={
            "amount": amount,
            "currency": "NGNX",
            "destination": account.to_dict(),
        })

    # Naira payments

    async def get_banks(self) -> Any:
        return await self._request("GET", f"{API_VERSION_PREFIX}/ngn-payments/banks")

    async def get_naira_merchants(self, page: int = 1, page_size: int = 30) -> Any:
        return await self._request(
            "GET",
            f"{API_VERSION_PREFIX}/ngn-payments/merchants",
            params={"page": page, "pageSize": page_size},
        )

    # Currencies

    async def get_currencies(self) -> Any:
        """Return the supported-currency catalog, cached for currency_cache_ttl seconds."""
        async def fetch_currencies() -> Any:
            logging.info("Refreshing Obiex currency catalog")
            return await self._request("GET", f"{API_VERSION_PREFIX}/currencies")

        return await self.cache.get_or_set(CURRENCIES_CACHE_KEY, fetch_currencies, self.currency_cache_ttl)

    async def get_currency_by_code(self, code: str) -> Optional[Dict[str, Any]]:
        """
        Look up a currency by its code, e.g. BTC.

        Returns:
            The currency record, or None if the catalog has no such code
        """
        currencies = _records(await self.get_currencies())
        currency = next((c for c in currencies if c.get("code") == code), None)
        if currency is None:
            logging.warning(f"Currency code {code} not found in Obiex currency catalog")
        return currency

    async def get_networks(self, currency_code: str) -> Any:
        """
        List the networks a currency can be sent or received on.

        Raises:
            ValueError: If the currency code is unknown
        """
        currency = await self.get_currency_by_code(currency_code)
        if currency is None:
            raise ValueError(f"Unknown currency code: {currency_code}")
        return await self._request("GET", f"{API_VERSION_PREFIX}/currencies/{build_path_segment(currency['id'])}/networks")

    # Transactions

    async def get_transaction_history(
        self,
        page: int = 1,
        page_size: int = 30,
        category: Optional[TransactionCategory] = None
    ) -> Any:
        """
        List the account's transactions.

        Args:
            page: Page number (default 1)
            page_size: Records per page (default 30)
            category: Only return this category (default all)
        """
        return await self._request(
            "GET",
            f"{API_VERSION_PREFIX}/transactions/me",
            params={"page": page, "pageSize": page_size, "category": category},
        )

    async def get_transaction_by_id(self, transaction_id: str) -> Any:
        return await self._request("GET", f"{API_VERSION_PREFIX}/transactions/{build_path_segment(transaction_id)}")
