"""
Tests for query-string serialization.
"""
import pytest

from obiex.models import TransactionCategory
from obiex.query import build_path_segment, build_query_string, build_request_path, format_query_value


class TestFormatQueryValue:
    """Test single value encoding."""

    @pytest.mark.parametrize("value,expected", [
        (1, "1"),
        ("BTC", "BTC"),
        (None, ""),
        (True, "true"),
        (False, "false"),
        (TransactionCategory.SWAP, "SWAP"),
        ("a b&c=d", "a%20b%26c%3Dd"),
        ("/", "%2F"),
    ])
    def test_scalars(self, value: object, expected: str) -> None:
        assert format_query_value(value) == expected

    def test_list_is_bracketed_and_quoted(self) -> None:
        """Test arrays serialize as a quoted, comma-joined list."""
        assert format_query_value(["BTC", "NGNX"]) == "[%22BTC%22,%22NGNX%22]"

    def test_tuple_of_enums(self) -> None:
        assert format_query_value((TransactionCategory.DEPOSIT, TransactionCategory.SWAP)) == "[%22DEPOSIT%22,%22SWAP%22]"

    def test_empty_list(self) -> None:
        assert format_query_value([]) == "[]"

    def test_list_items_are_escaped(self) -> None:
        """Test quotes and commas inside items cannot split or end an item."""
        assert format_query_value(['a"b,c', "d"]) == "[%22a%5C%22b,c%22,%22d%22]"


class TestBuildPathSegment:
    """Test path segment encoding."""

    @pytest.mark.parametrize("value,expected", [
        ("tx-1", "tx-1"),
        ("tx 1", "tx%201"),
        ("a/b", "a%2Fb"),
        ("a?b#c", "a%3Fb%23c"),
        (42, "42"),
    ])
    def test_segments(self, value: object, expected: str) -> None:
        assert build_path_segment(value) == expected


class TestBuildRequestPath:
    """Test full path construction."""

    def test_no_params(self) -> None:
        assert build_request_path("/v1/trades/pairs") == "/v1/trades/pairs"
        assert build_request_path("/v1/trades/pairs", {}) == "/v1/trades/pairs"

    def test_params_keep_caller_order(self) -> None:
        """Test parameters are not re-sorted."""
        assert build_request_path("/v1/trades/me", {"pageSize": 30, "page": 1}) == "/v1/trades/me?pageSize=30&page=1"

    def test_none_becomes_empty_value(self) -> None:
        """Test an absent category is still sent as an empty value."""
        path = build_request_path("/v1/transactions/me", {"page": 1, "pageSize": 30, "category": None})

        assert path == "/v1/transactions/me?page=1&pageSize=30&category="

    def test_array_param(self) -> None:
        path = build_request_path("/v1/transactions/me", {"categories": ["DEPOSIT", "SWAP"]})

        assert path == "/v1/transactions/me?categories=[%22DEPOSIT%22,%22SWAP%22]"

    def test_deterministic(self) -> None:
        params = {"page": 2, "pageSize": 10, "category": TransactionCategory.TRANSFER}

        assert build_query_string(params) == build_query_string(dict(params))
        assert build_query_string(params) == "page=2&pageSize=10&category=TRANSFER"
