"""
Deterministic query-string serialization.

The serialized path is both signed and transmitted, so it has to come out
byte-for-byte the same every time for the same parameters.
"""
from enum import Enum
import json
from typing import Any, Mapping, Optional, Sequence
from urllib.parse import quote


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def format_query_value(value: Any) -> str:
    """
    Serialize and percent-encode a single query parameter value.

    Sequences become a bracketed, comma-joined list of JSON strings rather
    than repeated keys, so quotes and backslashes inside items are escaped.

    Args:
        value: Scalar, enum member, None or sequence of those

    Returns:
        Encoded value ready to place after "key="

    Examples:
        >>> format_query_value(["BTC", "NGNX"])
        '[%22BTC%22,%22NGNX%22]'
        >>> format_query_value(None)
        ''
    """
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        items = ",".join(json.dumps(_format_scalar(item), ensure_ascii=False) for item in value)
        return quote(f"[{items}]", safe="[],")
    return quote(_format_scalar(value), safe="")


def build_path_segment(value: Any) -> str:
    """
    Percent-encode a value for use as a single path segment.

    Examples:
        >>> build_path_segment("tx 1")
        'tx%201'
        >>> build_path_segment("a/b")
        'a%2Fb'
    """
    return quote(_format_scalar(value), safe="")


def build_query_string(params: Optional[Mapping[str, Any]]) -> str:
    """
    Build a query string from params in the mapping's own order.

    Args:
        params: Query parameters

    Returns:
        "key=value" pairs joined by "&", without a leading "?"
    """
    if not params:
        return ""
    return "&".join(f"{quote(str(key), safe='')}={format_query_value(value)}" for key, value in params.items())


def build_request_path(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Append serialized query parameters to a request path.

    Args:
        path: Path relative to the base URL, including the /v1 prefix
        params: Optional query parameters

    Returns:
        The exact path string to sign and transmit

    Examples:
        >>> build_request_path("/v1/trades/me", {"page": 1, "pageSize": 30})
        '/v1/trades/me?page=1&pageSize=30'
    """
    query = build_query_string(params)
    if not query:
        return path
    return f"{path}?{query}"
