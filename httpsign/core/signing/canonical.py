"""
Canonical Message

Builds the exact byte string that is signed by the client and verified by the
server.

Canonical Message Format:
    {method}{host}{path}{query}{timestamp}

Where:
    - method: HTTP method as received (no case folding)
    - host: Host header value, including the port if present
    - path: Escaped URL path, "/" when empty
    - query: Query parameters sorted by key then value, form-escaped,
             joined with "&"; empty string when there are none
    - timestamp: Value of the X-Signature-Timestamp header

The fields are concatenated without separators. Both sides parse the query
string and re-encode it, so any ordering of the same parameters produces the
same message.
"""

from typing import Dict, Iterable, List, Mapping, Tuple, Union
from urllib.parse import parse_qsl, quote_plus

QueryParams = Mapping[str, Iterable[str]]

# Invalid UTF-8 in a query is carried as lone surrogates so it re-encodes to
# the original bytes.
_ERRORS = "surrogateescape"


def _raw(value: str) -> bytes:
    return value.encode("utf-8", _ERRORS)


def parse_query(query_string: Union[str, bytes]) -> Dict[str, List[str]]:
    """
    Parse a raw query string into a key -> values mapping.

    Blank values are kept, so "a=&b" yields {"a": [""], "b": [""]}.
    Escapes that are not valid UTF-8 ("x=%FF") are preserved byte for byte.
    """
    if isinstance(query_string, bytes):
        query_string = query_string.decode("utf-8", _ERRORS)
    return query_from_items(
        parse_qsl(query_string, keep_blank_values=True, encoding="utf-8", errors=_ERRORS)
    )


def query_from_items(items: Iterable[Tuple[str, str]]) -> Dict[str, List[str]]:
    """Group (key, value) pairs by key, keeping duplicate keys."""
    params: Dict[str, List[str]] = {}
    for key, value in items:
        params.setdefault(key, []).append(value)
    return params


def encode_query(params: QueryParams) -> str:
    """
    Encode query parameters sorted by both key and value.

    Args:
        params: Mapping of key to one or more values

    Returns:
        "URL encoded" form such as "bar=baz&foo=quux", or "" if empty

    Example:
        >>> encode_query({"b": ["2", "1"], "a": ["3"]})
        'a=3&b=1&b=2'
    """
    if not params:
        return ""
    pairs = []
    for key in sorted(params, key=_raw):
        escaped_key = quote_plus(_raw(key), safe="")
        for value in sorted(params[key], key=_raw):
            pairs.append(f"{escaped_key}={quote_plus(_raw(value), safe='')}")
    return "&".join(pairs)


def create_canonical_message(
    method: str,
    host: str,
    path: str,
    query: Union[QueryParams, str],
    timestamp: str,
) -> bytes:
    """
    Create the canonical message for signing/verification.

    Args:
        method: HTTP method
        host: Request host (with port, if any)
        path: Escaped request path
        query: Query parameters, or an already encoded canonical query
        timestamp: RFC 3339 UTC timestamp string

    Returns:
        Canonical message bytes

    Example:
        >>> create_canonical_message("GET", "example.com", "/r", {"a": ["3"]}, "2024-01-01T00:00:00Z")
        b'GETexample.com/ra=32024-01-01T00:00:00Z'
    """
    if not path:
        path = "/"  # See RFC 9110, section 4.2.3
    if not isinstance(query, str):
        query = encode_query(query)
    return f"{method}{host}{path}{query}{timestamp}".encode("utf-8")
