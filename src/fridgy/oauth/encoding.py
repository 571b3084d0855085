"""RFC 3986 percent-encoding as used by OAuth 1.0a signing."""

from urllib.parse import quote, unquote

# RFC 3986 section 2.3 unreserved characters besides ALPHA and DIGIT.
_UNRESERVED = "-._~"


def percent_encode(value: str) -> str:
    """Percent-encode every UTF-8 byte outside the unreserved set."""
    return quote(value, safe=_UNRESERVED, encoding="utf-8", errors="strict")


def percent_decode(value: str) -> str:
    """Reverse :func:`percent_encode`."""
    return unquote(value, encoding="utf-8", errors="strict")
