"""Formatting of amounts, timestamps and hashes, and paging of long values."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone

from .errors import ParseError, ParserError
from .txdef import Network

_U64_MODULUS = 1 << 64

_SYMBOL_BY_NETWORK = {
    Network.SONGBIRD: " SGB",
    Network.COSTON: " CFLR",
    Network.COSTON2: " C2FLR",
    Network.MAINNET: " FLR",
}


def remove_fraction(text: str) -> str:
    """Drop the decimal point when nothing but zeros follows it."""
    integer, dot, fraction = text.partition(".")
    if not dot:
        return text
    if fraction.strip("0"):
        return text
    return integer


def _to_fixed_point(digits: str, decimals: int) -> str:
    if decimals <= 0:
        return digits
    padded = digits.rjust(decimals + 1, "0")
    return f"{padded[:-decimals]}.{padded[-decimals:]}"


def _trim_trailing_zeros(text: str, keep_decimals: int) -> str:
    integer, dot, fraction = text.partition(".")
    if not dot:
        return text
    stripped = fraction.rstrip("0")
    if len(stripped) < keep_decimals:
        stripped = fraction[:keep_decimals]
    return f"{integer}.{stripped}"


def format_amount(amount: int, decimals: int, network: Network) -> str:
    """Render an amount, taken as an unsigned 64-bit value, with the network's symbol."""
    try:
        symbol = _SYMBOL_BY_NETWORK[network]
    except (KeyError, TypeError):
        raise ParseError(ParserError.UNEXPECTED_ERROR, f"unsupported network {network!r}") from None
    text = _to_fixed_point(str(amount % _U64_MODULUS), decimals)
    text = _trim_trailing_zeros(text, 1)
    return remove_fraction(text) + symbol


def format_timestamp(timestamp: int) -> str:
    """Render seconds since the epoch as ``YYYY-MM-DD hh:mm:ss UTC``."""
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        raise ParseError(ParserError.UNEXPECTED_ERROR, f"timestamp {timestamp}") from None
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} UTC"
    )


def format_hash(data: bytes) -> str:
    """Return the SHA-256 of ``data`` as lower-case hex."""
    return hashlib.sha256(bytes(data)).hexdigest()


def paginate(text: str, page_len: int, page_idx: int) -> tuple[str, int]:
    """Split ``text`` into pages for a field of ``page_len`` (terminator included).

    Returns the requested page and the page count. A page past the end is
    empty; an empty text has no pages.
    """
    chunk = page_len - 1
    if chunk <= 0 or not text:
        return "", 0
    page_count = -(-len(text) // chunk)
    if not 0 <= page_idx < page_count:
        return "", page_count
    start = page_idx * chunk
    return text[start : start + chunk], page_count