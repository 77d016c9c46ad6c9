"""Address, node-id and hash encodings used when displaying transactions."""

from __future__ import annotations

import hashlib

from Crypto.Hash import RIPEMD160

from .errors import ParseError, ParserError
from .txdef import ADDRESS_LEN, CB58_CHECKSUM_LEN, NODE_ID_LEN, Network

_BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_BECH32_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_BECH32_CONST = 1

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_NODE_ID_PREFIX = "NodeID-"

_HRP_BY_NETWORK = {
    Network.SONGBIRD: "song",
    Network.COSTON: "coston",
    Network.COSTON2: "costwo",
    Network.MAINNET: "flare",
}


def _polymod(values: list[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_BECH32_GENERATORS):
            if (top >> bit) & 1:
                chk ^= generator
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(ch) >> 5 for ch in hrp] + [0] + [ord(ch) & 31 for ch in hrp]


def _to_words(data: bytes) -> list[int]:
    """Regroup 8-bit bytes into 5-bit words, padding the last one."""
    acc = 0
    bits = 0
    words = []
    for byte in data:
        acc = (acc << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            words.append((acc >> bits) & 31)
    if bits:
        words.append((acc << (5 - bits)) & 31)
    return words


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode raw bytes as a bech32 string with the given human-readable part."""
    if not hrp or any(not 33 <= ord(ch) <= 126 for ch in hrp):
        raise ValueError(f"invalid bech32 human-readable part: {hrp!r}")
    hrp = hrp.lower()
    words = _to_words(bytes(data))
    polymod = _polymod(_hrp_expand(hrp) + words + [0] * 6) ^ _BECH32_CONST
    checksum = [(polymod >> (5 * (5 - i))) & 31 for i in range(6)]
    return hrp + "1" + "".join(_BECH32_CHARSET[word] for word in words + checksum)


def base58_encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    data = bytes(data)
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_BASE58_ALPHABET[remainder])
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return "1" * leading_zeros + "".join(reversed(digits))


def hash160(data: bytes) -> bytes:
    """Return RIPEMD-160 of the SHA-256 of ``data``."""
    digest = hashlib.sha256(bytes(data)).digest()
    return RIPEMD160.new(digest).digest()


def _hrp_for(network: Network) -> str:
    try:
        return _HRP_BY_NETWORK[network]
    except (KeyError, TypeError):
        raise ParseError(ParserError.UNEXPECTED_ERROR, f"unsupported network {network!r}") from None


def format_address(address: bytes, network: Network) -> str:
    """Render a 20-byte address as a bech32 string for the network."""
    if address is None:
        raise ParseError(ParserError.UNEXPECTED_ERROR, "missing address")
    if len(address) != ADDRESS_LEN:
        raise ParseError(ParserError.UNEXPECTED_DATA_LEN, f"address of {len(address)} bytes")
    return bech32_encode(_hrp_for(network), address)


def pubkey_to_address(pubkey: bytes, network: Network) -> str:
    """Derive the bech32 address of a public key on the network."""
    return format_address(hash160(pubkey), network)


def format_node_id(node_id: bytes) -> str:
    """Render a 20-byte node id as ``NodeID-`` followed by its CB58 encoding."""
    if node_id is None:
        raise ParseError(ParserError.UNEXPECTED_ERROR, "missing node id")
    node_id = bytes(node_id)
    if len(node_id) != NODE_ID_LEN:
        raise ParseError(ParserError.UNEXPECTED_DATA_LEN, f"node id of {len(node_id)} bytes")
    checksum = hashlib.sha256(node_id).digest()[-CB58_CHECKSUM_LEN:]
    return _NODE_ID_PREFIX + base58_encode(node_id + checksum)