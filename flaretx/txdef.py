"""Wire constants, identifiers and lookup tables for Flare transactions."""

from __future__ import annotations

from enum import Enum

from .errors import ParseError, ParserError

CLA = 0x58
COIN_AMOUNT_DECIMAL_PLACES = 6
AMOUNT_DECIMAL_PLACES = 9

BLOCKCHAIN_ID_LEN = 32
ASSET_ID_LEN = 32
NONCE_LEN = 8
AMOUNT_LEN = 8
NODE_ID_LEN = 20
NODE_ID_MAX_SIZE = 41
CB58_CHECKSUM_LEN = 4
TX_ID_LEN = 32
ADDRESS_LEN = 20
TYPE_ID_LEN = 4
LOCKTIME_LEN = 8
THRESHOLD_LEN = 4
UTXO_INDEX_LEN = 4
SECP_TYPE_ID = 0x7
SECP_INPUT_TYPE_ID = 0x5
SECP_OWNERS_TYPE_ID = 0xB
MAX_MEMO_LEN = 256
SHARES_DIVISION_BASE = 10000

AMOUNT_OFFSET = ASSET_ID_LEN + TYPE_ID_LEN
N_ADDRESS_OFFSET = LOCKTIME_LEN + THRESHOLD_LEN
ADDRESS_OFFSET = N_ADDRESS_OFFSET + 4

MAX_OUTPUTS = 64
MAX_INPUTS = 64


class Network(Enum):
    """Supported networks, valued by their numeric network id."""

    MAINNET = 14
    SONGBIRD = 5
    COSTON = 7
    COSTON2 = 114


class Chain(Enum):
    """Chains, valued by their one-letter alias."""

    P = "P"
    C = "C"


class TxType(Enum):
    """Transaction types, valued by their raw type id."""

    C_IMPORT = 0x00000000
    C_EXPORT = 0x00000001
    ADD_VALIDATOR = 0x0000000C
    ADD_DELEGATOR = 0x0000000E
    P_IMPORT = 0x00000011
    P_EXPORT = 0x00000012


_P_CHAIN_ID = bytes(BLOCKCHAIN_ID_LEN)

_CHAIN_LOOKUP: dict[bytes, Chain] = {
    # Flare
    bytes.fromhex("77d3074dc510f43b09ac5be77edee276ef3b55f0097d504846aa8eec613fc625"): Chain.C,
    # Coston2
    bytes.fromhex("78db5c30bed04c05ce20917981285 0bbb3fe6d46d7eef3744d814c0da5552479".replace(" ", "")): Chain.C,
    # Songbird
    bytes.fromhex("55f077ed3388898d7c52c1a10cae70e83450c33499f4eb1ae81877b6f8fda402"): Chain.C,
    # Coston
    bytes.fromhex("ffb119b404c1356b6bfdb80045e27ba13c3789b5b3684f001da071cd4e6db09c"): Chain.C,
    _P_CHAIN_ID: Chain.P,
}


def network_from_id(raw: int) -> Network:
    """Map a raw network id to a Network."""
    try:
        return Network(raw)
    except ValueError:
        raise ParseError(ParserError.UNEXPECTED_NETWORK, f"network id {raw}") from None


def tx_type_from_raw(raw: int) -> TxType:
    """Map a raw transaction type id to a TxType."""
    try:
        return TxType(raw)
    except ValueError:
        raise ParseError(ParserError.UNKNOWN_TRANSACTION, f"type id {raw:#x}") from None


def chain_for_blockchain_id(blockchain_id: bytes) -> Chain:
    """Return the chain a 32-byte blockchain id belongs to."""
    chain = _CHAIN_LOOKUP.get(bytes(blockchain_id[:BLOCKCHAIN_ID_LEN]))
    if chain is None or len(blockchain_id) < BLOCKCHAIN_ID_LEN:
        raise ParseError(ParserError.UNEXPECTED_CHAIN)
    return chain


def chain_alias(blockchain_id: bytes) -> str:
    """Return the one-letter alias of the chain with this blockchain id."""
    return chain_for_blockchain_id(blockchain_id).value