"""Top-level transaction parsing and the key/value view shown for review."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from .cchain import CChainExport, CChainImport, parse_cchain
from .display import paginate
from .errors import ParseError, ParserError, describe
from .pchain import PChainExport, PChainImport, StakingTx, parse_pchain
from .reader import Reader
from .txdef import (
    BLOCKCHAIN_ID_LEN,
    Chain,
    Network,
    TxType,
    chain_for_blockchain_id,
    network_from_id,
    tx_type_from_raw,
)

Body = Union[CChainExport, CChainImport, PChainExport, PChainImport, StakingTx]

DEFAULT_PAGE_LEN = 39


@dataclass(frozen=True)
class Transaction:
    """A parsed transaction together with the raw bytes it came from."""

    tx_type: TxType
    network: Network
    blockchain_id: bytes
    chain: Chain
    body: Body
    raw: bytes

    def num_items(self, expert: bool = False) -> int:
        """Number of items to display; expert mode adds the transaction hash."""
        count = self.body.item_count() + (1 if expert else 0)
        if count == 0:
            raise ParseError(ParserError.UNEXPECTED_NUMBER_ITEMS)
        return count

    def item(self, index: int, expert: bool = False) -> tuple[str, str]:
        """Return the ``(key, value)`` of displayed item ``index``."""
        if not 0 <= index < self.num_items(expert):
            raise ParseError(ParserError.DISPLAY_IDX_OUT_OF_RANGE, f"item {index}")
        if isinstance(self.body, StakingTx):
            return self.body.item(index, self.network, self.raw, expert)
        return self.body.item(index, self.network, self.raw)

    def items(self, expert: bool = False) -> Iterator[tuple[str, str]]:
        """Yield every displayed ``(key, value)`` pair in order."""
        for index in range(self.num_items(expert)):
            yield self.item(index, expert)


def _verify_codec(reader: Reader) -> None:
    codec = reader.read_u16()
    if codec != 0:
        raise ParseError(ParserError.INVALID_CODEC, f"codec {codec}")


def parse(data: bytes) -> Transaction:
    """Parse a serialized transaction, requiring every byte to be consumed."""
    reader = Reader(data)
    _verify_codec(reader)
    tx_type = tx_type_from_raw(reader.read_u32())
    network = network_from_id(reader.read_u32())
    blockchain_id = reader.read_bytes(BLOCKCHAIN_ID_LEN)
    chain = chain_for_blockchain_id(blockchain_id)

    if chain is Chain.C:
        body: Body = parse_cchain(reader, tx_type, blockchain_id)
    else:
        body = parse_pchain(reader, tx_type, blockchain_id)

    if not reader.at_end():
        raise ParseError(
            ParserError.UNEXPECTED_UNPARSED_BYTES,
            f"{reader.remaining} bytes left",
        )
    return Transaction(tx_type, network, blockchain_id, chain, body, bytes(data))


def dump_ui(transaction: Transaction, page_len: int = DEFAULT_PAGE_LEN, expert: bool = False) -> list[str]:
    """Render every item as ``idx | key [page/count] : value`` lines, one per page."""
    lines = []
    for index in range(transaction.num_items(expert)):
        try:
            key, value = transaction.item(index, expert)
        except ParseError as exc:
            lines.append(f"{index} |  : {describe(exc.error)}")
            continue
        page_idx = 0
        page_count = 1
        while page_idx < page_count:
            page, count = paginate(value, page_len, page_idx)
            page_count = max(count, 1)
            marker = f" [{page_idx + 1}/{page_count}]" if page_count > 1 else ""
            lines.append(f"{index} | {key}{marker} : {page}")
            page_idx += 1
    return lines


def main(argv: list[str] | None = None) -> int:
    """Parse hex-encoded transactions and print their review items."""
    arg_parser = argparse.ArgumentParser(description="Show the review items of Flare transactions.")
    arg_parser.add_argument("blobs", nargs="+", help="hex-encoded transaction")
    arg_parser.add_argument("--expert", action="store_true", help="show expert-mode items")
    arg_parser.add_argument("--page-len", type=int, default=DEFAULT_PAGE_LEN, help="display field length")
    args = arg_parser.parse_args(argv)

    status = 0
    for blob in args.blobs:
        try:
            data = bytes.fromhex(blob.removeprefix("0x"))
        except ValueError:
            print(f"invalid hex input: {blob!r}", file=sys.stderr)
            status = 1
            continue
        try:
            transaction = parse(data)
            lines = dump_ui(transaction, args.page_len, args.expert)
        except ParseError as exc:
            print(f"error: {exc}", file=sys.stderr)
            status = 1
            continue
        for line in lines:
            print(line)
    return status


if __name__ == "__main__":
    sys.exit(main())