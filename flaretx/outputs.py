"""Parsing of transaction inputs and outputs, and lookup of displayed items."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ParseError, ParserError
from .reader import Reader
from .txdef import (
    ADDRESS_LEN,
    ASSET_ID_LEN,
    LOCKTIME_LEN,
    NONCE_LEN,
    SECP_INPUT_TYPE_ID,
    SECP_OWNERS_TYPE_ID,
    SECP_TYPE_ID,
    TX_ID_LEN,
    UTXO_INDEX_LEN,
)

_U64_MASK = (1 << 64) - 1


def _sum_u64(amounts) -> int:
    return sum(amounts) & _U64_MASK


@dataclass(frozen=True)
class SecpOutputs:
    """Transferable SECP outputs: each entry is ``(amount, addresses)``."""

    entries: tuple[tuple[int, tuple[bytes, ...]], ...] = ()

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def out_sum(self) -> int:
        return _sum_u64(amount for amount, _ in self.entries)

    @property
    def n_addrs(self) -> int:
        return sum(len(addresses) for _, addresses in self.entries)


@dataclass(frozen=True)
class SecpInputs:
    """Transferable SECP inputs, kept as their amounts."""

    amounts: tuple[int, ...] = ()

    @property
    def count(self) -> int:
        return len(self.amounts)

    @property
    def in_sum(self) -> int:
        return _sum_u64(self.amounts)


@dataclass(frozen=True)
class EvmInputs:
    """EVM inputs, kept as their amounts."""

    amounts: tuple[int, ...] = ()

    @property
    def count(self) -> int:
        return len(self.amounts)

    @property
    def in_sum(self) -> int:
        return _sum_u64(self.amounts)


@dataclass(frozen=True)
class EvmOutputs:
    """EVM outputs: each entry is ``(address, amount)``."""

    entries: tuple[tuple[bytes, int], ...] = ()

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def out_sum(self) -> int:
        return _sum_u64(amount for _, amount in self.entries)


@dataclass(frozen=True)
class OwnersOutput:
    """SECP owners outputs: the addresses of each output, in order."""

    outputs: tuple[tuple[bytes, ...], ...] = ()

    @property
    def count(self) -> int:
        return len(self.outputs)

    @property
    def n_addr(self) -> int:
        return sum(len(addresses) for addresses in self.outputs)

    @property
    def addresses(self) -> tuple[bytes, ...]:
        """Addresses of the last owners output."""
        return self.outputs[-1] if self.outputs else ()

    @property
    def reward_address(self) -> bytes:
        """The first address of the last owners output."""
        if not self.addresses:
            raise ParseError(ParserError.MISSING_FIELD, "owners output has no address")
        return self.addresses[0]


def _check_threshold(threshold: int, n_addresses: int) -> None:
    if threshold > n_addresses or (n_addresses == 0 and threshold != 0):
        raise ParseError(
            ParserError.UNEXPECTED_THRESHOLD,
            f"threshold {threshold} with {n_addresses} addresses",
        )


def _expect_type_id(reader: Reader, expected: int) -> None:
    type_id = reader.read_u32()
    if type_id != expected:
        raise ParseError(ParserError.UNEXPECTED_TYPE_ID, f"type id {type_id:#x}")


def _read_addresses(reader: Reader, count: int) -> tuple[bytes, ...]:
    reader.require(ADDRESS_LEN * count)
    return tuple(reader.read_bytes(ADDRESS_LEN) for _ in range(count))


def parse_evm_inputs(reader: Reader, count: int) -> EvmInputs:
    """Parse ``count`` EVM inputs: address, amount, asset id and nonce."""
    amounts = []
    for _ in range(count):
        reader.skip(ADDRESS_LEN)
        amounts.append(reader.read_u64())
        reader.skip(ASSET_ID_LEN)
        reader.skip(NONCE_LEN)
    return EvmInputs(tuple(amounts))


def parse_secp_outputs(reader: Reader, count: int, verify_locktime: bool) -> SecpOutputs:
    """Parse ``count`` transferable SECP outputs.

    With ``verify_locktime`` any output with a non-zero locktime is rejected.
    """
    entries = []
    for _ in range(count):
        reader.skip(ASSET_ID_LEN)
        _expect_type_id(reader, SECP_TYPE_ID)
        amount = reader.read_u64()
        locktime = reader.read_u64()
        if verify_locktime and locktime != 0:
            raise ParseError(ParserError.UNEXPECTED_OUTPUT_LOCKED, f"locktime {locktime}")
        threshold = reader.read_u32()
        n_addresses = reader.read_u32()
        _check_threshold(threshold, n_addresses)
        entries.append((amount, _read_addresses(reader, n_addresses)))
    return SecpOutputs(tuple(entries))


def parse_evm_outputs(reader: Reader, count: int) -> EvmOutputs:
    """Parse ``count`` EVM outputs: address, amount and asset id."""
    entries = []
    for _ in range(count):
        address = reader.read_bytes(ADDRESS_LEN)
        amount = reader.read_u64()
        reader.skip(ASSET_ID_LEN)
        entries.append((address, amount))
    return EvmOutputs(tuple(entries))


def parse_secp_inputs(reader: Reader, count: int) -> SecpInputs:
    """Parse ``count`` transferable SECP inputs."""
    amounts = []
    for _ in range(count):
        reader.skip(TX_ID_LEN)
        reader.skip(UTXO_INDEX_LEN)
        reader.skip(ASSET_ID_LEN)
        _expect_type_id(reader, SECP_INPUT_TYPE_ID)
        amounts.append(reader.read_u64())
        n_indices = reader.read_u32()
        reader.skip(4 * n_indices)
    return SecpInputs(tuple(amounts))


def parse_owners_output(reader: Reader, count: int) -> OwnersOutput:
    """Parse ``count`` SECP owners outputs."""
    outputs = []
    for _ in range(count):
        _expect_type_id(reader, SECP_OWNERS_TYPE_ID)
        reader.skip(LOCKTIME_LEN)
        threshold = reader.read_u32()
        n_addresses = reader.read_u32()
        _check_threshold(threshold, n_addresses)
        outputs.append(_read_addresses(reader, n_addresses))
    return OwnersOutput(tuple(outputs))


def secp_output_item(outputs: SecpOutputs, index: int) -> tuple[int, bytes | None]:
    """Find displayed item ``index`` among SECP outputs.

    Each output shows its amount followed by its addresses. Returns the
    output's amount and, for an address item, that address (None for the
    amount item itself).
    """
    position = 0
    for amount, addresses in outputs.entries:
        if position == index:
            return amount, None
        for address in addresses:
            position += 1
            if position == index:
                return amount, address
        position += 1
    raise ParseError(ParserError.UNEXPECTED_NUMBER_ITEMS, f"output item {index}")


def evm_output_item(outputs: EvmOutputs, index: int) -> tuple[int, bytes]:
    """Return ``(amount, address)`` of EVM output ``index``."""
    if not 0 <= index < outputs.count:
        raise ParseError(ParserError.UNEXPECTED_NUMBER_ITEMS, f"output {index}")
    address, amount = outputs.entries[index]
    return amount, address


def renderable_outputs_number(mask: int) -> int:
    """Count the outputs flagged in a 64-bit mask."""
    return bin(mask & _U64_MASK).count("1")