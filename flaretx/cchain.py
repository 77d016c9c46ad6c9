"""C-chain atomic transactions: export to and import from the P-chain."""

from __future__ import annotations

from dataclasses import dataclass

from .addressing import format_address
from .display import format_amount, format_hash
from .errors import ParseError, ParserError
from .outputs import (
    EvmInputs,
    EvmOutputs,
    SecpInputs,
    SecpOutputs,
    evm_output_item,
    parse_evm_inputs,
    parse_evm_outputs,
    parse_secp_inputs,
    parse_secp_outputs,
    secp_output_item,
)
from .reader import Reader
from .txdef import (
    AMOUNT_DECIMAL_PLACES,
    BLOCKCHAIN_ID_LEN,
    MAX_INPUTS,
    MAX_OUTPUTS,
    Network,
    TxType,
    chain_alias,
)

_U64_MASK = (1 << 64) - 1


def _read_other_chain(reader: Reader, blockchain_id: bytes) -> bytes:
    """Read a 32-byte chain id that must differ from the transaction's own chain."""
    chain = reader.peek(BLOCKCHAIN_ID_LEN)
    if chain == bytes(blockchain_id[:BLOCKCHAIN_ID_LEN]):
        raise ParseError(ParserError.UNEXPECTED_CHAIN, "counterpart chain equals own chain")
    reader.skip(BLOCKCHAIN_ID_LEN)
    return chain


def _read_count(reader: Reader, limit: int, what: str) -> int:
    count = reader.read_u32()
    if count > limit:
        raise ParseError(ParserError.UNEXPECTED_NUMBER_ITEMS, f"{count} {what}")
    return count


def _amount_item(amount: int, network: Network) -> tuple[str, str]:
    return "Amount", format_amount(amount, AMOUNT_DECIMAL_PLACES, network)


def _out_of_range(index: int) -> ParseError:
    return ParseError(ParserError.DISPLAY_IDX_OUT_OF_RANGE, f"item {index}")


@dataclass(frozen=True)
class CChainExport:
    """An export from the C-chain: EVM inputs feeding SECP outputs on another chain."""

    destination_chain: bytes
    evm_inputs: EvmInputs
    secp_outputs: SecpOutputs

    @property
    def fee(self) -> int:
        return (self.evm_inputs.in_sum - self.secp_outputs.out_sum) & _U64_MASK

    @property
    def _output_items(self) -> int:
        return self.secp_outputs.n_addrs + self.secp_outputs.count

    def item_count(self) -> int:
        """Items shown outside expert mode: header, outputs, fee."""
        return 2 + self._output_items

    def item(self, index: int, network: Network, raw: bytes) -> tuple[str, str]:
        """Return the ``(key, value)`` of displayed item ``index``."""
        outputs = self._output_items
        if index == 0:
            return "Export", f"C to {chain_alias(self.destination_chain)} chain"
        if 1 <= index <= outputs:
            amount, address = secp_output_item(self.secp_outputs, index - 1)
            if address is None:
                return _amount_item(amount, network)
            return "Address", format_address(address, network)
        if index == outputs + 1:
            return "Fee", format_amount(self.fee, AMOUNT_DECIMAL_PLACES, network)
        if index == outputs + 2:
            return "Hash", format_hash(raw)
        raise _out_of_range(index)


@dataclass(frozen=True)
class CChainImport:
    """An import into the C-chain: SECP inputs from another chain paying EVM outputs."""

    source_chain: bytes
    secp_inputs: SecpInputs
    evm_outputs: EvmOutputs

    @property
    def fee(self) -> int:
        return (self.secp_inputs.in_sum - self.evm_outputs.out_sum) & _U64_MASK

    def item_count(self) -> int:
        """Items shown outside expert mode: header, amount and address per output, fee."""
        return 2 + 2 * self.evm_outputs.count

    def item(self, index: int, network: Network, raw: bytes) -> tuple[str, str]:
        """Return the ``(key, value)`` of displayed item ``index``."""
        outputs = 2 * self.evm_outputs.count
        if index == 0:
            return "Import", f"C from {chain_alias(self.source_chain)} chain"
        if 1 <= index <= outputs:
            amount, address = evm_output_item(self.evm_outputs, (index - 1) // 2)
            if (index - 1) % 2 == 0:
                return _amount_item(amount, network)
            return "Address", "0x" + address.hex()
        if index == outputs + 1:
            return "Fee", format_amount(self.fee, AMOUNT_DECIMAL_PLACES, network)
        if index == outputs + 2:
            return "Hash", format_hash(raw)
        raise _out_of_range(index)


def _parse_export(reader: Reader, blockchain_id: bytes) -> CChainExport:
    destination = _read_other_chain(reader, blockchain_id)
    n_ins = _read_count(reader, MAX_INPUTS, "inputs")
    inputs = parse_evm_inputs(reader, n_ins)
    n_outs = _read_count(reader, MAX_OUTPUTS, "outputs")
    outputs = parse_secp_outputs(reader, n_outs, False) if n_outs else SecpOutputs()
    return CChainExport(destination, inputs, outputs)


def _parse_import(reader: Reader, blockchain_id: bytes) -> CChainImport:
    source = _read_other_chain(reader, blockchain_id)
    n_ins = _read_count(reader, MAX_INPUTS, "inputs")
    inputs = parse_secp_inputs(reader, n_ins)
    n_outs = _read_count(reader, MAX_OUTPUTS, "outputs")
    outputs = parse_evm_outputs(reader, n_outs) if n_outs else EvmOutputs()
    return CChainImport(source, inputs, outputs)


def parse_cchain(reader: Reader, tx_type: TxType, blockchain_id: bytes) -> CChainExport | CChainImport:
    """Parse the body of a C-chain transaction of the given type."""
    if tx_type is TxType.C_EXPORT:
        return _parse_export(reader, blockchain_id)
    if tx_type is TxType.C_IMPORT:
        return _parse_import(reader, blockchain_id)
    raise ParseError(ParserError.UNEXPECTED_TYPE, f"{tx_type!r} is not a C-chain transaction")