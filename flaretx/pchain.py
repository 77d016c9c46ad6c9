"""P-chain transactions: atomic export and import, and validator/delegator staking."""

from __future__ import annotations

from dataclasses import dataclass

from .addressing import format_address, format_node_id
from .display import format_amount, format_hash, format_timestamp
from .errors import ParseError, ParserError
from .outputs import (
    OwnersOutput,
    SecpInputs,
    SecpOutputs,
    parse_owners_output,
    parse_secp_inputs,
    parse_secp_outputs,
    secp_output_item,
)
from .reader import Reader
from .txdef import (
    AMOUNT_DECIMAL_PLACES,
    BLOCKCHAIN_ID_LEN,
    MAX_INPUTS,
    MAX_MEMO_LEN,
    MAX_OUTPUTS,
    NODE_ID_LEN,
    SHARES_DIVISION_BASE,
    Network,
    TxType,
    chain_alias,
)

_U64_MASK = (1 << 64) - 1


def _read_count(reader: Reader, limit: int, what: str) -> int:
    count = reader.read_u32()
    if count > limit:
        raise ParseError(ParserError.UNEXPECTED_NUMBER_ITEMS, f"{count} {what}")
    return count


def _read_other_chain(reader: Reader, blockchain_id: bytes) -> bytes:
    """Read a 32-byte chain id that must differ from the transaction's own chain."""
    chain = reader.peek(BLOCKCHAIN_ID_LEN)
    if chain == bytes(blockchain_id[:BLOCKCHAIN_ID_LEN]):
        raise ParseError(ParserError.UNEXPECTED_CHAIN, "counterpart chain equals own chain")
    reader.skip(BLOCKCHAIN_ID_LEN)
    return chain


def _parse_base(reader: Reader) -> tuple[SecpOutputs, SecpInputs]:
    """Parse the base transaction: outputs, inputs and the memo length."""
    n_outs = _read_count(reader, MAX_OUTPUTS, "outputs")
    outputs = parse_secp_outputs(reader, n_outs, True) if n_outs else SecpOutputs()
    n_ins = reader.read_u32()
    inputs = parse_secp_inputs(reader, n_ins) if n_ins else SecpInputs()
    memo_len = reader.read_u32()
    if memo_len > MAX_MEMO_LEN:
        raise ParseError(ParserError.UNEXPECTED_NUMBER_ITEMS, f"memo of {memo_len} bytes")
    return outputs, inputs


def _amount(amount: int, network: Network) -> str:
    return format_amount(amount, AMOUNT_DECIMAL_PLACES, network)


def _secp_item(outputs: SecpOutputs, index: int, network: Network) -> tuple[str, str]:
    amount, address = secp_output_item(outputs, index)
    if address is None:
        return "Amount", _amount(amount, network)
    return "Address", format_address(address, network)


def _out_of_range(index: int) -> ParseError:
    return ParseError(ParserError.DISPLAY_IDX_OUT_OF_RANGE, f"item {index}")


@dataclass(frozen=True)
class PChainExport:
    """An export from the P-chain to another chain."""

    base_outputs: SecpOutputs
    base_inputs: SecpInputs
    destination_chain: bytes
    outputs: SecpOutputs

    @property
    def fee(self) -> int:
        spent = self.base_outputs.out_sum + self.outputs.out_sum
        return (self.base_inputs.in_sum - spent) & _U64_MASK

    @property
    def _output_items(self) -> int:
        return self.outputs.n_addrs + self.outputs.count

    def item_count(self) -> int:
        """Items shown outside expert mode: header, outputs, fee."""
        return 2 + self._output_items

    def item(self, index: int, network: Network, raw: bytes) -> tuple[str, str]:
        """Return the ``(key, value)`` of displayed item ``index``."""
        outputs = self._output_items
        if index == 0:
            return "Export", f"P to {chain_alias(self.destination_chain)} chain"
        if 1 <= index <= outputs:
            return _secp_item(self.outputs, index - 1, network)
        if index == outputs + 1:
            return "Fee", _amount(self.fee, network)
        if index == outputs + 2:
            return "Hash", format_hash(raw)
        raise _out_of_range(index)


@dataclass(frozen=True)
class PChainImport:
    """An import into the P-chain from another chain."""

    base_outputs: SecpOutputs
    base_inputs: SecpInputs
    source_chain: bytes
    inputs: SecpInputs

    @property
    def fee(self) -> int:
        received = self.base_inputs.in_sum + self.inputs.in_sum
        return (received - self.base_outputs.out_sum) & _U64_MASK

    @property
    def _output_items(self) -> int:
        return self.base_outputs.n_addrs + self.base_outputs.count

    def item_count(self) -> int:
        """Items shown outside expert mode: header, outputs, fee."""
        return 2 + self._output_items

    def item(self, index: int, network: Network, raw: bytes) -> tuple[str, str]:
        """Return the ``(key, value)`` of displayed item ``index``."""
        outputs = self._output_items
        if index == 0:
            return "Import", f"P from {chain_alias(self.source_chain)} chain"
        if 1 <= index <= outputs:
            return _secp_item(self.base_outputs, index - 1, network)
        if index == outputs + 1:
            return "Fee", _amount(self.fee, network)
        if index == outputs + 2:
            return "Hash", format_hash(raw)
        raise _out_of_range(index)


@dataclass(frozen=True)
class StakingTx:
    """An add-validator or add-delegator transaction."""

    tx_type: TxType
    base_outputs: SecpOutputs
    base_inputs: SecpInputs
    node_id: bytes
    start_time: int
    end_time: int
    weight: int
    staked_outputs: SecpOutputs
    owners: OwnersOutput
    shares: int = 0

    @property
    def is_delegator(self) -> bool:
        return self.tx_type is TxType.ADD_DELEGATOR

    @property
    def fee(self) -> int:
        spent = self.base_outputs.out_sum + self.staked_outputs.out_sum
        return (self.base_inputs.in_sum - spent) & _U64_MASK

    def item_count(self) -> int:
        """Items shown outside expert mode; a delegator has no delegate fee."""
        return 6 if self.is_delegator else 7

    def item(self, index: int, network: Network, raw: bytes, expert: bool) -> tuple[str, str]:
        """Return the ``(key, value)`` of displayed item ``index``."""
        slot = index + 1 if self.is_delegator and index >= 5 else index
        if slot == 0:
            return "Validator", format_node_id(self.node_id)
        if slot == 1:
            return "Start time", format_timestamp(self.start_time)
        if slot == 2:
            return "End time", format_timestamp(self.end_time)
        if slot == 3:
            return "Total stake", _amount(self.staked_outputs.out_sum, network)
        if slot == 4:
            return "Rewards to", format_address(self.owners.reward_address, network)
        if slot == 5:
            return "Delegate fee", f"{self.shares // SHARES_DIVISION_BASE} %"
        if slot == 6:
            return "Fee", _amount(self.fee, network)
        if expert and slot == 7:
            return "Hash", format_hash(raw)
        raise _out_of_range(index)


def _parse_export(reader: Reader, blockchain_id: bytes) -> PChainExport:
    base_outputs, base_inputs = _parse_base(reader)
    destination = _read_other_chain(reader, blockchain_id)
    n_outs = _read_count(reader, MAX_OUTPUTS, "outputs")
    outputs = parse_secp_outputs(reader, n_outs, True)
    return PChainExport(base_outputs, base_inputs, destination, outputs)


def _parse_import(reader: Reader, blockchain_id: bytes) -> PChainImport:
    base_outputs, base_inputs = _parse_base(reader)
    source = _read_other_chain(reader, blockchain_id)
    n_ins = _read_count(reader, MAX_INPUTS, "inputs")
    inputs = parse_secp_inputs(reader, n_ins)
    return PChainImport(base_outputs, base_inputs, source, inputs)


def _parse_staking(reader: Reader, tx_type: TxType) -> StakingTx:
    base_outputs, base_inputs = _parse_base(reader)
    node_id = reader.read_bytes(NODE_ID_LEN)
    start_time = reader.read_u64()
    end_time = reader.read_u64()
    if end_time <= start_time:
        raise ParseError(ParserError.INVALID_TIME_STAMP, f"ends at {end_time}, starts at {start_time}")
    weight = reader.read_u64()
    n_outs = _read_count(reader, MAX_OUTPUTS, "outputs")
    staked = parse_secp_outputs(reader, n_outs, False)
    if weight != staked.out_sum:
        raise ParseError(ParserError.INVALID_STAKE_AMOUNT, f"weight {weight}, staked {staked.out_sum}")
    owners = parse_owners_output(reader, 1)
    shares = reader.read_u32() if tx_type is TxType.ADD_VALIDATOR else 0
    return StakingTx(
        tx_type=tx_type,
        base_outputs=base_outputs,
        base_inputs=base_inputs,
        node_id=node_id,
        start_time=start_time,
        end_time=end_time,
        weight=weight,
        staked_outputs=staked,
        owners=owners,
        shares=shares,
    )


def parse_pchain(
    reader: Reader, tx_type: TxType, blockchain_id: bytes
) -> PChainExport | PChainImport | StakingTx:
    """Parse the body of a P-chain transaction of the given type."""
    if tx_type is TxType.P_EXPORT:
        return _parse_export(reader, blockchain_id)
    if tx_type is TxType.P_IMPORT:
        return _parse_import(reader, blockchain_id)
    if tx_type in (TxType.ADD_DELEGATOR, TxType.ADD_VALIDATOR):
        return _parse_staking(reader, tx_type)
    raise ParseError(ParserError.UNEXPECTED_TYPE, f"{tx_type!r} is not a P-chain transaction")