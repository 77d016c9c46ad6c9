import struct

import pytest

from flaretx.errors import ParseError, ParserError
from flaretx.outputs import (
    evm_output_item,
    parse_evm_inputs,
    parse_evm_outputs,
    parse_owners_output,
    parse_secp_inputs,
    parse_secp_outputs,
    renderable_outputs_number,
    secp_output_item,
)
from flaretx.reader import Reader

ASSET = bytes(32)
ADDR_A = b"\xaa" * 20
ADDR_B = b"\xbb" * 20
ADDR_C = b"\xcc" * 20


def secp_output(amount, addresses, locktime=0, threshold=None, type_id=7):
    if threshold is None:
        threshold = 1 if addresses else 0
    return (
        ASSET
        + struct.pack(">IQQII", type_id, amount, locktime, threshold, len(addresses))
        + b"".join(addresses)
    )


def secp_input(amount, indices=(0,), type_id=5):
    return (
        b"\x11" * 32
        + struct.pack(">I", 0)
        + ASSET
        + struct.pack(">IQI", type_id, amount, len(indices))
        + b"".join(struct.pack(">I", i) for i in indices)
    )


def evm_input(address, amount):
    return address + struct.pack(">Q", amount) + ASSET + struct.pack(">Q", 0)


def evm_output(address, amount):
    return address + struct.pack(">Q", amount) + ASSET


def owners(addresses, threshold=1, type_id=0xB):
    return struct.pack(">IQII", type_id, 0, threshold, len(addresses)) + b"".join(addresses)


def test_secp_outputs_parse():
    data = secp_output(100, [ADDR_A, ADDR_B]) + secp_output(200, [ADDR_C])
    reader = Reader(data)
    outs = parse_secp_outputs(reader, 2, True)
    assert reader.at_end()
    assert outs.count == 2
    assert outs.out_sum == 100 + 200
    assert outs.n_addrs == 3
    assert outs.entries[0] == (100, (ADDR_A, ADDR_B))


def test_secp_outputs_wrong_type():
    with pytest.raises(ParseError) as info:
        parse_secp_outputs(Reader(secp_output(1, [ADDR_A], type_id=5)), 1, False)
    assert info.value.error is ParserError.UNEXPECTED_TYPE_ID


def test_secp_outputs_locktime():
    data = secp_output(1, [ADDR_A], locktime=5)
    with pytest.raises(ParseError) as info:
        parse_secp_outputs(Reader(data), 1, True)
    assert info.value.error is ParserError.UNEXPECTED_OUTPUT_LOCKED
    assert parse_secp_outputs(Reader(data), 1, False).out_sum == 1


def test_secp_outputs_threshold():
    with pytest.raises(ParseError) as info:
        parse_secp_outputs(Reader(secp_output(1, [ADDR_A], threshold=2)), 1, False)
    assert info.value.error is ParserError.UNEXPECTED_THRESHOLD


def test_secp_outputs_truncated():
    data = secp_output(1, [ADDR_A])[:-3]
    with pytest.raises(ParseError) as info:
        parse_secp_outputs(Reader(data), 1, False)
    assert info.value.error is ParserError.UNEXPECTED_BUFFER_END


def test_secp_output_item_walks_amounts_and_addresses():
    data = secp_output(100, [ADDR_A, ADDR_B]) + secp_output(200, [ADDR_C])
    outs = parse_secp_outputs(Reader(data), 2, False)
    assert secp_output_item(outs, 0) == (100, None)
    assert secp_output_item(outs, 1) == (100, ADDR_A)
    assert secp_output_item(outs, 2) == (100, ADDR_B)
    assert secp_output_item(outs, 3) == (200, None)
    assert secp_output_item(outs, 4) == (200, ADDR_C)
    with pytest.raises(ParseError) as info:
        secp_output_item(outs, 5)
    assert info.value.error is ParserError.UNEXPECTED_NUMBER_ITEMS


def test_secp_inputs_parse():
    reader = Reader(secp_input(500, (0, 1)) + secp_input(700))
    ins = parse_secp_inputs(reader, 2)
    assert reader.at_end()
    assert ins.in_sum == 500 + 700
    assert ins.count == 2


def test_secp_inputs_wrong_type():
    with pytest.raises(ParseError) as info:
        parse_secp_inputs(Reader(secp_input(1, type_id=7)), 1)
    assert info.value.error is ParserError.UNEXPECTED_TYPE_ID


def test_evm_inputs_parse():
    reader = Reader(evm_input(ADDR_A, 40) + evm_input(ADDR_B, 60))
    ins = parse_evm_inputs(reader, 2)
    assert reader.at_end()
    assert ins.in_sum == 40 + 60


def test_evm_inputs_truncated():
    with pytest.raises(ParseError) as info:
        parse_evm_inputs(Reader(evm_input(ADDR_A, 40)[:-1]), 1)
    assert info.value.error is ParserError.UNEXPECTED_BUFFER_END


def test_evm_outputs_and_item():
    reader = Reader(evm_output(ADDR_A, 11) + evm_output(ADDR_B, 22))
    outs = parse_evm_outputs(reader, 2)
    assert reader.at_end()
    assert outs.out_sum == 11 + 22
    assert evm_output_item(outs, 1) == (22, ADDR_B)
    with pytest.raises(ParseError) as info:
        evm_output_item(outs, 2)
    assert info.value.error is ParserError.UNEXPECTED_NUMBER_ITEMS


def test_owners_output():
    reader = Reader(owners([ADDR_C, ADDR_A]))
    out = parse_owners_output(reader, 1)
    assert reader.at_end()
    assert out.n_addr == 2
    assert out.reward_address == ADDR_C


def test_owners_output_wrong_type():
    with pytest.raises(ParseError) as info:
        parse_owners_output(Reader(owners([ADDR_A], type_id=7)), 1)
    assert info.value.error is ParserError.UNEXPECTED_TYPE_ID


def test_owners_output_threshold():
    with pytest.raises(ParseError) as info:
        parse_owners_output(Reader(owners([], threshold=1)), 1)
    assert info.value.error is ParserError.UNEXPECTED_THRESHOLD


def test_renderable_outputs_number():
    assert renderable_outputs_number(0) == 0
    assert all(renderable_outputs_number(1 << k) == 1 for k in range(64))
    assert renderable_outputs_number((1 << 64) - 1) == 64