# flaretx

`flaretx` decodes the binary atomic transactions of the Flare Network
(mainnet, Songbird, Coston and Coston2). It turns each one into the list of
key/value screens that someone checks before signing.

It reads these kinds of transaction:

- P-chain export and import
- C-chain export and import
- add-delegator and add-validator staking transactions

Every transaction is checked as it is read. The checks cover the codec, the
transaction type, the network id, the blockchain id, the type ids, thresholds,
locktimes, the memo length, the number of inputs and outputs, the stake amount
and the staking time range. They also make sure no bytes are left over. If any
check fails, `flaretx.parser.parse` raises `flaretx.errors.ParseError`. The
exception's `error` attribute holds a `flaretx.errors.ParserError` code, and
`flaretx.errors.describe` turns that code into readable text.

## Installation

```
pip install flaretx
```

## Library use

```python
from flaretx.parser import parse, dump_ui

tx = parse(bytes.fromhex(blob_hex))

print(tx.tx_type, tx.network, tx.chain)
print(tx.num_items(expert=False))
for key, value in tx.items(expert=True):
    print(key, value)

# The same screens, split into pages of at most 38 characters
# (a field length of 39 that includes the terminator):
for line in dump_ui(tx, 39, expert=False):
    print(line)
```

`Transaction.item(index, expert)` returns one `(key, value)` pair. An index
out of range raises `ParseError`. Expert mode adds one last screen, `Hash`,
which shows the SHA-256 digest of the whole transaction in hex.

`dump_ui` writes one line for each page, in the form
`index | key [page/count] : value`. The `[page/count]` marker appears only
when a value needs more than one page.

Helpers you can use on their own:

- `flaretx.addressing.pubkey_to_address(pubkey, network)` hashes a public key
  with SHA-256 and then RIPEMD-160, and encodes the result as a bech32
  address. The address starts with `flare`, `song`, `coston` or `costwo`,
  depending on the `flaretx.txdef.Network`.
- `flaretx.addressing.format_node_id(node_id)` renders a 20-byte node id as
  `NodeID-` followed by its CB58 encoding.
- `flaretx.display.format_amount(amount, decimals, network)` renders an amount
  with the network's ticker: FLR, SGB, CFLR or C2FLR.
- `flaretx.display.format_timestamp(timestamp)` renders Unix seconds as
  `YYYY-MM-DD hh:mm:ss UTC`.
- `flaretx.reader.Reader` is a bounds-checked, big-endian cursor over bytes.

## Command line

```
flaretx [--expert] [--page-len N] <hex-encoded transaction> [...]
```

The command parses each transaction and prints the `dump_ui` lines. A `0x`
prefix on the hex is accepted. `--expert` adds the hash screen, and
`--page-len` sets the field length, which defaults to 39. If an input is
invalid, the command prints a message to stderr and exits with status 1.

## What it does not do

`flaretx` only reads and displays transactions. It does not sign anything,
hold keys, or talk to a device or a node. It does not parse plain EVM
(Ethereum-style) transactions. Its C-chain support covers only the atomic
export and import transactions.