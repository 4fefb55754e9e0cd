# beanledger

Building blocks for working with Beancount ledgers in Python:

- **Syntax tree** — `beanledger.model` holds dataclasses for directives
  (`Transaction`, `Open`, `Close`, `Balance`, `Pad`, `Note`, `Document`,
  `Price`, `Event`, `Custom`, `Commodity`), file-level entries (`Option`,
  `Include`, `Plugin`, `Pushtag`, `Poptag`, `Pushmeta`, `Popmeta`), postings,
  amounts, costs and source positions, gathered in a `Tree`.
- **Formatting** — `beanledger.formatter.Formatter` renders a `Tree` with
  currencies aligned to one column, and keeps the source's comments, blank
  lines and amount expressions such as `(10 + 20)`.
- **Inventories** — `beanledger.inventory.Inventory` tracks lots with cost basis
  and reduces them by lot or with the FIFO, LIFO, AVERAGE or NONE booking methods.
- **Tolerances** — `beanledger.amount` infers balancing tolerances from the
  precision of amounts and reads the `tolerance_multiplier`,
  `inferred_tolerance_default` and `infer_tolerance_from_cost` options.
- **Accounts, deltas and errors** — account types and open/close dates
  (`beanledger.account`), change records (`beanledger.deltas`) and validation
  errors with `file:line:` style messages (`beanledger.errors`).

## Installing

```
pip install beanledger
```

## Formatting a transaction

```python
import datetime

from beanledger.formatter import Formatter
from beanledger.model import Amount, Posting, Transaction

txn = Transaction(
    date=datetime.date(2021, 1, 1),
    flag="*",
    narration="Groceries",
    postings=[
        Posting(account="Assets:Checking", amount=Amount("-50.00", "USD")),
        Posting(account="Expenses:Food", amount=Amount("50.00", "USD")),
    ],
)

print(Formatter().format_transaction(txn), end="")
```

For a whole ledger, build a `Tree` and call `Formatter(source=text).format(tree)`
to get the text back, or `write(tree, stream)` to write it to a text stream.
Entries are emitted in the order of their `pos.line`.

Passing the original `source` (a `str` or `bytes`) lets the formatter:

- keep comment lines (`;` lines, and `#` lines that do not start a directive)
  and blank lines between entries, unless `preserve_comments=False` or
  `preserve_blanks=False`;
- print amounts exactly as written, using each `Amount`'s `span`;
- reuse the original text of directives that are not realigned (options,
  includes, plugins, tag and meta stacks, open, close, commodity, pad, note,
  document, event, custom). Transactions, balances and prices are always
  rebuilt and aligned.

The currency column is computed from the content unless `currency_column` is
given; `prefix_width` and `num_width` set it as their sum. The computed value is
left in `Formatter.currency_column`.

## Inventories and booking

```python
from decimal import Decimal

from beanledger.inventory import Inventory, LotSpec

inv = Inventory()
inv.add_lot("AAPL", Decimal(10), LotSpec(cost=Decimal(100), cost_currency="USD"))
inv.add_lot("AAPL", Decimal(10), LotSpec(cost=Decimal(120), cost_currency="USD"))
inv.reduce_lot("AAPL", Decimal(-5), LotSpec(), "AVERAGE")
print(inv.get("AAPL"))  # 15
```

`reduce_lot` takes a negative amount. An empty `LotSpec()` reduces with the
booking method given; a spec with a cost reduces that lot only; `None` simply
adds the negative amount. Reductions that cannot be satisfied raise
`InventoryError`; the `STRICT` method with an empty spec, or an unknown method,
raises `ValueError`.

## Tolerances

```python
from decimal import Decimal

from beanledger.amount import infer_tolerance, parse_tolerance_config

config = parse_tolerance_config({"tolerance_multiplier": "0.6"})
print(infer_tolerance([Decimal("100.00")], "USD", config))  # 0.006
```

Invalid option values raise `ValueError`, as does `parse_amount` for an absent
or malformed amount.

## What this package does not do

- It does not read ledger files: there is no parser, so a `Tree` and its
  directives are built from the `beanledger.model` classes.
- It has no command-line tool.
- It has no ledger that checks directives: the records in `beanledger.deltas`
  and the errors in `beanledger.errors` are types to be filled in and raised by
  calling code; nothing in the package computes or applies them.

## Running the tests

```
pip install -e ".[test]"
pytest
```