"""Pending ledger mutations computed by validation and applied afterwards."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from beanledger.account import Account
from beanledger.inventory import LotSpec
from beanledger.model import Amount, Balance, Close, Document, Note, Open, Pad, Posting, Transaction


def _format_decimal(value: Decimal) -> str:
    return format(value.normalize(), "f")


class InventoryOperation(enum.IntEnum):
    ADD = 0
    REDUCE = 1

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass
class InventoryChange:
    """One change to an account's inventory; ``amount`` is always positive."""

    account: str
    currency: str
    amount: Decimal
    lot_spec: Optional[LotSpec] = None
    operation: InventoryOperation = InventoryOperation.ADD

    def __str__(self) -> str:
        parts = [str(self.operation), _format_decimal(self.amount), self.currency]
        if self.lot_spec is not None and not self.lot_spec.is_empty():
            parts.append(str(self.lot_spec))
        parts.append("to" if self.operation is InventoryOperation.ADD else "from")
        parts.append(self.account)
        return " ".join(parts)


@dataclass
class TransactionDelta:
    """Inferred values and inventory changes of a transaction."""

    transaction: Transaction
    inferred_amounts: Dict[Posting, Amount] = field(default_factory=dict)
    inferred_costs: Dict[Posting, Amount] = field(default_factory=dict)
    inventory_changes: List[InventoryChange] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [f"Transaction on {self.transaction.date.isoformat()}:"]
        if self.inferred_amounts:
            lines.append("  Inferred amounts:")
            lines.extend(
                f"    {posting.account}: {amount.value} {amount.currency}"
                for posting, amount in self.inferred_amounts.items()
            )
        if self.inferred_costs:
            lines.append("  Inferred costs:")
            lines.extend(
                f"    {posting.account}: {{{cost.value} {cost.currency}}}"
                for posting, cost in self.inferred_costs.items()
            )
        if self.inventory_changes:
            lines.append("  Inventory changes:")
            lines.extend(f"    {change}" for change in self.inventory_changes)
        return "\n".join(lines) + "\n"


@dataclass
class BalanceDelta:
    """Result of a balance assertion, including padding to apply."""

    balance: Balance
    actual_amount: Decimal = Decimal(0)
    pad_required: bool = False
    pad_amount: Decimal = Decimal(0)
    pad_currency: str = ""
    pad_account: str = ""
    balance_mismatch: bool = False
    expected_amount: Decimal = Decimal(0)
    final_amount: Decimal = Decimal(0)

    def __str__(self) -> str:
        amount = self.balance.amount
        value = amount.value if amount else ""
        currency = amount.currency if amount else ""
        lines = [
            f"Balance on {self.balance.date.isoformat()} for {self.balance.account}:",
            f"  Expected: {value} {currency}",
            f"  Actual: {_format_decimal(self.actual_amount)} {currency}",
        ]
        if self.pad_required:
            lines.append(
                f"  Padding: {_format_decimal(self.pad_amount)} "
                f"{self.pad_currency} from {self.pad_account}"
            )
        return "\n".join(lines) + "\n"


@dataclass
class PadDelta:
    """A pad directive to store until the next balance assertion."""

    pad: Pad
    account_name: str

    def __str__(self) -> str:
        return f"Store pad for {self.pad.account} (will pad from {self.pad.account_pad})"


@dataclass
class OpenDelta:
    """An account to add to the ledger."""

    open: Open
    account: Account

    def __str__(self) -> str:
        return f"Open account {self.open.account} on {self.open.date.isoformat()}"


@dataclass
class CloseDelta:
    close: Close
    account_name: str

    def __str__(self) -> str:
        return f"Close account {self.close.account} on {self.close.date.isoformat()}"


@dataclass
class NoteDelta:
    note: Note

    def __str__(self) -> str:
        return f"Note for {self.note.account}: {self.note.description}"


@dataclass
class DocumentDelta:
    document: Document

    def __str__(self) -> str:
        return f"Document for {self.document.account}: {self.document.path_to_document}"