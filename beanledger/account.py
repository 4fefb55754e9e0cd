"""Accounts of a ledger and their root types."""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional

from beanledger.model import Metadata


class AccountType(enum.IntEnum):
    UNKNOWN = 0
    ASSETS = 1
    LIABILITIES = 2
    EQUITY = 3
    INCOME = 4
    EXPENSES = 5

    def __str__(self) -> str:
        return "Unknown" if self is AccountType.UNKNOWN else self.name.capitalize()


_ROOTS = {
    "Assets": AccountType.ASSETS,
    "Liabilities": AccountType.LIABILITIES,
    "Equity": AccountType.EQUITY,
    "Income": AccountType.INCOME,
    "Expenses": AccountType.EXPENSES,
}


def parse_account_type(account: str) -> AccountType:
    """Return the type named by the first component of an account name."""
    return _ROOTS.get(account.split(":", 1)[0], AccountType.UNKNOWN)


@dataclass
class Account:
    """An account in the ledger. Its type is derived from the name when not given."""

    name: str
    type: Optional[AccountType] = None
    open_date: Optional[datetime.date] = None
    close_date: Optional[datetime.date] = None
    constraint_currencies: List[str] = field(default_factory=list)
    booking_method: str = ""
    metadata: List[Metadata] = field(default_factory=list)
    inventory: Any = None

    def __post_init__(self) -> None:
        if self.type is None:
            self.type = parse_account_type(self.name)

    def is_open(self, date: datetime.date) -> bool:
        """True if the account is open on ``date`` (the close date itself included)."""
        if self.open_date is None:
            return False
        if self.open_date > date:
            return False
        if self.close_date is not None and date > self.close_date:
            return False
        return True

    def is_closed(self) -> bool:
        return self.close_date is not None