"""Errors reported while validating the directives of a ledger."""

from __future__ import annotations

import datetime
import json
from typing import Any, Mapping, Optional

from beanledger.model import (
    Balance,
    Close,
    Document,
    Note,
    Open,
    Pad,
    Position,
    Transaction,
)

_DATED_DIRECTIVES = (Transaction, Balance, Pad, Note, Document, Open, Close)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class LedgerError(Exception):
    """Base class of validation errors; carries the source location and directive."""

    def __init__(
        self,
        *,
        date: Optional[datetime.date] = None,
        account: str = "",
        pos: Optional[Position] = None,
        directive: Any = None,
    ) -> None:
        self.date = date
        self.account = account
        self.pos = pos if pos is not None else Position()
        self.directive = directive
        super().__init__(str(self))

    @property
    def location(self) -> str:
        """``filename:line``, or the directive date when the filename is unknown."""
        if not self.pos.filename and self.date is not None:
            return self.date.isoformat()
        return f"{self.pos.filename}:{self.pos.line}"

    def _message(self) -> str:
        return "ledger error"

    def __str__(self) -> str:
        return f"{self.location}: {self._message()}"


class AccountNotOpenError(LedgerError):
    """A directive references an account that has not been opened."""

    def _message(self) -> str:
        return f"Invalid reference to unknown account '{self.account}'"

    @classmethod
    def from_transaction(cls, txn: Transaction, account: str) -> "AccountNotOpenError":
        return cls(date=txn.date, account=account, pos=txn.pos, directive=txn)

    @classmethod
    def from_directive(cls, directive: Any, account: Optional[str] = None) -> "AccountNotOpenError":
        """For balance, pad, note and document directives; defaults to their own account."""
        if account is None:
            account = directive.account
        return cls(date=directive.date, account=account, pos=directive.pos, directive=directive)


class AccountAlreadyOpenError(LedgerError):
    """An open directive names an account that is already open."""

    def __init__(self, *, opened_date: Optional[datetime.date] = None, **kwargs: Any) -> None:
        self.opened_date = opened_date
        super().__init__(**kwargs)

    def _message(self) -> str:
        opened = self.opened_date.isoformat() if self.opened_date else ""
        return f"Account {self.account} is already open (opened on {opened})"

    @classmethod
    def from_open(cls, open_directive: Open, opened_date: datetime.date) -> "AccountAlreadyOpenError":
        return cls(
            opened_date=opened_date,
            date=open_directive.date,
            account=open_directive.account,
            pos=open_directive.pos,
            directive=open_directive,
        )


class AccountAlreadyClosedError(LedgerError):
    """An account is used or closed after it was closed."""

    def __init__(self, *, closed_date: Optional[datetime.date] = None, **kwargs: Any) -> None:
        self.closed_date = closed_date
        super().__init__(**kwargs)

    def _message(self) -> str:
        closed = self.closed_date.isoformat() if self.closed_date else ""
        return f"Account {self.account} is already closed (closed on {closed})"

    @classmethod
    def from_close(cls, close_directive: Close, closed_date: datetime.date) -> "AccountAlreadyClosedError":
        return cls(
            closed_date=closed_date,
            date=close_directive.date,
            account=close_directive.account,
            pos=close_directive.pos,
            directive=close_directive,
        )


class AccountNotClosedError(LedgerError):
    """A close directive names an account that was never opened."""

    def _message(self) -> str:
        return f"Cannot close account {self.account} that was never opened"

    @classmethod
    def from_close(cls, close_directive: Close) -> "AccountNotClosedError":
        return cls(
            date=close_directive.date,
            account=close_directive.account,
            pos=close_directive.pos,
            directive=close_directive,
        )


class TransactionNotBalancedError(LedgerError):
    """A transaction's postings do not sum to zero; ``residuals`` maps currency to amount."""

    def __init__(
        self,
        *,
        narration: str = "",
        residuals: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> None:
        self.narration = narration
        self.residuals = dict(residuals or {})
        super().__init__(**kwargs)

    @property
    def transaction(self) -> Any:
        return self.directive

    def _format_residuals(self) -> str:
        if not self.residuals:
            return ""
        inner = ", ".join(
            f"{self.residuals[currency]} {currency}" for currency in sorted(self.residuals)
        )
        return f"({inner})"

    def _message(self) -> str:
        return f"Transaction does not balance: {self._format_residuals()}"

    @classmethod
    def from_transaction(
        cls, txn: Transaction, residuals: Mapping[str, str]
    ) -> "TransactionNotBalancedError":
        return cls(
            narration=txn.narration,
            residuals=residuals,
            date=txn.date,
            pos=txn.pos,
            directive=txn,
        )


class InvalidAmountError(LedgerError):
    """An amount could not be parsed."""

    def __init__(self, *, value: str = "", cause: Optional[BaseException] = None, **kwargs: Any) -> None:
        self.value = value
        self.cause = cause
        super().__init__(**kwargs)

    def _message(self) -> str:
        return f"Invalid amount {_quote(self.value)} for account {self.account}: {self.cause}"

    @classmethod
    def from_transaction(
        cls, txn: Transaction, account: str, value: str, cause: BaseException
    ) -> "InvalidAmountError":
        return cls(
            value=value, cause=cause, date=txn.date, account=account, pos=txn.pos, directive=txn
        )

    @classmethod
    def from_balance(cls, balance: Balance, cause: BaseException) -> "InvalidAmountError":
        value = balance.amount.value if balance.amount is not None else ""
        return cls(
            value=value,
            cause=cause,
            date=balance.date,
            account=balance.account,
            pos=balance.pos,
            directive=balance,
        )


class BalanceMismatchError(LedgerError):
    """A balance assertion does not hold."""

    def __init__(
        self, *, expected: str = "", actual: str = "", currency: str = "", **kwargs: Any
    ) -> None:
        self.expected = expected
        self.actual = actual
        self.currency = currency
        super().__init__(**kwargs)

    def _message(self) -> str:
        return (
            f"Balance mismatch for {self.account}:\n"
            f"  Expected: {self.expected} {self.currency}\n"
            f"  Actual:   {self.actual} {self.currency}"
        )

    @classmethod
    def from_balance(
        cls, balance: Balance, expected: str, actual: str, currency: str
    ) -> "BalanceMismatchError":
        return cls(
            expected=expected,
            actual=actual,
            currency=currency,
            date=balance.date,
            account=balance.account,
            pos=balance.pos,
            directive=balance,
        )


class _PostingSpecError(LedgerError):
    _label = ""

    def __init__(
        self,
        *,
        posting_index: int = -1,
        spec: str = "",
        cause: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        self.posting_index = posting_index
        self.spec = spec
        self.cause = cause
        super().__init__(**kwargs)

    def _message(self) -> str:
        info = ""
        if self.posting_index >= 0:
            info = f" (Posting #{self.posting_index + 1}: {self.account})"
        return f"Invalid {self._label} specification{info}: {self.spec}: {self.cause}"


class InvalidCostError(_PostingSpecError):
    """A cost specification is invalid."""

    _label = "cost"

    @property
    def cost_spec(self) -> str:
        return self.spec

    @classmethod
    def from_transaction(
        cls,
        txn: Transaction,
        account: str,
        posting_index: int,
        cost_spec: str,
        cause: BaseException,
    ) -> "InvalidCostError":
        return cls(
            posting_index=posting_index,
            spec=cost_spec,
            cause=cause,
            date=txn.date,
            account=account,
            pos=txn.pos,
            directive=txn,
        )


class InvalidPriceError(_PostingSpecError):
    """A price specification is invalid."""

    _label = "price"

    @property
    def price_spec(self) -> str:
        return self.spec

    @classmethod
    def from_transaction(
        cls,
        txn: Transaction,
        account: str,
        posting_index: int,
        price_spec: str,
        cause: BaseException,
    ) -> "InvalidPriceError":
        return cls(
            posting_index=posting_index,
            spec=price_spec,
            cause=cause,
            date=txn.date,
            account=account,
            pos=txn.pos,
            directive=txn,
        )


class InvalidMetadataError(LedgerError):
    """A metadata entry is invalid (duplicate key, empty value, ...)."""

    def __init__(self, *, key: str = "", value: str = "", reason: str = "", **kwargs: Any) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(**kwargs)

    def _message(self) -> str:
        info = f" (account {self.account})" if self.account else ""
        return (
            f"Invalid metadata{info}: key={_quote(self.key)}, "
            f"value={_quote(self.value)}: {self.reason}"
        )

    @classmethod
    def from_directive(
        cls, directive: Any, account: str, key: str, value: str, reason: str
    ) -> "InvalidMetadataError":
        date = None
        pos = None
        if isinstance(directive, _DATED_DIRECTIVES):
            date = directive.date
            pos = directive.pos
        return cls(
            key=key,
            value=value,
            reason=reason,
            date=date,
            account=account,
            pos=pos,
            directive=directive,
        )