"""Syntax tree of a ledger file: directives, postings, amounts and source positions."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Position:
    """Location of a node in a source file (lines are 1-indexed)."""

    filename: str = ""
    offset: int = 0
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Span:
    """Byte range ``[start, end)`` of a node in its source."""

    start: int = 0
    end: int = 0

    def text(self, source: Union[str, bytes, bytearray, None]) -> str:
        """Return the source text covered by the span, or "" when unavailable."""
        if not source:
            return ""
        data = source.encode("utf-8") if isinstance(source, str) else bytes(source)
        if self.start < 0 or self.end <= self.start or self.end > len(data):
            return ""
        return data[self.start:self.end].decode("utf-8", errors="replace")


@dataclass
class Amount:
    """A number (as written or evaluated) with its currency."""

    value: str
    currency: str
    span: Span = field(default_factory=Span)


@dataclass
class Cost:
    """Cost specification of a posting: ``{amount, date, "label"}`` or ``{*}``."""

    amount: Optional[Amount] = None
    date: Optional[datetime.date] = None
    label: str = ""
    is_merge: bool = False


@dataclass
class Metadata:
    key: str
    value: str


@dataclass(eq=False)
class Posting:
    """One leg of a transaction. Compared and hashed by identity."""

    account: str
    amount: Optional[Amount] = None
    flag: str = ""
    cost: Optional[Cost] = None
    price: Optional[Amount] = None
    price_total: bool = False
    metadata: List[Metadata] = field(default_factory=list)


@dataclass
class Transaction:
    date: datetime.date
    narration: str = ""
    flag: str = "*"
    payee: str = ""
    postings: List[Posting] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Open:
    date: datetime.date
    account: str
    constraint_currencies: List[str] = field(default_factory=list)
    booking_method: str = ""
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Close:
    date: datetime.date
    account: str
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Commodity:
    date: datetime.date
    currency: str
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Balance:
    date: datetime.date
    account: str
    amount: Optional[Amount] = None
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Pad:
    date: datetime.date
    account: str
    account_pad: str
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Note:
    date: datetime.date
    account: str
    description: str
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Document:
    date: datetime.date
    account: str
    path_to_document: str
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Price:
    date: datetime.date
    commodity: str
    amount: Optional[Amount] = None
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Event:
    date: datetime.date
    name: str
    value: str
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class CustomValue:
    """One value of a custom directive; exactly one field is expected to be set."""

    string: Optional[str] = None
    boolean: Optional[str] = None
    amount: Optional[Amount] = None
    number: Optional[str] = None


@dataclass
class Custom:
    date: datetime.date
    type: str
    values: List[CustomValue] = field(default_factory=list)
    metadata: List[Metadata] = field(default_factory=list)
    pos: Position = field(default_factory=Position)


@dataclass
class Option:
    name: str
    value: str
    pos: Position = field(default_factory=Position)


@dataclass
class Include:
    filename: str
    pos: Position = field(default_factory=Position)


@dataclass
class Plugin:
    name: str
    config: str = ""
    pos: Position = field(default_factory=Position)


@dataclass
class Pushtag:
    tag: str
    pos: Position = field(default_factory=Position)


@dataclass
class Poptag:
    tag: str
    pos: Position = field(default_factory=Position)


@dataclass
class Pushmeta:
    key: str
    value: str
    pos: Position = field(default_factory=Position)


@dataclass
class Popmeta:
    key: str
    pos: Position = field(default_factory=Position)


Directive = Union[
    Transaction,
    Open,
    Close,
    Commodity,
    Balance,
    Pad,
    Note,
    Document,
    Price,
    Event,
    Custom,
]


@dataclass
class Tree:
    """A parsed ledger file."""

    options: List[Option] = field(default_factory=list)
    includes: List[Include] = field(default_factory=list)
    plugins: List[Plugin] = field(default_factory=list)
    pushtags: List[Pushtag] = field(default_factory=list)
    poptags: List[Poptag] = field(default_factory=list)
    pushmetas: List[Pushmeta] = field(default_factory=list)
    popmetas: List[Popmeta] = field(default_factory=list)
    directives: List[Directive] = field(default_factory=list)