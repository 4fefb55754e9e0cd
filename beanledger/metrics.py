"""Text widths used to align amounts when formatting a ledger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from wcwidth import wcwidth

from beanledger.model import Amount, Balance, Price, Transaction, Tree

DEFAULT_CURRENCY_COLUMN = 52
DEFAULT_INDENTATION = 2
MINIMUM_SPACING = 2
DATE_WIDTH = 10
BALANCE_KEYWORD_WIDTH = 8
PRICE_KEYWORD_WIDTH = 6

Source = Union[str, bytes, bytearray, None]


def escape_string(text: str) -> str:
    """Escape backslashes and double quotes for a quoted string."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def display_width(text: str) -> int:
    """Width of text in terminal columns (wide characters count twice)."""
    return sum(max(wcwidth(char), 0) for char in text)


def amount_display_text(amount: Optional[Amount], source: Source = None) -> str:
    """The amount as written in the source when available, else its value."""
    if amount is None:
        return ""
    return amount.span.text(source) or amount.value


@dataclass
class WidthMetrics:
    """Widest account prefix, widest number and the resulting currency column."""

    max_prefix_width: int = 0
    max_num_width: int = 0
    currency_column: int = 0


def calculate_width_metrics(tree: Tree, source: Source = None) -> WidthMetrics:
    """Measure postings, balances and prices of a tree in one pass."""
    metrics = WidthMetrics()

    def record(lead_width: int, amount: Amount) -> None:
        num_width = display_width(amount_display_text(amount, source))
        metrics.max_num_width = max(metrics.max_num_width, num_width)
        metrics.currency_column = max(metrics.currency_column, lead_width + num_width)

    for directive in tree.directives:
        if isinstance(directive, Transaction):
            for posting in directive.postings:
                if posting.amount is None:
                    continue
                prefix = DEFAULT_INDENTATION + (2 if posting.flag else 0)
                prefix += display_width(posting.account) + MINIMUM_SPACING
                metrics.max_prefix_width = max(metrics.max_prefix_width, prefix)
                record(prefix, posting.amount)
        elif isinstance(directive, Balance) and directive.amount is not None:
            lead = DATE_WIDTH + 1 + BALANCE_KEYWORD_WIDTH + display_width(directive.account)
            record(lead + MINIMUM_SPACING, directive.amount)
        elif isinstance(directive, Price) and directive.amount is not None:
            lead = DATE_WIDTH + 1 + PRICE_KEYWORD_WIDTH + display_width(directive.commodity)
            record(lead + MINIMUM_SPACING, directive.amount)

    return metrics