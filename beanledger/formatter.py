"""Formatting of ledger trees with aligned amounts and preserved comments."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, TextIO, Tuple, Union

from beanledger.comments import (
    BlankLine,
    CommentBlock,
    LineContent,
    build_line_content_map,
    extract_comments_and_blanks,
)
from beanledger.metrics import (
    BALANCE_KEYWORD_WIDTH,
    DATE_WIDTH,
    DEFAULT_CURRENCY_COLUMN,
    DEFAULT_INDENTATION,
    MINIMUM_SPACING,
    PRICE_KEYWORD_WIDTH,
    amount_display_text,
    calculate_width_metrics,
    display_width,
    escape_string,
)
from beanledger.model import (
    Amount,
    Balance,
    Close,
    Commodity,
    Cost,
    Custom,
    Document,
    Event,
    Include,
    Metadata,
    Note,
    Open,
    Option,
    Pad,
    Plugin,
    Popmeta,
    Poptag,
    Posting,
    Price,
    Pushmeta,
    Pushtag,
    Transaction,
    Tree,
)

_DEFAULT_PREFIX_WIDTH = 40
_DEFAULT_NUM_WIDTH = 10

SourceInput = Union[str, bytes, bytearray, None]


class Formatter:
    """Renders a ledger tree, aligning amounts on a currency column.

    A positive ``currency_column`` fixes the column; otherwise it is computed
    on every run from ``prefix_width``/``num_width`` or from the content.
    When ``source`` is given, original expressions and the original text of
    directives that are not realigned are kept, along with comments and
    blank lines.
    """

    def __init__(
        self,
        currency_column: int = 0,
        prefix_width: int = 0,
        num_width: int = 0,
        preserve_comments: bool = True,
        preserve_blanks: bool = True,
        source: SourceInput = None,
    ) -> None:
        self.currency_column = currency_column if currency_column > 0 else 0
        self._auto_currency_column = currency_column <= 0
        self.prefix_width = prefix_width
        self.num_width = num_width
        self.preserve_comments = preserve_comments
        self.preserve_blanks = preserve_blanks
        self.source = source

    @property
    def source(self) -> Optional[bytes]:
        return self._source

    @source.setter
    def source(self, value: SourceInput) -> None:
        if value is None:
            self._source: Optional[bytes] = None
        elif isinstance(value, str):
            self._source = value.encode("utf-8")
        else:
            self._source = bytes(value)
        self._lines: Optional[List[bytes]] = None

    # Column calculation

    def calculate_currency_column(self, tree: Tree) -> int:
        """Column derived from the content, or the default when there are no amounts."""
        metrics = calculate_width_metrics(tree, self._source)
        if metrics.currency_column > 0:
            return metrics.currency_column + MINIMUM_SPACING
        return DEFAULT_CURRENCY_COLUMN

    def determine_currency_column(self, tree: Tree) -> int:
        """Column from explicit widths if any are set, else from the content."""
        if self.prefix_width > 0 or self.num_width > 0:
            metrics = calculate_width_metrics(tree, self._source)
            prefix = self.prefix_width or metrics.max_prefix_width or _DEFAULT_PREFIX_WIDTH
            num = self.num_width
            if num == 0:
                num = metrics.max_num_width + MINIMUM_SPACING
                if num == MINIMUM_SPACING:
                    num = _DEFAULT_NUM_WIDTH
            return prefix + num
        return self.calculate_currency_column(tree)

    # Source access

    def original_line(self, line_number: int) -> str:
        """Source line ``line_number`` (1-indexed) without its newline, or ""."""
        if not self._source:
            return ""
        if self._lines is None:
            self._lines = self._source.split(b"\n")
        if not 1 <= line_number <= len(self._lines):
            return ""
        return self._lines[line_number - 1].decode("utf-8", errors="replace")

    # Public rendering

    def format(self, tree: Tree) -> str:
        """Render the whole tree in source order."""
        if self._auto_currency_column:
            self.currency_column = self.determine_currency_column(tree)

        line_map: Optional[Dict[int, List[LineContent]]] = None
        if (self.preserve_comments or self.preserve_blanks) and self._source is not None:
            comments, blanks = extract_comments_and_blanks(self._source)
            line_map = build_line_content_map(
                comments if self.preserve_comments else [],
                blanks if self.preserve_blanks else [],
            )

        out: List[str] = []
        last_line = 0
        for line, node in sorted(self._items(tree), key=lambda item: item[0]):
            if line_map is not None:
                self._emit_preceding(line, last_line, line_map, out)
                last_line = line
            self._render(node, out)
        return "".join(out)

    def write(self, tree: Tree, stream: TextIO) -> None:
        """Render the tree and write it to ``stream``."""
        stream.write(self.format(tree))

    def format_transaction(self, txn: Transaction) -> str:
        """Render a single transaction, aligned on its own amounts if no column is set."""
        if self._auto_currency_column:
            self.currency_column = self.determine_currency_column(Tree(directives=[txn]))
        out: List[str] = []
        self._transaction(txn, out)
        return "".join(out)

    # Internals

    @staticmethod
    def _items(tree: Tree) -> Iterator[Tuple[int, object]]:
        groups = (
            tree.options,
            tree.includes,
            tree.plugins,
            tree.pushtags,
            tree.poptags,
            tree.pushmetas,
            tree.popmetas,
            tree.directives,
        )
        for group in groups:
            for node in group:
                if node is not None:
                    yield node.pos.line, node

    @staticmethod
    def _emit_preceding(
        current: int, last: int, line_map: Dict[int, List[LineContent]], out: List[str]
    ) -> None:
        for line in range(last + 1, current):
            for item in line_map.get(line, []):
                if isinstance(item, CommentBlock):
                    out.append(item.content + "\n")
                elif isinstance(item, BlankLine):
                    out.append("\n")

    def _amount_text(self, amount: Optional[Amount]) -> str:
        return amount_display_text(amount, self._source)

    def _render(self, node: object, out: List[str]) -> None:
        if isinstance(node, Transaction):
            self._transaction(node, out)
            return
        if isinstance(node, Balance):
            self._aligned_directive(
                node,
                f"{node.date.isoformat()} balance {node.account}",
                DATE_WIDTH + 1 + BALANCE_KEYWORD_WIDTH + display_width(node.account),
                out,
            )
            return
        if isinstance(node, Price):
            self._aligned_directive(
                node,
                f"{node.date.isoformat()} price {node.commodity}",
                DATE_WIDTH + 1 + PRICE_KEYWORD_WIDTH + display_width(node.commodity),
                out,
            )
            return

        original = self.original_line(node.pos.line)
        text = original.strip() if original else self._reconstruct(node)
        out.append(text + "\n")
        metadata = getattr(node, "metadata", None)
        if metadata:
            self._metadata(metadata, out)

    def _aligned_directive(
        self, node: Union[Balance, Price], head: str, width: int, out: List[str]
    ) -> None:
        line = head
        if node.amount is not None:
            line += self._aligned(node.amount, width)
        out.append(line + "\n")
        self._metadata(node.metadata, out)

    def _reconstruct(self, node: object) -> str:
        if isinstance(node, Option):
            return f'option "{escape_string(node.name)}" "{escape_string(node.value)}"'
        if isinstance(node, Include):
            return f'include "{escape_string(node.filename)}"'
        if isinstance(node, Plugin):
            text = f'plugin "{escape_string(node.name)}"'
            if node.config:
                text += f' "{escape_string(node.config)}"'
            return text
        if isinstance(node, Pushtag):
            return f"pushtag #{node.tag}"
        if isinstance(node, Poptag):
            return f"poptag #{node.tag}"
        if isinstance(node, Pushmeta):
            return f"pushmeta {node.key}: {node.value}"
        if isinstance(node, Popmeta):
            return f"popmeta {node.key}:"
        if isinstance(node, Commodity):
            return f"{node.date.isoformat()} commodity {node.currency}"
        if isinstance(node, Open):
            text = f"{node.date.isoformat()} open {node.account}"
            if node.constraint_currencies:
                text += " " + ", ".join(node.constraint_currencies)
            if node.booking_method:
                text += f' "{node.booking_method}"'
            return text
        if isinstance(node, Close):
            return f"{node.date.isoformat()} close {node.account}"
        if isinstance(node, Pad):
            return f"{node.date.isoformat()} pad {node.account} {node.account_pad}"
        if isinstance(node, Note):
            return f'{node.date.isoformat()} note {node.account} "{escape_string(node.description)}"'
        if isinstance(node, Document):
            return (
                f"{node.date.isoformat()} document {node.account} "
                f'"{escape_string(node.path_to_document)}"'
            )
        if isinstance(node, Event):
            return (
                f'{node.date.isoformat()} event "{escape_string(node.name)}" '
                f'"{escape_string(node.value)}"'
            )
        if isinstance(node, Custom):
            return self._custom(node)
        return ""

    def _custom(self, custom: Custom) -> str:
        text = f'{custom.date.isoformat()} custom "{escape_string(custom.type)}"'
        for value in custom.values:
            text += " "
            if value.string is not None:
                text += f'"{escape_string(value.string)}"'
            elif value.boolean is not None:
                text += value.boolean
            elif value.amount is not None:
                text += f"{self._amount_text(value.amount)} {value.amount.currency}"
            elif value.number is not None:
                text += value.number
        return text

    def _transaction(self, txn: Transaction, out: List[str]) -> None:
        header = f"{txn.date.isoformat()} {txn.flag}"
        if txn.payee:
            header += f' "{escape_string(txn.payee)}"'
        if txn.narration:
            header += f' "{escape_string(txn.narration)}"'
        header += "".join(f" ^{link}" for link in txn.links)
        header += "".join(f" #{tag}" for tag in txn.tags)
        out.append(header + "\n")
        self._metadata(txn.metadata, out)
        for posting in txn.postings:
            self._posting(posting, out)

    def _posting(self, posting: Posting, out: List[str]) -> None:
        line = "  "
        width = DEFAULT_INDENTATION
        if posting.flag:
            line += posting.flag + " "
            width += 2
        line += posting.account
        width += display_width(posting.account)

        if posting.amount is not None:
            line += self._aligned(posting.amount, width)
            if posting.cost is not None:
                line += " " + self._cost(posting.cost)
            if posting.price is not None:
                marker = "@@" if posting.price_total else "@"
                line += f" {marker} {self._amount_text(posting.price)} {posting.price.currency}"

        out.append(line + "\n")
        self._metadata(posting.metadata, out)

    def _aligned(self, amount: Amount, current_width: int) -> str:
        text = self._amount_text(amount)
        padding = max(self.currency_column - current_width - display_width(text), MINIMUM_SPACING)
        return " " * padding + f"{text} {amount.currency}"

    def _cost(self, cost: Cost) -> str:
        text = "{"
        if cost.is_merge:
            text += "*"
        elif cost.amount is not None:
            text += f"{self._amount_text(cost.amount)} {cost.amount.currency}"
        if cost.date is not None:
            text += ", " + cost.date.isoformat()
        if cost.label:
            text += f', "{escape_string(cost.label)}"'
        return text + "}"

    @staticmethod
    def _metadata(metadata: List[Metadata], out: List[str]) -> None:
        for entry in metadata:
            out.append(f'  {entry.key}: "{escape_string(entry.value)}"\n')