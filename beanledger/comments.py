"""Comments and blank lines of a ledger source, located by line number."""

from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple, Union

Source = Union[str, bytes, bytearray]


class CommentType(enum.IntEnum):
    STANDALONE = 0
    """Appears on its own line before a directive."""
    INLINE = 1
    """Appears at the end of a directive or posting line."""
    SECTION = 2
    """A standalone comment followed by a blank line (section header)."""


@dataclass(frozen=True)
class CommentBlock:
    """A comment line; ``content`` is the stripped text including its marker."""

    line: int
    content: str
    type: CommentType = CommentType.STANDALONE


@dataclass(frozen=True)
class BlankLine:
    line: int


LineContent = Union[CommentBlock, BlankLine]


def comment_type(index: int, lines: Sequence[str]) -> CommentType:
    """SECTION if the line after ``index`` is blank, otherwise STANDALONE."""
    if index + 1 < len(lines) and not lines[index + 1].strip():
        return CommentType.SECTION
    return CommentType.STANDALONE


def is_directive_line(line: str) -> bool:
    """True if a line starts like a dated directive, an option or an include."""
    data = line.encode("utf-8")
    if len(data) >= 10 and data[4:5] == b"-" and data[7:8] == b"-":
        return True
    return line.startswith("option ") or line.startswith("include ")


def _as_text(source: Source) -> str:
    if isinstance(source, str):
        return source
    return bytes(source).decode("utf-8", errors="replace")


def extract_comments_and_blanks(source: Source) -> Tuple[List[CommentBlock], List[BlankLine]]:
    """Find comment lines (";" or non-directive "#") and blank lines, in line order."""
    comments: List[CommentBlock] = []
    blanks: List[BlankLine] = []
    lines = _as_text(source).split("\n")

    for index, line in enumerate(lines):
        number = index + 1
        trimmed = line.strip()
        if not trimmed:
            blanks.append(BlankLine(number))
        elif trimmed.startswith(";") or (
            trimmed.startswith("#") and not is_directive_line(trimmed)
        ):
            comments.append(CommentBlock(number, trimmed, comment_type(index, lines)))

    return comments, blanks


def build_line_content_map(
    comments: Iterable[CommentBlock], blanks: Iterable[BlankLine]
) -> Dict[int, List[LineContent]]:
    """Map each line number to the comments and blanks found on it."""
    line_map: Dict[int, List[LineContent]] = defaultdict(list)
    for comment in comments:
        line_map[comment.line].append(comment)
    for blank in blanks:
        line_map[blank.line].append(blank)
    return dict(line_map)