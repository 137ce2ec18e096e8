"""Comment handling shared by every line-oriented rule resource."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import NamedTuple

LINE_COMMENT = "//"
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"


class SourceLine(NamedTuple):
    number: int
    raw: str
    content: str


def iter_source_lines(lines: Iterable[str]) -> Iterator[SourceLine]:
    """Yield the non-blank, comment-free lines of a resource.

    A block comment opens only on a line that *starts* with ``/*`` and
    closes only on a line that *ends* with ``*/``; the opening line is
    dropped even when it closes itself. Running out of input inside a
    block comment is not an error.
    """
    in_block_comment = False
    for number, raw in enumerate(lines, start=1):
        raw = raw.rstrip("\r\n")

        if in_block_comment:
            if raw.endswith(BLOCK_COMMENT_END):
                in_block_comment = False
            continue

        if raw.startswith(BLOCK_COMMENT_START):
            in_block_comment = True
            continue

        content = raw
        idx = content.find(LINE_COMMENT)
        if idx >= 0:
            content = content[:idx]
        content = content.strip()
        if not content:
            continue

        yield SourceLine(number, raw, content)
