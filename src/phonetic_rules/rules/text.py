"""Deferred string concatenation for phoneme text.

Phoneme text grows through many small appends while rules are applied
across a name. Concatenating eagerly copies the whole prefix every time;
``LazyText`` instead records the two halves and flattens once, on first
read, caching the result.
"""

from __future__ import annotations

from typing import Union

TextLike = Union[str, "LazyText"]


class LazyText:
    """Immutable binary concatenation node with a memoised rendering."""

    __slots__ = ("left", "right", "_length", "_flat")

    def __init__(self, left: TextLike, right: TextLike) -> None:
        self.left = left
        self.right = right
        self._length = len(left) + len(right)
        self._flat: str | None = None

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        flat = self._flat
        if flat is None:
            flat = _flatten(self)
            # Recomputing is harmless, so concurrent readers need no lock.
            self._flat = flat
        return flat

    def __repr__(self) -> str:
        return f"LazyText({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (LazyText, str)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    @property
    def is_flattened(self) -> bool:
        return self._flat is not None


def concat(left: TextLike, right: TextLike) -> TextLike:
    """Concatenate two text fragments without copying either."""
    if isinstance(right, str) and not right:
        return left
    if isinstance(left, str) and not left:
        return right
    return LazyText(left, right)


def _flatten(node: LazyText) -> str:
    # Iterative walk: append chains are left-deep and can exceed the
    # recursion limit.
    parts: list[str] = []
    stack: list[TextLike] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif item._flat is not None:
            parts.append(item._flat)
        else:
            stack.append(item.right)
            stack.append(item.left)
    return "".join(parts)
