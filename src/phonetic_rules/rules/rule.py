"""Context-sensitive phoneme rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from phonetic_rules.rules.pattern import ContextMatcher, compile_context
from phonetic_rules.rules.phoneme import PhonemeExpr


@dataclass(frozen=True)
class RuleProvenance:
    """Where a rule was read from; diagnostics only."""

    location: str
    line: int

    def to_dict(self) -> dict[str, Any]:
        return {"location": self.location, "line": self.line}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> RuleProvenance:
        return cls(location=d["location"], line=int(d["line"]))


class Rule:
    """A phoneme rule.

    A rule applies at position ``i`` of a name when:

    - the literal ``pattern`` occurs at ``i``
    - the text before ``i`` satisfies the left context
    - the text after the pattern satisfies the right context

    The left context is always anchored to the end of the preceding text
    and the right context to the start of the following text. Both are
    compiled when the rule is built, so a bad context fails at load time.
    Rules are immutable and safe to share between threads.
    """

    __slots__ = (
        "_pattern",
        "_left_context_spec",
        "_right_context_spec",
        "_left_context",
        "_right_context",
        "_phoneme_expr",
        "_provenance",
    )

    def __init__(
        self,
        pattern: str,
        left_context: str,
        right_context: str,
        phoneme_expr: PhonemeExpr,
        provenance: RuleProvenance | None = None,
    ) -> None:
        self._pattern = pattern
        self._left_context_spec = left_context
        self._right_context_spec = right_context
        self._left_context = compile_context(left_context + "$")
        self._right_context = compile_context("^" + right_context)
        self._phoneme_expr = phoneme_expr
        self._provenance = provenance

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def left_context_spec(self) -> str:
        return self._left_context_spec

    @property
    def right_context_spec(self) -> str:
        return self._right_context_spec

    @property
    def left_context(self) -> ContextMatcher:
        """Matcher for the text before the pattern, anchored at its end."""
        return self._left_context

    @property
    def right_context(self) -> ContextMatcher:
        """Matcher for the text after the pattern, anchored at its start."""
        return self._right_context

    @property
    def phoneme_expr(self) -> PhonemeExpr:
        return self._phoneme_expr

    @property
    def provenance(self) -> RuleProvenance | None:
        return self._provenance

    def matches(self, text: str, position: int) -> bool:
        """Decide whether the pattern and both contexts match at *position*."""
        if position < 0:
            raise IndexError("Can not match pattern at negative indexes")

        end = position + len(self.pattern)
        if end > len(text):
            return False

        return (
            text[position:end] == self.pattern
            and self.right_context.matches(text[end:])
            and self.left_context.matches(text[:position])
        )

    def __repr__(self) -> str:
        if self.provenance is not None:
            return (
                f"Rule(line={self.provenance.line}, "
                f"loc={self.provenance.location!r})"
            )
        return (
            f"Rule({self.pattern!r}, {self.left_context_spec!r}, "
            f"{self.right_context_spec!r}, {self.phoneme_expr!r})"
        )
