"""Compile rule contexts into specialised matchers.

Rule contexts are tiny regular expressions, almost always of the form
``^literal``, ``literal$``, ``^[abc]`` or ``[^abc]$``. Running them
through ``re`` on every match attempt dominates rule evaluation, so the
common shapes are recognised up front and answered with plain string
operations. Anything else falls back to ``re.search``.

The specialised matchers assume they are handed exactly the slice the
anchors refer to: a left context sees the text before the match position,
a right context the text after the matched pattern.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from phonetic_rules.errors import ContextPatternError


@dataclass(frozen=True, slots=True)
class ContextMatcher:
    """Base matcher; ``regex`` is the context it was compiled from."""

    regex: str

    def matches(self, text: str) -> bool:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class EmptyMatcher(ContextMatcher):
    """``^$``"""

    def matches(self, text: str) -> bool:
        return not text


@dataclass(frozen=True, slots=True)
class ExactMatcher(ContextMatcher):
    """``^abc$``"""

    content: str

    def matches(self, text: str) -> bool:
        return text == self.content


@dataclass(frozen=True, slots=True)
class AlwaysMatcher(ContextMatcher):
    """A lone ``^`` or ``$``."""

    def matches(self, text: str) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class PrefixMatcher(ContextMatcher):
    """``^abc``"""

    content: str

    def matches(self, text: str) -> bool:
        return text.startswith(self.content)


@dataclass(frozen=True, slots=True)
class SuffixMatcher(ContextMatcher):
    """``abc$``"""

    content: str

    def matches(self, text: str) -> bool:
        return text.endswith(self.content)


@dataclass(frozen=True, slots=True)
class CharClassMatcher(ContextMatcher):
    """``^[abc]$``, ``^[abc]`` or ``[abc]$``, optionally negated."""

    chars: frozenset[str]
    should_match: bool
    anchored_start: bool
    anchored_end: bool

    def matches(self, text: str) -> bool:
        if not text:
            return False
        if self.anchored_start and self.anchored_end:
            if len(text) != 1:
                return False
            ch = text
        elif self.anchored_start:
            ch = text[0]
        else:
            ch = text[-1]
        return (ch in self.chars) == self.should_match


@dataclass(frozen=True, slots=True)
class RegexMatcher(ContextMatcher):
    """General fallback: any match anywhere in the text."""

    compiled: re.Pattern[str] = field(compare=False, repr=False)

    def matches(self, text: str) -> bool:
        return self.compiled.search(text) is not None


def compile_context(regex: str) -> ContextMatcher:
    """Return the cheapest matcher equivalent to ``re.search(regex, text)``."""
    anchored_start = regex.startswith("^")
    anchored_end = regex.endswith("$")
    start = 1 if anchored_start else 0
    end = len(regex) - 1 if anchored_end else len(regex)
    content = regex[start:end]

    if "[" not in content:
        if anchored_start and anchored_end:
            if not content:
                return EmptyMatcher(regex)
            return ExactMatcher(regex, content)
        if (anchored_start or anchored_end) and not content:
            return AlwaysMatcher(regex)
        if anchored_start:
            return PrefixMatcher(regex, content)
        if anchored_end:
            return SuffixMatcher(regex, content)
    elif content.startswith("[") and content.endswith("]") and len(content) >= 2:
        box = content[1:-1]
        if "[" not in box and (anchored_start or anchored_end):
            negate = box.startswith("^")
            if negate:
                box = box[1:]
            return CharClassMatcher(
                regex,
                chars=frozenset(box),
                should_match=not negate,
                anchored_start=anchored_start,
                anchored_end=anchored_end,
            )

    try:
        compiled = re.compile(regex)
    except re.error as exc:
        raise ContextPatternError(f"Invalid context pattern {regex!r}: {exc}") from exc
    return RegexMatcher(regex, compiled)
