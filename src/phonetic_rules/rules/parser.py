"""Parser for the rule-source DSL.

Rule resources are UTF-8 text, one rule per line::

    // pattern  left  right  phoneme
    "ts"        ""    "$"    "tS"
    "a"         ""    ""     "(o|u)"
    "kh"        ""    ""     "kh[polish+russian]"
    #include gen_approx_common

``//`` starts a line comment, a line starting with ``/*`` opens a block
comment that runs until a line ending in ``*/``, and ``#include name``
splices in the rules of another named resource.

Malformed *lines* (wrong field count, an include target with spaces) are
logged and skipped. Malformed *rules* (bad phoneme expression, bad context
regex) abort the whole parse with a ``RuleParseError``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable

from phonetic_rules.errors import (
    ContextPatternError,
    PhonemeSyntaxError,
    RuleParseError,
)
from phonetic_rules.languages.language_set import ANY_LANGUAGE, LanguageSet
from phonetic_rules.rules.lines import iter_source_lines
from phonetic_rules.rules.phoneme import Phoneme, PhonemeExpr, PhonemeList
from phonetic_rules.rules.rule import Rule, RuleProvenance

logger = logging.getLogger(__name__)

DOUBLE_QUOTE = '"'
HASH_INCLUDE = "#include"

_WHITESPACE_RE = re.compile(r"\s")

IncludeResolver = Callable[[str], Iterable[str]]


def strip_quotes(text: str) -> str:
    """Drop one leading and one trailing double quote, independently."""
    if text.startswith(DOUBLE_QUOTE):
        text = text[1:]
    if text.endswith(DOUBLE_QUOTE):
        text = text[:-1]
    return text


def parse_phoneme(text: str) -> Phoneme:
    """Parse ``text`` or ``text[lang+lang]``."""
    open_idx = text.find("[")
    if open_idx < 0:
        return Phoneme(text, ANY_LANGUAGE)

    if not text.endswith("]"):
        raise PhonemeSyntaxError(
            f"Phoneme expression contains a '[' but does not end in ']': {text!r}"
        )
    before = text[:open_idx]
    inside = text[open_idx + 1 : -1]
    languages = {code for code in inside.split("+") if code}
    return Phoneme(before, LanguageSet.from_languages(languages))


def _split_alternatives(body: str) -> list[str]:
    parts = body.split("|")
    if len(parts) > 1:
        # Trailing empty fields carry no alternative of their own.
        while parts and parts[-1] == "":
            parts.pop()
    return parts


def parse_phoneme_expr(text: str) -> PhonemeExpr:
    """Parse a single phoneme or a bracketed ``(a|b|c)`` alternation."""
    if not text.startswith("("):
        return parse_phoneme(text)

    if not text.endswith(")"):
        raise PhonemeSyntaxError(
            f"Phoneme starts with '(' so must end with ')': {text!r}"
        )

    body = text[1:-1]
    phonemes = [parse_phoneme(part) for part in _split_alternatives(body)]
    if body.startswith("|") or body.endswith("|"):
        phonemes.append(Phoneme("", ANY_LANGUAGE))
    return PhonemeList(phonemes)


def parse_rules(
    lines: Iterable[str],
    location: str,
    resolve_include: IncludeResolver | None = None,
    _active: frozenset[str] = frozenset(),
) -> list[Rule]:
    """Parse rule source *lines* read from *location*.

    ``resolve_include`` maps an include target to the lines of that
    resource; without one, ``#include`` directives are an error. A target
    already being included further up the chain is an error too.
    """
    rules: list[Rule] = []

    for line in iter_source_lines(lines):
        content = line.content

        if content.startswith(HASH_INCLUDE):
            target = content[len(HASH_INCLUDE) :].strip()
            if _WHITESPACE_RE.search(target):
                logger.warning(
                    "Malformed include statement at %s:%d: %s",
                    location,
                    line.number,
                    line.raw,
                )
                continue
            if resolve_include is None:
                raise RuleParseError(
                    location, line.number, f"no include resolver for {target!r}"
                )
            if target in _active:
                raise RuleParseError(
                    location, line.number, f"include cycle through {target!r}"
                )
            included = parse_rules(
                resolve_include(target),
                f"{location}->{target}",
                resolve_include,
                _active | {target},
            )
            logger.debug(
                "Included %d rules from %s into %s", len(included), target, location
            )
            rules.extend(included)
            continue

        parts = content.split()
        if len(parts) != 4:
            logger.warning(
                "Malformed rule statement at %s:%d split into %d parts: %s",
                location,
                line.number,
                len(parts),
                line.raw,
            )
            continue

        pattern, left, right, phoneme = (strip_quotes(p) for p in parts)
        try:
            rule = Rule(
                pattern,
                left,
                right,
                parse_phoneme_expr(phoneme),
                provenance=RuleProvenance(location, line.number),
            )
        except (PhonemeSyntaxError, ContextPatternError) as exc:
            raise RuleParseError(location, line.number, str(exc)) from exc
        rules.append(rule)

    return rules
