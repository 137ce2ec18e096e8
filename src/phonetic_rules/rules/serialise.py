"""Render rules back into rule-source DSL text.

Only rules whose phoneme expressions survive a round trip are
representable; anything else raises ``ValueError`` rather than emitting
text that would parse into something different.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from phonetic_rules.languages.language_set import ANY_LANGUAGE, SomeLanguages
from phonetic_rules.rules.phoneme import Phoneme, PhonemeExpr
from phonetic_rules.rules.rule import Rule

_UNSAFE_RE = re.compile(r'[\[\]()|+"\s]|//')
_FIELD_UNSAFE_RE = re.compile(r'["\s]|//')


def _check_field(value: str, what: str) -> str:
    if _FIELD_UNSAFE_RE.search(value):
        raise ValueError(f"{what} {value!r} cannot be written as a rule field")
    return value


def format_phoneme(phoneme: Phoneme) -> str:
    text = phoneme.text
    if _UNSAFE_RE.search(text):
        raise ValueError(f"Phoneme text {text!r} contains DSL metacharacters")

    languages = phoneme.languages
    if languages is ANY_LANGUAGE:
        return text
    if isinstance(languages, SomeLanguages) and not languages.is_empty():
        for code in languages.languages:
            if _UNSAFE_RE.search(code):
                raise ValueError(f"Language code {code!r} contains DSL metacharacters")
        return f"{text}[{'+'.join(sorted(languages.languages))}]"
    raise ValueError(f"Phoneme {phoneme!r} has no representable language set")


def format_phoneme_expr(expr: PhonemeExpr) -> str:
    if isinstance(expr, Phoneme):
        return format_phoneme(expr)

    fields = [format_phoneme(p) for p in expr.phonemes()]
    if not fields:
        raise ValueError("An empty phoneme list cannot be written")

    trailing_empty = len(fields) > 1 and fields[-1] == ""
    if trailing_empty:
        fields.pop()

    # Empty fields anywhere else are dropped or duplicated by the parser.
    if "" in fields and (trailing_empty or len(fields) > 1):
        raise ValueError(f"{expr!r} has an empty alternative that cannot be written")

    body = "|".join(fields)
    if trailing_empty:
        body += "|"
    return f"({body})"


def format_rule(rule: Rule) -> str:
    fields = (
        _check_field(rule.pattern, "Pattern"),
        _check_field(rule.left_context_spec, "Left context"),
        _check_field(rule.right_context_spec, "Right context"),
        format_phoneme_expr(rule.phoneme_expr),
    )
    return " ".join(f'"{field}"' for field in fields)


def format_rules(rules: Iterable[Rule]) -> str:
    """Render *rules* as a complete rule source, one rule per line."""
    return "".join(format_rule(rule) + "\n" for rule in rules)
