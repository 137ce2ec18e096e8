"""Language sets: which languages a phoneme or rule is valid for.

Three shapes exist:

- ``ANY_LANGUAGE`` -- unconstrained; absorbing under intersection
- ``NO_LANGUAGES`` -- nothing permits this phoneme any more
- ``SomeLanguages`` -- restricted to an explicit set of codes

All of them are immutable and compare by value.
"""

from __future__ import annotations

from collections.abc import Iterable

from phonetic_rules.rules.lines import iter_source_lines


class LanguageSet:
    """Common interface of the three language-set shapes."""

    __slots__ = ()

    @staticmethod
    def from_languages(languages: Iterable[str]) -> LanguageSet:
        codes = frozenset(languages)
        if not codes:
            return NO_LANGUAGES
        return SomeLanguages(codes)

    def contains(self, language: str) -> bool:
        raise NotImplementedError

    def any_language(self) -> str:
        raise NotImplementedError

    def is_empty(self) -> bool:
        raise NotImplementedError

    def is_singleton(self) -> bool:
        raise NotImplementedError

    def restrict_to(self, other: LanguageSet) -> LanguageSet:
        raise NotImplementedError


class _AnyLanguage(LanguageSet):
    __slots__ = ()

    def contains(self, language: str) -> bool:
        return True

    def any_language(self) -> str:
        raise ValueError("Can't fetch any language from the any language set.")

    def is_empty(self) -> bool:
        return False

    def is_singleton(self) -> bool:
        return False

    def restrict_to(self, other: LanguageSet) -> LanguageSet:
        return other

    def __repr__(self) -> str:
        return "ANY_LANGUAGE"


class _NoLanguages(LanguageSet):
    __slots__ = ()

    def contains(self, language: str) -> bool:
        return False

    def any_language(self) -> str:
        raise ValueError("Can't fetch any language from the empty language set.")

    def is_empty(self) -> bool:
        return True

    def is_singleton(self) -> bool:
        return False

    def restrict_to(self, other: LanguageSet) -> LanguageSet:
        return self

    def __repr__(self) -> str:
        return "NO_LANGUAGES"


class SomeLanguages(LanguageSet):
    """A set restricted to explicit language codes."""

    __slots__ = ("languages",)

    def __init__(self, languages: Iterable[str]) -> None:
        self.languages: frozenset[str] = frozenset(languages)

    def contains(self, language: str) -> bool:
        return language in self.languages

    def any_language(self) -> str:
        if not self.languages:
            raise ValueError("Can't fetch any language from the empty language set.")
        return min(self.languages)

    def is_empty(self) -> bool:
        return not self.languages

    def is_singleton(self) -> bool:
        return len(self.languages) == 1

    def restrict_to(self, other: LanguageSet) -> LanguageSet:
        if other is NO_LANGUAGES:
            return other
        if other is ANY_LANGUAGE:
            return self
        if not isinstance(other, SomeLanguages):
            raise TypeError(f"cannot restrict to {type(other).__name__}")
        return LanguageSet.from_languages(self.languages & other.languages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SomeLanguages):
            return NotImplemented
        return self.languages == other.languages

    def __hash__(self) -> int:
        return hash(self.languages)

    def __repr__(self) -> str:
        return f"SomeLanguages({sorted(self.languages)!r})"


ANY_LANGUAGE: LanguageSet = _AnyLanguage()
NO_LANGUAGES: LanguageSet = _NoLanguages()


def parse_language_list(lines: Iterable[str]) -> list[str]:
    """Parse a supported-languages resource into codes in source order."""
    seen: dict[str, None] = {}
    for line in iter_source_lines(lines):
        seen.setdefault(line.content, None)
    return list(seen)
