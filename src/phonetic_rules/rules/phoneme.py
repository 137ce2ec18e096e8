"""Phonemes and phoneme expressions.

A rule's right-hand side is a ``PhonemeExpr``: either a single
``Phoneme`` or a ``PhonemeList`` of alternatives. Both expose
``phonemes()`` so callers can treat them uniformly.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Union

from phonetic_rules.languages.language_set import ANY_LANGUAGE, LanguageSet
from phonetic_rules.rules.text import TextLike, concat


class Phoneme:
    """Candidate phoneme text together with the languages it is valid for."""

    __slots__ = ("_text", "_languages")

    def __init__(self, text: TextLike, languages: LanguageSet = ANY_LANGUAGE) -> None:
        self._text = text
        self._languages = languages

    @property
    def text(self) -> str:
        return str(self._text)

    @property
    def languages(self) -> LanguageSet:
        return self._languages

    def __len__(self) -> int:
        return len(self._text)

    def append(self, suffix: TextLike) -> Phoneme:
        """Return a new phoneme with *suffix* added; languages unchanged."""
        return Phoneme(concat(self._text, suffix), self.languages)

    def join(self, other: Phoneme) -> Phoneme:
        """Concatenate with *other*, keeping only languages valid for both."""
        return Phoneme(
            concat(self._text, other._text),
            self.languages.restrict_to(other.languages),
        )

    def phonemes(self) -> Iterator[Phoneme]:
        yield self

    def compare(self, other: Phoneme) -> int:
        """Order by text, code point by code point; a prefix sorts first."""
        a, b = self.text, other.text
        for ca, cb in zip(a, b):
            diff = ord(ca) - ord(cb)
            if diff:
                return diff
        return len(a) - len(b)

    def __lt__(self, other: Phoneme) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: Phoneme) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: Phoneme) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: Phoneme) -> bool:
        return self.compare(other) >= 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Phoneme):
            return NotImplemented
        return self.text == other.text and self.languages == other.languages

    def __hash__(self) -> int:
        return hash((self.text, self.languages))

    def __repr__(self) -> str:
        return f"Phoneme({self.text!r}, {self.languages!r})"


class PhonemeList:
    """Ordered alternatives; order follows the rule source."""

    __slots__ = ("_phonemes",)

    def __init__(self, phonemes: Iterable[Phoneme]) -> None:
        self._phonemes: tuple[Phoneme, ...] = tuple(phonemes)

    def phonemes(self) -> Iterator[Phoneme]:
        return iter(self._phonemes)

    def __iter__(self) -> Iterator[Phoneme]:
        return iter(self._phonemes)

    def __len__(self) -> int:
        return len(self._phonemes)

    def __getitem__(self, index: int) -> Phoneme:
        return self._phonemes[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhonemeList):
            return NotImplemented
        return self._phonemes == other._phonemes

    def __hash__(self) -> int:
        return hash(self._phonemes)

    def __repr__(self) -> str:
        return f"PhonemeList({list(self._phonemes)!r})"


PhonemeExpr = Union[Phoneme, PhonemeList]

