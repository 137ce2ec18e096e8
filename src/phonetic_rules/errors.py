"""Exception hierarchy for rule loading and evaluation."""

from __future__ import annotations


class PhoneticRulesError(Exception):
    """Base class for all errors raised by phonetic_rules."""


class ContextPatternError(PhoneticRulesError, ValueError):
    """A left/right context could not be compiled as a regular expression."""


class PhonemeSyntaxError(PhoneticRulesError, ValueError):
    """A phoneme expression is malformed."""


class RuleParseError(PhoneticRulesError):
    """A rule source line could not be turned into a Rule.

    Carries the source location and the 1-based line number of the
    offending line; the underlying error is chained as ``__cause__``.
    """

    def __init__(self, location: str, line: int, reason: str = "") -> None:
        self.location = location
        self.line = line
        message = f"Problem parsing line {line} of {location}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ResourceNotFoundError(PhoneticRulesError, FileNotFoundError):
    """A named rule resource could not be resolved."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unable to load resource: {name}")


class RegistryBuildError(PhoneticRulesError):
    """Building the rule registry failed for one of its resources."""


class MissingRulesError(PhoneticRulesError, KeyError):
    """No rule table is registered under the requested key."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""
