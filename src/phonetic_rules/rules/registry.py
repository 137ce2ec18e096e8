"""Process-wide index of parsed rule tables.

Tables are keyed by ``(name_type, rule_type, language)``. The registry is
built once, eagerly, and never modified afterwards; lookups need no
locking.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from phonetic_rules.config.schema import RegistryConfig, RulesConfig
from phonetic_rules.errors import (
    MissingRulesError,
    PhoneticRulesError,
    RegistryBuildError,
)
from phonetic_rules.languages.language_set import LanguageSet, parse_language_list
from phonetic_rules.resources.provider import DirectoryResourceProvider, ResourceProvider
from phonetic_rules.rules.parser import parse_rules
from phonetic_rules.rules.rule import Rule

logger = logging.getLogger(__name__)

RuleKey = tuple[str, str, str]

_LOAD_ERRORS = (PhoneticRulesError, OSError, UnicodeDecodeError)


class RuleRegistry:
    """Read-only mapping from (name type, rule type, language) to rules."""

    def __init__(
        self, tables: Mapping[RuleKey, tuple[Rule, ...]], any_language: str = "any"
    ) -> None:
        self._tables: Mapping[RuleKey, tuple[Rule, ...]] = MappingProxyType(dict(tables))
        self.any_language = any_language

    @classmethod
    def build(cls, config: RegistryConfig, provider: ResourceProvider) -> RuleRegistry:
        """Parse every configured rule table through *provider*.

        Each name type gets one table per supported language for every rule
        type, plus a ``common`` table for every rule type except the base
        one. Any failure aborts the build.
        """
        tables: dict[RuleKey, tuple[Rule, ...]] = {}

        for name_type in config.name_types:
            languages = supported_languages(config, provider, name_type)
            for rule_type in config.rule_types:
                targets = list(languages)
                if rule_type != config.base_rule_type:
                    targets.append(config.common_language)
                for language in targets:
                    rules = _load_table(provider, name_type, rule_type, language)
                    tables[(name_type, rule_type, language)] = tuple(rules)
                    logger.debug(
                        "Loaded %d rules for %s/%s/%s",
                        len(rules),
                        name_type,
                        rule_type,
                        language,
                    )

        registry = cls(tables, any_language=config.any_language)
        logger.info(
            "Rule registry built: %d tables, %d rules",
            len(registry),
            registry.rule_count(),
        )
        return registry

    def lookup(
        self, name_type: str, rule_type: str, language: str | LanguageSet
    ) -> tuple[Rule, ...]:
        """Return the rules for a single language or a language set.

        A language set naming exactly one language selects that language's
        table; any other set selects the ``any`` table.
        """
        if isinstance(language, LanguageSet):
            language = (
                language.any_language() if language.is_singleton() else self.any_language
            )

        rules = self._tables.get((name_type, rule_type, language))
        if rules is None:
            raise MissingRulesError(
                f"No rules found for {name_type}, {rule_type}, {language}."
            )
        return rules

    def keys(self) -> Iterator[RuleKey]:
        return iter(self._tables)

    def rule_count(self) -> int:
        return sum(len(rules) for rules in self._tables.values())

    def __contains__(self, key: object) -> bool:
        return key in self._tables

    def __len__(self) -> int:
        return len(self._tables)


def supported_languages(
    config: RegistryConfig, provider: ResourceProvider, name_type: str
) -> list[str]:
    """Languages that get their own table for *name_type*."""
    if name_type in config.languages:
        return list(config.languages[name_type])
    try:
        return parse_language_list(provider.read_languages(name_type))
    except _LOAD_ERRORS as exc:
        raise RegistryBuildError(
            f"Problem reading supported languages for {name_type}: {exc}"
        ) from exc


def _load_table(
    provider: ResourceProvider, name_type: str, rule_type: str, language: str
) -> list[Rule]:
    location = provider.rules_name(name_type, rule_type, language)
    try:
        return parse_rules(
            provider.read_rules(name_type, rule_type, language),
            location,
            provider.read_named,
        )
    except _LOAD_ERRORS as exc:
        raise RegistryBuildError(f"Problem processing {location}: {exc}") from exc


_registry: RuleRegistry | None = None
_registry_lock = threading.Lock()


def get_registry(
    config: RulesConfig | None = None, provider: ResourceProvider | None = None
) -> RuleRegistry:
    """Return the process-wide registry, building it on first use.

    Only the first call's arguments matter; concurrent first calls build
    exactly one registry.
    """
    global _registry
    registry = _registry
    if registry is not None:
        return registry

    with _registry_lock:
        if _registry is None:
            cfg = config or RulesConfig()
            if provider is None:
                provider = DirectoryResourceProvider.from_config(cfg.sources)
            _registry = RuleRegistry.build(cfg.registry, provider)
        return _registry


def reset_registry() -> None:
    """Forget the process-wide registry so the next call rebuilds it."""
    global _registry
    with _registry_lock:
        _registry = None
