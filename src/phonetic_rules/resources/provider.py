"""Resolve rule resources by name.

The registry never opens files itself; it asks a ``ResourceProvider`` for
the lines of a rules table, an included resource, or a name type's list of
supported languages.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from phonetic_rules.config.schema import RuleSourceConfig
from phonetic_rules.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


@runtime_checkable
class ResourceProvider(Protocol):
    """Protocol that all rule resource providers must implement."""

    def rules_name(self, name_type: str, rule_type: str, language: str) -> str:
        """Name of the rules resource, used as its parse location."""
        ...

    def read_rules(self, name_type: str, rule_type: str, language: str) -> list[str]: ...

    def read_named(self, name: str) -> list[str]:
        """Lines of an ``#include`` target."""
        ...

    def read_languages(self, name_type: str) -> list[str]: ...


class DirectoryResourceProvider:
    """Reads rule resources from text files in one directory."""

    def __init__(
        self,
        root: Path | str,
        encoding: str = "utf-8",
        rules_template: str = "{name_type}_{rule_type}_{language}.txt",
        include_template: str = "{name}.txt",
        languages_template: str = "{name_type}_languages.txt",
    ) -> None:
        self.root = Path(root)
        self.encoding = encoding
        self.rules_template = rules_template
        self.include_template = include_template
        self.languages_template = languages_template

    @classmethod
    def from_config(cls, config: RuleSourceConfig) -> DirectoryResourceProvider:
        return cls(
            config.rules_dir,
            encoding=config.encoding,
            rules_template=config.rules_template,
            include_template=config.include_template,
            languages_template=config.languages_template,
        )

    def rules_name(self, name_type: str, rule_type: str, language: str) -> str:
        return self.rules_template.format(
            name_type=name_type, rule_type=rule_type, language=language
        )

    def read_rules(self, name_type: str, rule_type: str, language: str) -> list[str]:
        return self._read(self.rules_name(name_type, rule_type, language))

    def read_named(self, name: str) -> list[str]:
        return self._read(self.include_template.format(name=name))

    def read_languages(self, name_type: str) -> list[str]:
        return self._read(self.languages_template.format(name_type=name_type))

    def _read(self, filename: str) -> list[str]:
        path = self.root / filename
        if not path.is_file():
            raise ResourceNotFoundError(str(path))
        logger.debug("Reading %s", path)
        with path.open("r", encoding=self.encoding) as fh:
            return fh.read().splitlines()


class MemoryResourceProvider:
    """Serves rule resources from an in-memory mapping of name -> text.

    Keys are resource names without an extension, e.g.
    ``"gen_approx_common"`` or ``"gen_languages"``.
    """

    def __init__(self, sources: Mapping[str, str]) -> None:
        self._sources = dict(sources)

    def rules_name(self, name_type: str, rule_type: str, language: str) -> str:
        return f"{name_type}_{rule_type}_{language}"

    def read_rules(self, name_type: str, rule_type: str, language: str) -> list[str]:
        return self._read(self.rules_name(name_type, rule_type, language))

    def read_named(self, name: str) -> list[str]:
        return self._read(name)

    def read_languages(self, name_type: str) -> list[str]:
        return self._read(f"{name_type}_languages")

    def _read(self, name: str) -> list[str]:
        try:
            return self._sources[name].splitlines()
        except KeyError:
            raise ResourceNotFoundError(name) from None
