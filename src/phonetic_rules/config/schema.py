"""Pydantic v2 configuration models for rule loading."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class RuleSourceConfig(BaseModel):
    """Where rule resources live and how their names are formed."""

    rules_dir: Path = Path("rules")
    encoding: str = "utf-8"
    rules_template: str = "{name_type}_{rule_type}_{language}.txt"
    include_template: str = "{name}.txt"
    languages_template: str = "{name_type}_languages.txt"


class RegistryConfig(BaseModel):
    """Which rule tables the registry builds at startup."""

    name_types: list[str] = Field(default_factory=lambda: ["ash", "gen", "sep"])
    rule_types: list[str] = Field(default_factory=lambda: ["approx", "exact", "rules"])
    base_rule_type: str = "rules"
    common_language: str = "common"
    any_language: str = "any"
    # Supported languages per name type; missing entries are read from the
    # name type's languages resource.
    languages: dict[str, list[str]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_base_rule_type(self) -> RegistryConfig:
        if self.base_rule_type not in self.rule_types:
            raise ValueError(
                f"base_rule_type {self.base_rule_type!r} is not one of {self.rule_types}"
            )
        return self


class RulesConfig(BaseModel):
    """Top-level configuration."""

    sources: RuleSourceConfig = Field(default_factory=RuleSourceConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    log_level: str = "INFO"
