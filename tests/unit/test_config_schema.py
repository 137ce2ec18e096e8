"""Tests for configuration schema and loader."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from phonetic_rules.config.loader import load_config
from phonetic_rules.config.schema import RegistryConfig, RuleSourceConfig, RulesConfig


class TestRulesConfig:
    def test_defaults(self):
        cfg = RulesConfig()
        assert cfg.log_level == "INFO"
        assert cfg.sources.rules_dir == Path("rules")
        assert cfg.sources.encoding == "utf-8"

    def test_registry_defaults(self):
        cfg = RegistryConfig()
        assert cfg.name_types == ["ash", "gen", "sep"]
        assert cfg.rule_types == ["approx", "exact", "rules"]
        assert cfg.base_rule_type == "rules"
        assert cfg.common_language == "common"
        assert cfg.any_language == "any"
        assert cfg.languages == {}

    def test_source_templates(self):
        src = RuleSourceConfig()
        assert src.rules_template.format(
            name_type="gen", rule_type="approx", language="any"
        ) == "gen_approx_any.txt"

    def test_base_rule_type_must_be_listed(self):
        with pytest.raises(ValidationError):
            RegistryConfig(rule_types=["approx"], base_rule_type="rules")


class TestLoadConfig:
    def test_load_test_config(self, config_path: Path):
        cfg = load_config(config_path)
        assert cfg.log_level == "DEBUG"
        assert cfg.registry.name_types == ["gen"]
        assert cfg.registry.rule_types == ["approx", "exact", "rules"]

    def test_rules_dir_relative_to_config(self, config_path: Path):
        cfg = load_config(config_path)
        assert cfg.sources.rules_dir == config_path.parent / "rules"

    def test_absolute_rules_dir_kept(self, tmp_path: Path):
        p = tmp_path / "cfg.yaml"
        p.write_text(f"sources:\n  rules_dir: {tmp_path / 'elsewhere'}\n")
        cfg = load_config(p)
        assert cfg.sources.rules_dir == tmp_path / "elsewhere"

    def test_load_empty_yaml(self, tmp_path: Path):
        p = tmp_path / "empty.yaml"
        p.write_text("")
        cfg = load_config(p)
        assert cfg.log_level == "INFO"
        assert cfg.sources.rules_dir == tmp_path / "rules"
