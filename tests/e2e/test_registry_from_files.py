"""End-to-end: build the registry from rule files on disk."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from phonetic_rules.bootstrap import initialise
from phonetic_rules.config.loader import load_config
from phonetic_rules.errors import RegistryBuildError, RuleParseError
from phonetic_rules.languages.language_set import ANY_LANGUAGE, SomeLanguages
from phonetic_rules.resources.provider import DirectoryResourceProvider
from phonetic_rules.rules.registry import RuleRegistry, get_registry


@pytest.fixture
def registry(config_path: Path) -> RuleRegistry:
    cfg = load_config(config_path)
    provider = DirectoryResourceProvider.from_config(cfg.sources)
    return RuleRegistry.build(cfg.registry, provider)


def candidates(rules, text: str, position: int) -> list[tuple[str, object]]:
    """Phonemes of the first rule matching at *position*."""
    for rule in rules:
        if rule.matches(text, position):
            return [(p.text, p.languages) for p in rule.phoneme_expr.phonemes()]
    return []


class TestFullBuild:
    def test_tables(self, registry: RuleRegistry):
        assert len(registry) == 11
        assert registry.rule_count() == 40

    def test_languages_file_drives_tables(self, registry: RuleRegistry):
        for language in ("any", "english", "polish"):
            assert ("gen", "rules", language) in registry
            assert ("gen", "exact", language) in registry
        assert ("gen", "exact", "common") in registry
        assert ("gen", "rules", "common") not in registry

    def test_comment_only_file_is_empty_table(self, registry: RuleRegistry):
        assert registry.lookup("gen", "exact", "english") == ()

    def test_nested_include_provenance(self, registry: RuleRegistry):
        rules = registry.lookup("gen", "approx", "any")
        assert [r.pattern for r in rules] == ["h", "e", "tS", "v", "h"]
        assert rules[0].provenance.location == (
            "gen_approx_any.txt->gen_approx_common->gen_exact_approx_common"
        )
        assert rules[0].provenance.line == 2
        assert rules[2].provenance.location == "gen_approx_any.txt->gen_approx_common"
        assert rules[2].provenance.line == 5
        assert rules[4].provenance.location == "gen_approx_any.txt"

    def test_scenarios(self, registry: RuleRegistry):
        rules = registry.lookup("gen", "rules", "any")
        assert candidates(rules, "kats", 2) == [("tS", ANY_LANGUAGE)]
        assert candidates(rules, "kats", 1) == [("o", ANY_LANGUAGE), ("u", ANY_LANGUAGE)]
        assert candidates(rules, "khan", 0) == [
            ("kh", SomeLanguages({"english", "polish"}))
        ]
        assert candidates(rules, "wolf", 0) == [
            ("v", SomeLanguages({"polish"})),
            ("w", SomeLanguages({"english"})),
        ]
        # "w" only at the start of the name
        assert candidates(rules, "kowal", 2) == []

    def test_language_specific_table(self, registry: RuleRegistry):
        polish = registry.lookup("gen", "rules", SomeLanguages({"polish"}))
        assert candidates(polish, "brzoza", 1) == [("Z", ANY_LANGUAGE)]
        assert candidates(polish, "trzy", 1) == []


class TestBrokenSources:
    @pytest.fixture
    def broken_dir(self, tmp_path: Path, rules_dir: Path) -> Path:
        target = tmp_path / "rules"
        shutil.copytree(rules_dir, target)
        return target

    def test_error_in_included_file(self, broken_dir: Path, config_path: Path):
        (broken_dir / "gen_exact_approx_common.txt").write_text(
            '// shared\n"h" "^" "" "(h|)"\n"e" "" "" "e[polish"\n', encoding="utf-8"
        )
        cfg = load_config(config_path)
        with pytest.raises(RegistryBuildError) as excinfo:
            RuleRegistry.build(cfg.registry, DirectoryResourceProvider(broken_dir))
        cause = excinfo.value.__cause__
        assert isinstance(cause, RuleParseError)
        assert cause.line == 3
        assert cause.location.endswith("->gen_exact_approx_common")

    def test_missing_include_target(self, broken_dir: Path, config_path: Path):
        (broken_dir / "gen_approx_common.txt").unlink()
        cfg = load_config(config_path)
        with pytest.raises(RegistryBuildError, match="gen_approx_any"):
            RuleRegistry.build(cfg.registry, DirectoryResourceProvider(broken_dir))

    def test_warnings_logged(self, broken_dir: Path, config_path: Path, caplog):
        path = broken_dir / "gen_rules_english.txt"
        path.write_text(
            path.read_text(encoding="utf-8") + '"oo" "" "u"\n#include not valid\n',
            encoding="utf-8",
        )
        cfg = load_config(config_path)
        with caplog.at_level(logging.WARNING):
            registry = RuleRegistry.build(cfg.registry, DirectoryResourceProvider(broken_dir))
        assert len(registry.lookup("gen", "rules", "english")) == 5
        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any("split into 3 parts" in m for m in messages)
        assert any("Malformed include" in m for m in messages)


class TestBootstrap:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_initialise(self, config_path: Path):
        registry = initialise(config_path)
        assert registry is get_registry()
        assert registry.rule_count() == 40
        assert logging.getLogger().level == logging.DEBUG

    def test_initialise_bad_rules_dir(self, tmp_path: Path):
        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text("registry:\n  name_types: [gen]\n", encoding="utf-8")
        with pytest.raises(RegistryBuildError):
            initialise(cfg_path)
