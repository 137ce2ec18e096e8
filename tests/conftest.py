"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from phonetic_rules.resources.provider import MemoryResourceProvider
from phonetic_rules.rules.registry import reset_registry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def config_path() -> Path:
    return FIXTURES_DIR / "config_test.yaml"


@pytest.fixture
def rules_dir() -> Path:
    return FIXTURES_DIR / "rules"


@pytest.fixture
def memory_provider() -> MemoryResourceProvider:
    """A tiny two-language rule set held in memory."""
    return MemoryResourceProvider(
        {
            "gen_languages": "any\npolish\n",
            "gen_rules_any": '"a" "" "" "(o|u)"\n"ts" "" "$" "tS"\n',
            "gen_rules_polish": '"sz" "" "" "S"\n',
            "gen_approx_any": "#include shared\n",
            "gen_approx_polish": '#include shared\n"w" "" "" "v"\n',
            "gen_approx_common": '"e" "" "$" "(e|)"\n',
            "shared": '"h" "^" "" "(h|)"\n',
        }
    )


@pytest.fixture(autouse=True)
def _fresh_registry():
    reset_registry()
    yield
    reset_registry()
