"""Application startup: configuration, logging and the rule registry."""

from __future__ import annotations

import logging
from pathlib import Path

from phonetic_rules.config.loader import load_config
from phonetic_rules.config.schema import RulesConfig
from phonetic_rules.resources.provider import DirectoryResourceProvider
from phonetic_rules.rules.registry import RuleRegistry, get_registry
from phonetic_rules.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def initialise(config_path: Path | str | None = None) -> RuleRegistry:
    """Load configuration, configure logging and build the rule registry.

    Any problem with the rule resources propagates, so a misconfigured
    application fails at startup instead of serving a partial rule set.
    """
    cfg = load_config(config_path) if config_path is not None else RulesConfig()
    setup_logging(cfg.log_level)

    logger.info("Loading rules from %s", cfg.sources.rules_dir)
    provider = DirectoryResourceProvider.from_config(cfg.sources)
    return get_registry(cfg, provider)
