"""Configuration module for Score Lookup."""

from score_lookup.config.factory import create_from_config, create_oracle
from score_lookup.config.loader import get_default_config_path, load_config
from score_lookup.config.models import (
    ArchiveConfig,
    ClaudeOracleConfig,
    LoggingConfig,
    NoOracleConfig,
    OracleConfig,
    ScoreLookupConfig,
    SearchConfig,
)

__all__ = [
    "ArchiveConfig",
    "ClaudeOracleConfig",
    "LoggingConfig",
    "NoOracleConfig",
    "OracleConfig",
    "ScoreLookupConfig",
    "SearchConfig",
    "create_from_config",
    "create_oracle",
    "get_default_config_path",
    "load_config",
]
