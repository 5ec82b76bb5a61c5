"""Pydantic configuration models for Score Lookup components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from score_lookup.search.imslp import IMSLP_API_URL, IMSLP_WIKI_URL

# ============================================================
# Oracle Configs
# ============================================================


class ClaudeOracleConfig(BaseModel):
    """Configuration for the Claude-backed query oracle."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    timeout_seconds: float = Field(default=15.0, gt=0)
    max_tokens: int = Field(default=512, gt=0)
    instructions: str | None = None

    model_config = {"frozen": True}


class NoOracleConfig(BaseModel):
    """Disable oracle expansion; only rule-based variants are searched."""

    type: Literal["none"] = "none"

    model_config = {"frozen": True}


OracleConfig = Annotated[
    ClaudeOracleConfig | NoOracleConfig,
    Field(discriminator="type"),
]


# ============================================================
# Archive Config
# ============================================================


class ArchiveConfig(BaseModel):
    """Endpoints of the MediaWiki-based score archive."""

    api_url: str = IMSLP_API_URL
    wiki_url: str = IMSLP_WIKI_URL
    timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Search Config
# ============================================================


class SearchConfig(BaseModel):
    """Fan-out and quota settings."""

    per_variant_limit: int = Field(default=4, ge=1)
    search_quota: int = Field(default=8, ge=1)
    check_quota: int = Field(default=5, ge=1)
    max_concurrency: int = Field(default=4, ge=1)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for per-request JSON run logs."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class ScoreLookupConfig(BaseModel):
    """Root configuration for Score Lookup."""

    oracle: OracleConfig = Field(default_factory=ClaudeOracleConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
