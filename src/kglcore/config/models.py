"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, kgl.toml only contains overrides.
An empty or missing kgl.toml gives a report-only gateway with every rule
category enabled.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from kglcore.domain.types import RuleCategory


class Strictness(StrEnum):
    """What a checkpoint does when it finds errors."""

    STRICT = "strict"  # raise after the stage aggregates
    WARN = "warn"  # log and return
    REPORT = "report"  # return only


# --- kgl.toml sections ---


class GatewayConfig(BaseModel):
    """[gateway] section."""

    model_config = {"frozen": True}

    strictness: Strictness = Strictness.REPORT
    enabled_categories: tuple[RuleCategory, ...] | None = None
    skip_rules: tuple[str, ...] = ()


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class KglConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
