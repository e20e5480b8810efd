"""Configuration layer — pydantic models, kgl.toml discovery, logging setup."""

from kglcore.config.discovery import ConfigError, find_config, load_config
from kglcore.config.logging import configure_logging
from kglcore.config.models import GatewayConfig, KglConfig, LoggingConfig, PluginsConfig, Strictness

__all__ = [
    "ConfigError",
    "GatewayConfig",
    "KglConfig",
    "LoggingConfig",
    "PluginsConfig",
    "Strictness",
    "configure_logging",
    "find_config",
    "load_config",
]
