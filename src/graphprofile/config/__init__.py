"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .graph import (
    DEFAULT_GRAPH_BASE_URL,
    GRAPH_SCOPES,
    GraphConfig,
    default_graph_resilience,
    get_graph_config,
    parse_tier,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

__all__ = [
    "DEFAULT_GRAPH_BASE_URL",
    "GRAPH_SCOPES",
    "ConfigurationError",
    "GraphConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "default_graph_resilience",
    "env_flag",
    "get_graph_config",
    "optional_env_var",
    "parse_tier",
    "require_env_vars",
]
