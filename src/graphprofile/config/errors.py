"""Errors raised while loading graphprofile settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a setting such as the tier or a boolean switch is invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when a required setting (e.g. ``GRAPH_ACCESS_TOKEN``) is absent or blank."""
