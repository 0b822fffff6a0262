"""Microsoft Graph configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from graphprofile.domain.model import EnrichmentTier

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_GRAPH_BASE_URL: Final = "https://graph.microsoft.com/v1.0"
DEFAULT_PHOTO_SIZE: Final = "96x96"
GRAPH_TIMEOUT_SECONDS: Final = 15.0

MINIMAL_GRAPH_SCOPES: Final = ("User.Read",)
EXTENDED_GRAPH_SCOPES: Final = ("User.Read", "MailboxSettings.Read", "Directory.AccessAsUser.All")

GRAPH_SCOPES: Final[dict[EnrichmentTier, tuple[str, ...]]] = {
    EnrichmentTier.MINIMAL: MINIMAL_GRAPH_SCOPES,
    EnrichmentTier.EXTENDED: EXTENDED_GRAPH_SCOPES,
    EnrichmentTier.EXTERNAL: MINIMAL_GRAPH_SCOPES,
}


def default_graph_resilience(*, base_url: str = DEFAULT_GRAPH_BASE_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="graph",
        base_url=base_url,
        timeout_seconds=GRAPH_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=3),
        default_headers={"Accept": "application/json"},
    )


@dataclass(frozen=True, slots=True)
class GraphConfig:
    access_token: str
    tier: EnrichmentTier = EnrichmentTier.MINIMAL
    base_url: str = DEFAULT_GRAPH_BASE_URL
    capture_unknown_claims: bool = False
    photo_size: str = DEFAULT_PHOTO_SIZE
    resilience: ResilienceConfig = field(default_factory=default_graph_resilience)

    @property
    def scopes(self) -> tuple[str, ...]:
        return GRAPH_SCOPES[self.tier]


def parse_tier(value: str) -> EnrichmentTier:
    try:
        return EnrichmentTier(value.strip().lower())
    except ValueError:
        choices = ", ".join(tier.value for tier in EnrichmentTier)
        raise ConfigurationError(
            f"Unknown enrichment tier {value!r} (expected one of: {choices})"
        ) from None


def get_graph_config(
    *,
    tier: EnrichmentTier | None = None,
    capture_unknown_claims: bool | None = None,
) -> GraphConfig:
    """Load Graph settings from the environment; explicit arguments win."""

    effective_tier = tier or parse_tier(optional_env_var("GRAPH_ENRICHMENT_TIER", "minimal"))
    try:
        values = require_env_vars(("GRAPH_ACCESS_TOKEN",))
    except MissingConfigurationError as exc:
        scopes = ", ".join(GRAPH_SCOPES[effective_tier])
        raise MissingConfigurationError(f"{exc} (token needs scopes: {scopes})") from None

    base_url = optional_env_var("GRAPH_BASE_URL", DEFAULT_GRAPH_BASE_URL).rstrip("/")

    return GraphConfig(
        access_token=values["GRAPH_ACCESS_TOKEN"].strip(),
        tier=effective_tier,
        base_url=base_url,
        capture_unknown_claims=(
            capture_unknown_claims
            if capture_unknown_claims is not None
            else env_flag("GRAPH_CAPTURE_UNKNOWN_CLAIMS")
        ),
        resilience=default_graph_resilience(base_url=base_url),
    )


__all__ = [
    "DEFAULT_GRAPH_BASE_URL",
    "DEFAULT_PHOTO_SIZE",
    "EXTENDED_GRAPH_SCOPES",
    "GRAPH_SCOPES",
    "MINIMAL_GRAPH_SCOPES",
    "GraphConfig",
    "default_graph_resilience",
    "get_graph_config",
    "parse_tier",
]
