from __future__ import annotations

import pytest

from graphprofile.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_graph_config,
    parse_tier,
    require_env_vars,
)
from graphprofile.config.env import env_flag, optional_env_var
from graphprofile.config.graph import DEFAULT_GRAPH_BASE_URL
from graphprofile.domain.model import EnrichmentTier

GRAPH_ENV_VARS = (
    "GRAPH_ACCESS_TOKEN",
    "GRAPH_BASE_URL",
    "GRAPH_ENRICHMENT_TIER",
    "GRAPH_CAPTURE_UNKNOWN_CLAIMS",
)


@pytest.fixture
def graph_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in GRAPH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GRAPH_ACCESS_TOKEN", " token-value ")
    return monkeypatch


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_falls_back_for_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR", "fallback") == "fallback"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("on", True), ("0", False), ("off", False)],
)
def test_env_flag_parses_switches(
    monkeypatch: pytest.MonkeyPatch,
    value: str,
    expected: bool,
) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", value)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(ConfigurationError, match="EXAMPLE_FLAG"):
        env_flag("EXAMPLE_FLAG")


def test_env_flag_default_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLAG", raising=False)

    assert env_flag("EXAMPLE_FLAG", default=True) is True


def test_parse_tier_is_case_insensitive() -> None:
    assert parse_tier(" Extended ") is EnrichmentTier.EXTENDED


def test_parse_tier_rejects_unknown_names() -> None:
    with pytest.raises(ConfigurationError, match="minimal, extended, external"):
        parse_tier("premium")


def test_get_graph_config_defaults(graph_env: pytest.MonkeyPatch) -> None:
    del graph_env

    config = get_graph_config()

    assert config.access_token == "token-value"
    assert config.tier is EnrichmentTier.MINIMAL
    assert config.base_url == DEFAULT_GRAPH_BASE_URL
    assert config.capture_unknown_claims is False
    assert config.scopes == ("User.Read",)
    assert config.resilience.base_url == DEFAULT_GRAPH_BASE_URL


def test_get_graph_config_reads_environment(graph_env: pytest.MonkeyPatch) -> None:
    graph_env.setenv("GRAPH_ENRICHMENT_TIER", "extended")
    graph_env.setenv("GRAPH_BASE_URL", "https://graph.example.test/beta/")
    graph_env.setenv("GRAPH_CAPTURE_UNKNOWN_CLAIMS", "true")

    config = get_graph_config()

    assert config.tier is EnrichmentTier.EXTENDED
    assert config.base_url == "https://graph.example.test/beta"
    assert config.capture_unknown_claims is True
    assert "Directory.AccessAsUser.All" in config.scopes
    assert config.resilience.base_url == "https://graph.example.test/beta"


def test_get_graph_config_arguments_override_environment(graph_env: pytest.MonkeyPatch) -> None:
    graph_env.setenv("GRAPH_ENRICHMENT_TIER", "extended")
    graph_env.setenv("GRAPH_CAPTURE_UNKNOWN_CLAIMS", "1")

    config = get_graph_config(tier=EnrichmentTier.EXTERNAL, capture_unknown_claims=False)

    assert config.tier is EnrichmentTier.EXTERNAL
    assert config.capture_unknown_claims is False


def test_get_graph_config_names_scopes_when_token_missing(graph_env: pytest.MonkeyPatch) -> None:
    graph_env.delenv("GRAPH_ACCESS_TOKEN")

    with pytest.raises(MissingConfigurationError) as exc:
        get_graph_config(tier=EnrichmentTier.EXTENDED)

    assert "GRAPH_ACCESS_TOKEN" in str(exc.value)
    assert "MailboxSettings.Read" in str(exc.value)

