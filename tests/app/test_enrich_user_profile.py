from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from graphprofile.app import enrich_user_profile, enrich_user_profile_async
from graphprofile.config.graph import GraphConfig
from graphprofile.domain.enrichment import DEFAULT_PICTURE
from graphprofile.domain.model import EnrichmentTier, UserProfile, UserProfileOrganization
from graphprofile.domain.ports.directory import RemoteProfileBundle
from tests.support.clock import FixedClock
from tests.support.directory import StubQuery
from tests.support.graph import FakeGraph, make_graph_client


def test_enrich_user_profile_with_injected_query(
    claims: dict[str, str],
    remote_bundle: RemoteProfileBundle,
) -> None:
    config = GraphConfig(access_token="token", capture_unknown_claims=True)
    profile = UserProfile()

    result = enrich_user_profile(
        claims,
        profile,
        config=config,
        query=StubQuery(bundle=remote_bundle),
        clock=FixedClock(),
    )

    assert result is profile
    assert profile.organization is not None
    assert profile.organization.organization_id == "org-1"
    assert profile.additional_data == {"ctry": "GB", "extension_abc_costCenter": "42"}


def test_enrich_user_profile_against_fake_graph(claims: dict[str, str]) -> None:
    fake = FakeGraph(
        resources={
            "/me": (200, {"displayName": "Ada Lovelace", "jobTitle": "Analyst"}),
            "/me/mailboxSettings": (200, {"timeZone": "GMT Standard Time"}),
            "/organization": (200, {"value": [{"id": "org-1", "displayName": "Contoso"}]}),
        },
        photo=(200, b"img", "image/png"),
    )
    config = GraphConfig(access_token="token", tier=EnrichmentTier.MINIMAL)

    async def scenario() -> UserProfile:
        async with make_graph_client(fake, config=config) as client:
            return await enrich_user_profile_async(
                claims, config=config, client=client, clock=FixedClock()
            )

    profile = asyncio.run(scenario())

    assert profile.display_name == "Ada Lovelace"
    assert profile.job_title == "Analyst"
    assert profile.time_zone == "GMT Standard Time"
    assert profile.picture == "data:image/png;base64,aW1n"
    assert profile.organization == UserProfileOrganization("org-1", "Contoso")


def test_enrich_user_profile_survives_unreachable_graph(
    claims: dict[str, str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    fake = FakeGraph(fail_with=httpx.ConnectError("connection refused"))
    config = GraphConfig(access_token="token", tier=EnrichmentTier.EXTENDED)

    async def scenario() -> UserProfile:
        async with make_graph_client(fake, config=config) as client:
            return await enrich_user_profile_async(
                claims, config=config, client=client, clock=FixedClock()
            )

    with caplog.at_level(logging.ERROR, logger="graphprofile.domain.enrichment"):
        profile = asyncio.run(scenario())

    assert profile.name == "Ada Lovelace"
    assert profile.job_title is None
    assert profile.picture == DEFAULT_PICTURE
    assert profile.organization == UserProfileOrganization(organization_id=claims["tid"])
    assert any("Service error querying the directory" in r.getMessage() for r in caplog.records)


def test_injected_query_needs_no_environment(
    monkeypatch: pytest.MonkeyPatch,
    claims: dict[str, str],
    remote_bundle: RemoteProfileBundle,
) -> None:
    monkeypatch.delenv("GRAPH_ACCESS_TOKEN", raising=False)
    query = StubQuery(bundle=remote_bundle)

    profile = enrich_user_profile(claims, query=query, clock=FixedClock())

    assert query.calls == 1
    assert profile.job_title == "Analyst"
    assert profile.additional_data == {"extension_abc_costCenter": "42"}
