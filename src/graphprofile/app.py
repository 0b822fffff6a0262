"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from graphprofile.adapters.graph import GraphClient, build_profile_query
from graphprofile.config.graph import get_graph_config
from graphprofile.domain.enrichment import ProfileEnricher
from graphprofile.domain.model import UserProfile
from graphprofile.domain.ports.clock import SystemClock

if TYPE_CHECKING:
    from graphprofile.config.graph import GraphConfig
    from graphprofile.domain.claims import ClaimSet
    from graphprofile.domain.ports.clock import Clock
    from graphprofile.domain.ports.directory import ProfileQuery

log = getLogger(__name__)


async def enrich_user_profile_async(
    claims: ClaimSet,
    profile: UserProfile | None = None,
    *,
    config: GraphConfig | None = None,
    client: GraphClient | None = None,
    query: ProfileQuery | None = None,
    clock: Clock | None = None,
) -> UserProfile:
    """Enrich ``profile`` (or a fresh one) from ``claims`` and the configured directory tier.

    A supplied ``client`` stays open for reuse; a client built here is closed
    before returning. The environment is only read when no ``query`` is
    injected and a tier query has to be built.
    """

    target = profile if profile is not None else UserProfile()
    owned_client: GraphClient | None = None
    if query is None:
        config = config or get_graph_config()
        if client is None:
            owned_client = client = GraphClient(config=config)
        query = build_profile_query(config.tier, client)

    enricher = ProfileEnricher(
        query=query,
        clock=clock or SystemClock(),
        capture_unknown_claims=config.capture_unknown_claims if config else False,
    )
    log.info("Starting profile enrichment with %s", getattr(query, "name", type(query).__name__))
    try:
        await enricher.enrich(target, claims)
    finally:
        if owned_client is not None:
            await owned_client.aclose()

    log.info(
        "Finished profile enrichment: oid=%s, organization=%s",
        target.oid,
        target.organization.organization_id if target.organization else None,
    )
    return target


def enrich_user_profile(
    claims: ClaimSet,
    profile: UserProfile | None = None,
    *,
    config: GraphConfig | None = None,
    query: ProfileQuery | None = None,
    clock: Clock | None = None,
) -> UserProfile:
    """Synchronous wrapper around :func:`enrich_user_profile_async`."""

    return asyncio.run(
        enrich_user_profile_async(claims, profile, config=config, query=query, clock=clock)
    )