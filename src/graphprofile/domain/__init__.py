"""Profile enrichment domain: claims, memberships and the merge engine."""

from __future__ import annotations

from .claims import ClaimSet, IdentityFacts, apply_claims, read_identity_facts
from .enrichment import DEFAULT_PICTURE, ProfileEnricher, execute_profile_query
from .memberships import classify_memberships, partition_memberships
from .model import (
    EPOCH_MINIMUM,
    EnrichmentTier,
    Membership,
    MembershipKind,
    UserProfile,
    UserProfileAddress,
    UserProfileOrganization,
)

__all__ = [
    "DEFAULT_PICTURE",
    "EPOCH_MINIMUM",
    "ClaimSet",
    "EnrichmentTier",
    "IdentityFacts",
    "Membership",
    "MembershipKind",
    "ProfileEnricher",
    "UserProfile",
    "UserProfileAddress",
    "UserProfileOrganization",
    "apply_claims",
    "classify_memberships",
    "execute_profile_query",
    "partition_memberships",
    "read_identity_facts",
]
