"""User profile aggregate and its value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Final

EPOCH_MINIMUM: Final[datetime] = datetime.min.replace(tzinfo=UTC)
"""Sentinel for timestamps that were absent or could not be parsed."""

type TriState = bool | None


class EnrichmentTier(StrEnum):
    """Named bundle of directory resources fetched during enrichment."""

    MINIMAL = "minimal"
    EXTENDED = "extended"
    EXTERNAL = "external"


class MembershipKind(StrEnum):
    GROUP = "group"
    ADMINISTRATIVE_ROLE = "administrative-role"


@dataclass(slots=True, frozen=True)
class Membership:
    id: str
    display_name: str
    kind: MembershipKind


@dataclass(slots=True)
class UserProfileAddress:
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(slots=True)
class UserProfileOrganization:
    organization_id: str
    organization_name: str | None = None
    directory_groups: list[Membership] = field(default_factory=list["Membership"])
    directory_roles: list[Membership] = field(default_factory=list["Membership"])


@dataclass(slots=True)
class UserProfile:
    """Canonical profile record, owned by the caller and populated in place.

    Claims-derived fields are written first; directory-derived fields are
    written only once the claims carry both a tenant and an object id.
    """

    # OIDC standard claims
    id: str | None = None
    name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    middle_name: str | None = None
    nickname: str | None = None
    preferred_username: str | None = None
    email: str | None = None
    email_verified: TriState = None
    phone_number: str | None = None
    phone_number_verified: TriState = None
    birthdate: str | None = None
    gender: str | None = None
    website: str | None = None
    picture: str | None = None
    locale: str | None = None
    time_zone: str | None = None
    updated_at: datetime | None = None

    # Directory identity
    oid: str | None = None
    upn: str | None = None
    display_name: str | None = None

    # Directory contact and employment
    phone_numbers: list[str] = field(default_factory=list[str])
    job_title: str | None = None
    company: str | None = None
    office_location: str | None = None
    department: str | None = None
    employee_id: str | None = None
    employee_type: str | None = None
    address: UserProfileAddress | None = None
    organization: UserProfileOrganization | None = None

    # Formatting preferences
    date_format: str | None = None
    time_format: str | None = None

    created_at: datetime | None = None
    additional_data: dict[str, str] = field(default_factory=dict[str, str])


__all__ = [
    "EPOCH_MINIMUM",
    "EnrichmentTier",
    "Membership",
    "MembershipKind",
    "TriState",
    "UserProfile",
    "UserProfileAddress",
    "UserProfileOrganization",
]
