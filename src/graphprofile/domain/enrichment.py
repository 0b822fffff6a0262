"""Merge claims and directory data into a user profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from graphprofile.domain.claims import apply_claims, read_identity_facts
from graphprofile.domain.culture import CultureDefaults, current_culture
from graphprofile.domain.memberships import classify_memberships, partition_memberships
from graphprofile.domain.model import UserProfileAddress, UserProfileOrganization
from graphprofile.domain.ports.clock import Clock, SystemClock
from graphprofile.domain.ports.directory import (
    DirectoryAPIError,
    DirectoryServiceError,
    RemoteProfileBundle,
)

if TYPE_CHECKING:
    from graphprofile.domain.claims import ClaimSet, IdentityFacts
    from graphprofile.domain.model import UserProfile
    from graphprofile.domain.ports.directory import (
        DirectoryMailboxSettings,
        DirectoryOrganization,
        DirectoryUser,
        ProfileQuery,
    )

log = getLogger(__name__)

DEFAULT_PICTURE: Final = "/assets/images/guest-user-icon.svg"


async def execute_profile_query(query: ProfileQuery) -> RemoteProfileBundle:
    """Run ``query``; any failure is logged and replaced by an empty bundle."""

    try:
        return await query()
    except DirectoryAPIError as exc:
        log.error(
            "OData error querying the directory (code=%s, status=%s): %s",
            exc.code,
            exc.status_code,
            exc,
            exc_info=exc,
        )
    except DirectoryServiceError as exc:
        log.error(
            "Service error querying the directory (status=%s): %s",
            exc.status_code,
            exc,
            exc_info=exc,
        )
    except Exception as exc:  # noqa: BLE001
        log.error("Unknown error querying the directory: %s", exc, exc_info=exc)
    return RemoteProfileBundle()


@dataclass(slots=True)
class ProfileEnricher:
    """Populate a caller-owned ``UserProfile`` from claims plus one directory query.

    The claims pass always runs. The directory is only consulted when the
    claims carry both a tenant id and an object id; otherwise the profile
    keeps its claims-derived fields and nothing else.
    """

    query: ProfileQuery
    clock: Clock = field(default_factory=SystemClock)
    culture: CultureDefaults = field(default_factory=current_culture)
    capture_unknown_claims: bool = False
    default_picture: str = DEFAULT_PICTURE

    async def enrich(self, profile: UserProfile, claims: ClaimSet) -> None:
        if profile is None:
            raise TypeError("profile is required")
        if claims is None:
            raise TypeError("claims are required")

        log.debug("%s enriching profile from the directory", _query_name(self.query))

        apply_claims(profile, claims, capture_unknown_claims=self.capture_unknown_claims)

        facts = read_identity_facts(claims)
        if facts.tenant_id is None:
            log.warning(
                "Unable to get the tid claim; ensure the claims were issued by an Entra ID provider"
            )
            return
        if facts.subject_id is None:
            log.warning(
                "Unable to get the oid claim; ensure the claims were issued by an Entra ID provider"
            )
            return

        bundle = await execute_profile_query(self.query)
        self._merge(profile, facts, bundle)

    def _merge(
        self,
        profile: UserProfile,
        facts: IdentityFacts,
        bundle: RemoteProfileBundle,
    ) -> None:
        user = bundle.user

        profile.updated_at = facts.updated_at
        profile.email_verified = facts.email_verified
        profile.phone_number_verified = facts.phone_number_verified

        profile.oid = facts.subject_id
        profile.upn = user.user_principal_name
        profile.display_name = user.display_name
        profile.given_name = user.given_name
        profile.family_name = user.surname
        profile.nickname = user.mail_nickname
        profile.birthdate = _birthdate(user)
        profile.email = user.mail
        profile.phone_number = user.mobile_phone
        profile.phone_numbers = list(user.business_phones or [])

        profile.job_title = user.job_title
        profile.company = user.company_name
        profile.office_location = user.office_location
        profile.department = user.department
        profile.employee_id = user.employee_id
        profile.employee_type = user.employee_type
        profile.address = _address(user)

        profile.picture = bundle.photo or self.default_picture
        profile.organization = _organization(bundle, tenant_id=facts.tenant_id or "")

        self._apply_formatting(profile, user, bundle.mailbox_settings)

        profile.created_at = user.created_date_time or self.clock.local_offset
        profile.additional_data.update(user.extension_attributes)

    def _apply_formatting(
        self,
        profile: UserProfile,
        user: DirectoryUser,
        settings: DirectoryMailboxSettings,
    ) -> None:
        profile.locale = user.preferred_language or settings.locale or self.culture.name
        profile.time_zone = settings.time_zone or self.clock.local_time_zone_id
        profile.date_format = settings.date_format or self.culture.short_date_pattern
        profile.time_format = settings.time_format or self.culture.short_time_pattern


def _organization(bundle: RemoteProfileBundle, *, tenant_id: str) -> UserProfileOrganization:
    if not bundle.organizations:
        return UserProfileOrganization(organization_id=tenant_id)

    remote: DirectoryOrganization = bundle.organizations[0]
    groups, roles = partition_memberships(classify_memberships(bundle.memberships))
    return UserProfileOrganization(
        organization_id=remote.id or tenant_id,
        organization_name=remote.display_name,
        directory_groups=groups,
        directory_roles=roles,
    )


def _address(user: DirectoryUser) -> UserProfileAddress | None:
    address = UserProfileAddress(
        street_address=user.street_address,
        city=user.city,
        state=user.state,
        postal_code=user.postal_code,
        country=user.country,
    )
    if address == UserProfileAddress():
        return None
    return address


def _birthdate(user: DirectoryUser) -> str | None:
    # The directory reports an unset birthday as 0001-01-01.
    if user.birthday is None or user.birthday.year <= 1:
        return None
    return user.birthday.date().isoformat()


def _query_name(query: ProfileQuery) -> str:
    return getattr(query, "name", None) or type(query).__name__


__all__ = ["DEFAULT_PICTURE", "ProfileEnricher", "execute_profile_query"]
