"""Per-tier Graph queries that produce a ``RemoteProfileBundle``.

Each tier is a fixed field selection plus the set of extra resources it
reads. Structured resources travel in one ``$batch`` round trip when more
than one is requested; the photo is binary and is fetched on its own,
concurrently with the batch.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from graphprofile.domain.model import EnrichmentTier
from graphprofile.domain.ports.directory import RemoteProfileBundle

from .schema import (
    GraphDirectoryObjectCollection,
    GraphMailboxSettings,
    GraphOrganizationCollection,
    GraphUser,
)
from .translator import (
    translate_mailbox_settings,
    translate_memberships,
    translate_organizations,
    translate_user,
)

if TYPE_CHECKING:
    from .client import GraphClient

log = getLogger(__name__)

ID_AND_DISPLAY_NAME: Final = ("id", "displayName")

MINIMAL_USER_FIELDS: Final = (
    "userPrincipalName",
    "displayName",
    "givenName",
    "surname",
    "mailNickname",
    "mail",
    "mobilePhone",
    "preferredLanguage",
    "jobTitle",
    "companyName",
    "officeLocation",
    "department",
    "createdDateTime",
)

EXTERNAL_USER_FIELDS: Final = (
    "userPrincipalName",
    "displayName",
    "givenName",
    "surname",
    "mailNickname",
    "mail",
    "mobilePhone",
    "preferredLanguage",
    "jobTitle",
    "companyName",
    "officeLocation",
    "department",
    "employeeId",
    "employeeType",
    "streetAddress",
    "city",
    "state",
    "postalCode",
    "country",
    "createdDateTime",
)

EXTENDED_USER_FIELDS: Final = (
    "userPrincipalName",
    "displayName",
    "givenName",
    "surname",
    "mailNickname",
    "birthday",
    "mail",
    "mobilePhone",
    "businessPhones",
    "preferredLanguage",
    "jobTitle",
    "companyName",
    "officeLocation",
    "department",
    "employeeId",
    "employeeType",
    "streetAddress",
    "city",
    "state",
    "postalCode",
    "country",
    "createdDateTime",
)


@dataclass(slots=True, frozen=True)
class GraphProfileQuery:
    name: str
    user_fields: tuple[str, ...]
    mailbox_settings: bool = False
    organizations: bool = False
    memberships: bool = False
    photo: bool = False

    async def fetch(self, client: GraphClient) -> RemoteProfileBundle:
        if not self.photo:
            return await self._fetch_structured(client)

        # Both calls run to completion; neither failure cancels the other.
        structured, photo = await asyncio.gather(
            self._fetch_structured(client),
            client.get_photo_data_uri(client.config.photo_size),
            return_exceptions=True,
        )
        if isinstance(structured, BaseException):
            raise structured
        if isinstance(photo, BaseException):
            raise photo
        structured.photo = photo
        return structured

    async def _fetch_structured(self, client: GraphClient) -> RemoteProfileBundle:
        user_params = {"$select": ",".join(self.user_fields)}
        if not (self.mailbox_settings or self.organizations or self.memberships):
            user = await client.get("me", GraphUser, params=user_params)
            return RemoteProfileBundle(user=translate_user(user))

        batch = client.new_batch()
        user_id = batch.add_step("me", params=user_params)
        mailbox_id = batch.add_step("me/mailboxSettings") if self.mailbox_settings else None
        id_and_name = {"$select": ",".join(ID_AND_DISPLAY_NAME)}
        organizations_id = (
            batch.add_step("organization", params=id_and_name) if self.organizations else None
        )
        memberships_id = (
            batch.add_step("me/memberOf", params=id_and_name) if self.memberships else None
        )

        response = await client.post_batch(batch)

        bundle = RemoteProfileBundle(user=translate_user(response.get(user_id, GraphUser)))
        if mailbox_id is not None:
            bundle.mailbox_settings = translate_mailbox_settings(
                response.get(mailbox_id, GraphMailboxSettings)
            )
        if organizations_id is not None:
            bundle.organizations = translate_organizations(
                response.get(organizations_id, GraphOrganizationCollection)
            )
        if memberships_id is not None:
            bundle.memberships = translate_memberships(
                response.get(memberships_id, GraphDirectoryObjectCollection)
            )
        return bundle


PROFILE_QUERIES: Final[dict[EnrichmentTier, GraphProfileQuery]] = {
    EnrichmentTier.MINIMAL: GraphProfileQuery(
        name="GraphMinimalProfileQuery",
        user_fields=MINIMAL_USER_FIELDS,
        mailbox_settings=True,
        organizations=True,
        photo=True,
    ),
    EnrichmentTier.EXTENDED: GraphProfileQuery(
        name="GraphExtendedProfileQuery",
        user_fields=EXTENDED_USER_FIELDS,
        mailbox_settings=True,
        organizations=True,
        memberships=True,
        photo=True,
    ),
    # External tenants do not expose photos, organizations or memberships to users.
    EnrichmentTier.EXTERNAL: GraphProfileQuery(
        name="GraphExternalProfileQuery",
        user_fields=EXTERNAL_USER_FIELDS,
    ),
}


@dataclass(slots=True, frozen=True)
class BoundProfileQuery:
    """A tier query bound to a shared client, usable as a ``ProfileQuery``."""

    query: GraphProfileQuery
    client: GraphClient

    @property
    def name(self) -> str:
        return self.query.name

    async def __call__(self) -> RemoteProfileBundle:
        return await self.query.fetch(self.client)


def build_profile_query(tier: EnrichmentTier, client: GraphClient) -> BoundProfileQuery:
    query = PROFILE_QUERIES[tier]
    log.debug("Using %s for %s enrichment", query.name, tier)
    return BoundProfileQuery(query=query, client=client)


__all__ = [
    "EXTENDED_USER_FIELDS",
    "EXTERNAL_USER_FIELDS",
    "MINIMAL_USER_FIELDS",
    "PROFILE_QUERIES",
    "BoundProfileQuery",
    "GraphProfileQuery",
    "build_profile_query",
]
