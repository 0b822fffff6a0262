"""Translate Graph payloads into directory port types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphprofile.domain.ports.directory import (
    DirectoryMailboxSettings,
    DirectoryObject,
    DirectoryOrganization,
    DirectoryUser,
)

if TYPE_CHECKING:
    from .schema import (
        GraphDirectoryObjectCollection,
        GraphMailboxSettings,
        GraphOrganizationCollection,
        GraphUser,
    )


def translate_user(user: GraphUser | None) -> DirectoryUser:
    if user is None:
        return DirectoryUser()
    return DirectoryUser(
        user_principal_name=user.user_principal_name,
        display_name=user.display_name,
        given_name=user.given_name,
        surname=user.surname,
        mail_nickname=user.mail_nickname,
        birthday=user.birthday,
        mail=user.mail,
        mobile_phone=user.mobile_phone,
        business_phones=list(user.business_phones) if user.business_phones is not None else None,
        preferred_language=user.preferred_language,
        job_title=user.job_title,
        company_name=user.company_name,
        office_location=user.office_location,
        department=user.department,
        employee_id=user.employee_id,
        employee_type=user.employee_type,
        street_address=user.street_address,
        city=user.city,
        state=user.state,
        postal_code=user.postal_code,
        country=user.country,
        created_date_time=user.created_date_time,
        extension_attributes=user.extension_attributes,
    )


def translate_mailbox_settings(settings: GraphMailboxSettings | None) -> DirectoryMailboxSettings:
    if settings is None:
        return DirectoryMailboxSettings()
    return DirectoryMailboxSettings(
        time_zone=settings.time_zone,
        date_format=settings.date_format,
        time_format=settings.time_format,
        locale=settings.language.locale if settings.language else None,
    )


def translate_organizations(
    collection: GraphOrganizationCollection | None,
) -> list[DirectoryOrganization]:
    if collection is None:
        return []
    return [
        DirectoryOrganization(id=organization.id, display_name=organization.display_name)
        for organization in collection.value
    ]


def translate_memberships(
    collection: GraphDirectoryObjectCollection | None,
) -> list[DirectoryObject]:
    if collection is None:
        return []
    return [
        DirectoryObject(
            object_type=entry.odata_type,
            id=entry.id,
            display_name=entry.display_name,
        )
        for entry in collection.value
    ]


__all__ = [
    "translate_mailbox_settings",
    "translate_memberships",
    "translate_organizations",
    "translate_user",
]
