"""Port definitions for the remote directory service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


class DirectoryServiceError(RuntimeError):
    """Raised when the directory could not be reached or answered unusably."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DirectoryAPIError(DirectoryServiceError):
    """Raised when the directory understood a request but rejected it."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.code = code


@dataclass(slots=True)
class DirectoryUser:
    user_principal_name: str | None = None
    display_name: str | None = None
    given_name: str | None = None
    surname: str | None = None
    mail_nickname: str | None = None
    birthday: datetime | None = None
    mail: str | None = None
    mobile_phone: str | None = None
    business_phones: list[str] | None = None
    preferred_language: str | None = None
    job_title: str | None = None
    company_name: str | None = None
    office_location: str | None = None
    department: str | None = None
    employee_id: str | None = None
    employee_type: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    created_date_time: datetime | None = None
    extension_attributes: dict[str, str] = field(default_factory=dict[str, str])


@dataclass(slots=True)
class DirectoryMailboxSettings:
    time_zone: str | None = None
    date_format: str | None = None
    time_format: str | None = None
    locale: str | None = None


@dataclass(slots=True, frozen=True)
class DirectoryOrganization:
    id: str | None = None
    display_name: str | None = None


@dataclass(slots=True, frozen=True)
class DirectoryObject:
    """Raw membership record; ``object_type`` is the directory's type discriminator."""

    object_type: str | None = None
    id: str | None = None
    display_name: str | None = None


@dataclass(slots=True)
class RemoteProfileBundle:
    """Everything one directory round trip returned for the signed-in user.

    An empty bundle (the default) stands in for a failed round trip.
    """

    user: DirectoryUser = field(default_factory=DirectoryUser)
    mailbox_settings: DirectoryMailboxSettings = field(default_factory=DirectoryMailboxSettings)
    organizations: list[DirectoryOrganization] = field(
        default_factory=list["DirectoryOrganization"]
    )
    memberships: list[DirectoryObject] = field(default_factory=list["DirectoryObject"])
    photo: str | None = None


@runtime_checkable
class ProfileQuery(Protocol):
    """Awaitable port producing the remote half of a profile."""

    async def __call__(self) -> RemoteProfileBundle: ...


__all__ = [
    "DirectoryAPIError",
    "DirectoryMailboxSettings",
    "DirectoryObject",
    "DirectoryOrganization",
    "DirectoryServiceError",
    "DirectoryUser",
    "ProfileQuery",
    "RemoteProfileBundle",
]
