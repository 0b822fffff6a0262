"""Microsoft Graph payload schemas used for profile enrichment."""

from __future__ import annotations

import logging
from datetime import datetime  # noqa: TC003
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

EXTENSION_ATTRIBUTE_PREFIX = "extension_"


class GraphBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = {
            key
            for key in extras
            if not key.startswith(("@odata.", EXTENSION_ATTRIBUTE_PREFIX))
        }.difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Graph %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class GraphUser(GraphBaseModel):
    id: str | None = None
    user_principal_name: str | None = Field(default=None, alias="userPrincipalName")
    display_name: str | None = Field(default=None, alias="displayName")
    given_name: str | None = Field(default=None, alias="givenName")
    surname: str | None = None
    mail_nickname: str | None = Field(default=None, alias="mailNickname")
    birthday: datetime | None = None
    mail: str | None = None
    mobile_phone: str | None = Field(default=None, alias="mobilePhone")
    business_phones: list[str] | None = Field(default=None, alias="businessPhones")
    preferred_language: str | None = Field(default=None, alias="preferredLanguage")
    job_title: str | None = Field(default=None, alias="jobTitle")
    company_name: str | None = Field(default=None, alias="companyName")
    office_location: str | None = Field(default=None, alias="officeLocation")
    department: str | None = None
    employee_id: str | None = Field(default=None, alias="employeeId")
    employee_type: str | None = Field(default=None, alias="employeeType")
    street_address: str | None = Field(default=None, alias="streetAddress")
    city: str | None = None
    state: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    country: str | None = None
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")

    @property
    def extension_attributes(self) -> dict[str, str]:
        extras = self.__pydantic_extra__ or {}
        return {
            key: f"{value}"
            for key, value in extras.items()
            if key.startswith(EXTENSION_ATTRIBUTE_PREFIX)
        }


class GraphLocaleInfo(GraphBaseModel):
    locale: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")


class GraphMailboxSettings(GraphBaseModel):
    time_zone: str | None = Field(default=None, alias="timeZone")
    date_format: str | None = Field(default=None, alias="dateFormat")
    time_format: str | None = Field(default=None, alias="timeFormat")
    language: GraphLocaleInfo | None = None


class GraphOrganization(GraphBaseModel):
    id: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")


class GraphDirectoryObject(GraphBaseModel):
    odata_type: str | None = Field(default=None, alias="@odata.type")
    id: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")


class GraphOrganizationCollection(GraphBaseModel):
    value: list[GraphOrganization] = Field(default_factory=list["GraphOrganization"])


class GraphDirectoryObjectCollection(GraphBaseModel):
    value: list[GraphDirectoryObject] = Field(default_factory=list["GraphDirectoryObject"])


class GraphErrorDetail(GraphBaseModel):
    code: str | None = None
    message: str | None = None


class GraphErrorResponse(GraphBaseModel):
    error: GraphErrorDetail


class BatchRequestStep(BaseModel):
    id: str
    method: str = "GET"
    url: str
    headers: dict[str, str] | None = None


class BatchRequestBody(BaseModel):
    requests: list[BatchRequestStep]


class BatchResponseItem(GraphBaseModel):
    id: str
    status: int
    headers: dict[str, str] = Field(default_factory=dict[str, str])
    body: Any = None


class BatchResponseBody(GraphBaseModel):
    responses: list[BatchResponseItem] = Field(default_factory=list["BatchResponseItem"])


__all__ = [
    "BatchRequestBody",
    "BatchRequestStep",
    "BatchResponseBody",
    "BatchResponseItem",
    "GraphDirectoryObject",
    "GraphDirectoryObjectCollection",
    "GraphErrorResponse",
    "GraphMailboxSettings",
    "GraphOrganization",
    "GraphOrganizationCollection",
    "GraphUser",
]
