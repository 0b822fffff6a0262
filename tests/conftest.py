from __future__ import annotations

from datetime import UTC, datetime

import pytest

from graphprofile.domain.culture import CultureDefaults
from graphprofile.domain.ports.directory import (
    DirectoryMailboxSettings,
    DirectoryObject,
    DirectoryOrganization,
    DirectoryUser,
    RemoteProfileBundle,
)
from tests.support.clock import FixedClock

TENANT_ID = "11111111-2222-3333-4444-555555555555"
OBJECT_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def culture() -> CultureDefaults:
    return CultureDefaults(
        name="en-US",
        short_date_pattern="M/d/yyyy",
        short_time_pattern="h:mm tt",
    )


@pytest.fixture
def claims() -> dict[str, str]:
    return {
        "sub": "subject-123",
        "tid": TENANT_ID,
        "oid": OBJECT_ID,
        "name": "Ada Lovelace",
        "given_name": "Ada",
        "family_name": "Lovelace",
        "preferred_username": "ada@contoso.com",
        "email": "ada@contoso.com",
        "xms_edov": "true",
        "phonenumber_verified": "False",
        "updated_at": "2024-05-01T12:00:00Z",
        "iss": "https://login.microsoftonline.com/tenant/v2.0",
        "aud": "client-id",
        "ctry": "GB",
    }


@pytest.fixture
def remote_bundle() -> RemoteProfileBundle:
    return RemoteProfileBundle(
        user=DirectoryUser(
            user_principal_name="ada@contoso.com",
            display_name="Ada Lovelace",
            given_name="Augusta Ada",
            surname="King",
            mail_nickname="ada",
            birthday=datetime(1815, 12, 10, tzinfo=UTC),
            mail="ada.king@contoso.com",
            mobile_phone="+44 20 7946 0000",
            business_phones=["+44 20 7946 0001"],
            preferred_language="en-GB",
            job_title="Analyst",
            company_name="Contoso",
            office_location="London",
            department="Engines",
            employee_id="E-1815",
            employee_type="Employee",
            street_address="12 St James's Square",
            city="London",
            postal_code="SW1Y 4JH",
            country="United Kingdom",
            created_date_time=datetime(2020, 1, 2, 3, 4, 5, tzinfo=UTC),
            extension_attributes={"extension_abc_costCenter": "42"},
        ),
        mailbox_settings=DirectoryMailboxSettings(
            time_zone="GMT Standard Time",
            date_format="dd/MM/yyyy",
            time_format="HH:mm",
            locale="en-GB",
        ),
        organizations=[DirectoryOrganization(id="org-1", display_name="Contoso Ltd")],
        memberships=[
            DirectoryObject(
                object_type="#microsoft.graph.group",
                id="g1",
                display_name="Engineers",
            ),
            DirectoryObject(
                object_type="#microsoft.graph.directoryRole",
                id="r1",
                display_name="Global Reader",
            ),
        ],
        photo="data:image/png;base64,AAAA",
    )
