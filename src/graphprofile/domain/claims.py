"""Read identity facts and base profile fields from a claims set.

Nothing in here raises for malformed claim values: booleans that do not
parse become unknown (``None``) and timestamps fall back to
``EPOCH_MINIMUM``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from graphprofile.domain.model import EPOCH_MINIMUM

if TYPE_CHECKING:
    from collections.abc import Mapping

    from graphprofile.domain.model import TriState, UserProfile

type ClaimSet = Mapping[str, str]

TENANT_ID_CLAIM: Final = "tid"
OBJECT_ID_CLAIM: Final = "oid"
EMAIL_CLAIM: Final = "email"
EMAIL_VERIFIED_CLAIM: Final = "xms_edov"
PHONE_VERIFIED_CLAIM: Final = "phonenumber_verified"
UPDATED_AT_CLAIM: Final = "updated_at"

_STRING_CLAIMS: Final[dict[str, str]] = {
    "sub": "id",
    "oid": "oid",
    "upn": "upn",
    "name": "name",
    "given_name": "given_name",
    "family_name": "family_name",
    "middle_name": "middle_name",
    "nickname": "nickname",
    "preferred_username": "preferred_username",
    "email": "email",
    "phone_number": "phone_number",
    "birthdate": "birthdate",
    "gender": "gender",
    "website": "website",
    "locale": "locale",
    "zoneinfo": "time_zone",
    "picture": "picture",
}

_BOOL_CLAIMS: Final[dict[str, str]] = {
    "email_verified": "email_verified",
    "phone_number_verified": "phone_number_verified",
}

# Token plumbing rather than profile data; never captured.
_PROTOCOL_CLAIMS: Final = frozenset(
    {
        "acr",
        "aio",
        "amr",
        "at_hash",
        "aud",
        "auth_time",
        "azp",
        "c_hash",
        "exp",
        "iat",
        "idp",
        "iss",
        "nbf",
        "nonce",
        "rh",
        "sid",
        "uti",
        "ver",
        TENANT_ID_CLAIM,
        EMAIL_VERIFIED_CLAIM,
        PHONE_VERIFIED_CLAIM,
        UPDATED_AT_CLAIM,
    }
)


@dataclass(slots=True, frozen=True)
class IdentityFacts:
    tenant_id: str | None
    subject_id: str | None
    email_verified: TriState
    phone_number_verified: TriState
    updated_at: datetime


def read_identity_facts(claims: ClaimSet) -> IdentityFacts:
    return IdentityFacts(
        tenant_id=_claim(claims, TENANT_ID_CLAIM),
        subject_id=_claim(claims, OBJECT_ID_CLAIM),
        email_verified=_email_verified(claims),
        phone_number_verified=parse_bool_claim(claims.get(PHONE_VERIFIED_CLAIM)),
        updated_at=parse_timestamp_claim(claims.get(UPDATED_AT_CLAIM)),
    )


def apply_claims(
    profile: UserProfile,
    claims: ClaimSet,
    *,
    capture_unknown_claims: bool = False,
) -> None:
    """Copy recognised claims onto ``profile``.

    Unrecognised claims land in ``profile.additional_data`` when
    ``capture_unknown_claims`` is set; the bag is rebuilt on every call.
    """

    additional: dict[str, str] = {}
    for name, value in claims.items():
        if name in _STRING_CLAIMS:
            setattr(profile, _STRING_CLAIMS[name], value)
        elif name in _BOOL_CLAIMS:
            setattr(profile, _BOOL_CLAIMS[name], parse_bool_claim(value))
        elif name in _PROTOCOL_CLAIMS:
            continue
        elif capture_unknown_claims:
            additional[name] = value

    if UPDATED_AT_CLAIM in claims:
        profile.updated_at = parse_timestamp_claim(claims[UPDATED_AT_CLAIM])
    profile.additional_data = additional


def parse_bool_claim(value: str | None) -> TriState:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def parse_timestamp_claim(value: str | None) -> datetime:
    """Parse an ISO-8601 timestamp or epoch seconds; never raises."""

    if value is None or not value.strip():
        return EPOCH_MINIMUM
    normalized = value.strip()
    # Eight digits is a compact ISO date (YYYYMMDD), not epoch seconds.
    if normalized.isdigit() and len(normalized) > 8:
        try:
            return datetime.fromtimestamp(int(normalized), tz=UTC)
        except (OverflowError, OSError, ValueError):
            return EPOCH_MINIMUM
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return EPOCH_MINIMUM
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _email_verified(claims: ClaimSet) -> TriState:
    if _claim(claims, EMAIL_CLAIM) is None or _claim(claims, EMAIL_VERIFIED_CLAIM) is None:
        return None
    return parse_bool_claim(claims[EMAIL_VERIFIED_CLAIM])


def _claim(claims: ClaimSet, name: str) -> str | None:
    value = claims.get(name)
    if value is None or not value.strip():
        return None
    return value


__all__ = [
    "ClaimSet",
    "IdentityFacts",
    "apply_claims",
    "parse_bool_claim",
    "parse_timestamp_claim",
    "read_identity_facts",
]
