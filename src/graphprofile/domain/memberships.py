"""Split raw directory memberships into groups and administrative roles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from graphprofile.domain.model import Membership, MembershipKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from graphprofile.domain.ports.directory import DirectoryObject

GROUP_OBJECT_TYPE: Final = "#microsoft.graph.group"
DIRECTORY_ROLE_OBJECT_TYPE: Final = "#microsoft.graph.directoryRole"

_KIND_BY_OBJECT_TYPE: Final[dict[str, MembershipKind]] = {
    GROUP_OBJECT_TYPE: MembershipKind.GROUP,
    DIRECTORY_ROLE_OBJECT_TYPE: MembershipKind.ADMINISTRATIVE_ROLE,
}


def classify_memberships(records: Iterable[DirectoryObject]) -> list[Membership]:
    """Keep group and role records that carry an id, in input order."""

    memberships: list[Membership] = []
    for record in records:
        kind = _KIND_BY_OBJECT_TYPE.get(record.object_type or "")
        if kind is None or not record.id:
            continue
        memberships.append(Membership(record.id, record.display_name or "", kind))
    return memberships


def partition_memberships(
    memberships: Iterable[Membership],
) -> tuple[list[Membership], list[Membership]]:
    """Return ``(groups, roles)``."""

    groups: list[Membership] = []
    roles: list[Membership] = []
    for membership in memberships:
        if membership.kind is MembershipKind.GROUP:
            groups.append(membership)
        else:
            roles.append(membership)
    return groups, roles


__all__ = [
    "DIRECTORY_ROLE_OBJECT_TYPE",
    "GROUP_OBJECT_TYPE",
    "classify_memberships",
    "partition_memberships",
]
