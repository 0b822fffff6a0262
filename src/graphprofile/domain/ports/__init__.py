"""Ports consumed by the enrichment domain."""

from __future__ import annotations

from .clock import Clock, SystemClock
from .directory import (
    DirectoryAPIError,
    DirectoryMailboxSettings,
    DirectoryObject,
    DirectoryOrganization,
    DirectoryServiceError,
    DirectoryUser,
    ProfileQuery,
    RemoteProfileBundle,
)

__all__ = [
    "Clock",
    "DirectoryAPIError",
    "DirectoryMailboxSettings",
    "DirectoryObject",
    "DirectoryOrganization",
    "DirectoryServiceError",
    "DirectoryUser",
    "ProfileQuery",
    "RemoteProfileBundle",
    "SystemClock",
]
