"""Microsoft Graph directory adapter."""

from __future__ import annotations

from .client import (
    BatchRequest,
    BatchResponse,
    BearerTokenAuth,
    GraphClient,
    GraphODataError,
    GraphServiceError,
)
from .queries import PROFILE_QUERIES, BoundProfileQuery, GraphProfileQuery, build_profile_query

__all__ = [
    "PROFILE_QUERIES",
    "BatchRequest",
    "BatchResponse",
    "BearerTokenAuth",
    "BoundProfileQuery",
    "GraphClient",
    "GraphODataError",
    "GraphProfileQuery",
    "GraphServiceError",
    "build_profile_query",
]
