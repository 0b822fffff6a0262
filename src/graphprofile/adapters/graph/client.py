"""Batch-capable Microsoft Graph client."""

from __future__ import annotations

import base64
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from graphprofile.adapters.http_resilience import ResilientClient
from graphprofile.domain.ports.directory import DirectoryAPIError, DirectoryServiceError

from .schema import (
    BatchRequestBody,
    BatchRequestStep,
    BatchResponseBody,
    BatchResponseItem,
    GraphErrorResponse,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from graphprofile.config.graph import GraphConfig
    from graphprofile.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

TokenProvider = Callable[[], str]

BATCH_PATH = "$batch"
DEFAULT_PHOTO_CONTENT_TYPE = "image/png"


class GraphServiceError(DirectoryServiceError):
    """Raised when Graph cannot be reached or returns an unusable response."""


class GraphODataError(DirectoryAPIError):
    """Raised when Graph answers with a structured OData error payload."""


class BearerTokenAuth(httpx.Auth):
    """Attach a freshly provided bearer token to every request."""

    def __init__(self, token_provider: TokenProvider) -> None:
        self._token_provider = token_provider

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._token_provider()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


@dataclass(slots=True)
class BatchRequest:
    """Collects sub-requests for one ``$batch`` round trip."""

    steps: list[BatchRequestStep] = field(default_factory=list["BatchRequestStep"])

    def add_step(self, url: str, *, params: Mapping[str, str] | None = None) -> str:
        request_id = str(len(self.steps) + 1)
        self.steps.append(BatchRequestStep(id=request_id, url=_relative_url(url, params)))
        return request_id

    def to_payload(self) -> dict[str, object]:
        return BatchRequestBody(requests=self.steps).model_dump(exclude_none=True)

    def __len__(self) -> int:
        return len(self.steps)


class BatchResponse:
    """Sub-responses of a ``$batch`` call, looked up by request id."""

    def __init__(self, items: Iterable[BatchResponseItem]) -> None:
        self._items: dict[str, BatchResponseItem] = {item.id: item for item in items}

    @property
    def request_ids(self) -> tuple[str, ...]:
        return tuple(self._items)

    def get[M: BaseModel](self, request_id: str, model: type[M]) -> M | None:
        item = self._items.get(request_id)
        if item is None:
            return None
        if item.status >= 400:
            raise _error_from_payload(item.body, status_code=item.status)
        if item.body is None:
            return None
        try:
            return model.model_validate(item.body)
        except ValidationError as exc:
            raise GraphServiceError(
                f"Unexpected Graph payload for batch step {request_id}: {exc}",
                status_code=item.status,
            ) from exc


def _default_client_factory(
    config: ResilienceConfig,
    auth: httpx.Auth,
) -> ResilientClient:
    return ResilientClient(config, auth=auth)


class GraphClient:
    """Low-level HTTP client for the Graph ``/me`` family of resources.

    One instance is meant to be shared across enrichment calls; callers own
    its lifetime (``async with`` or ``aclose``).
    """

    def __init__(
        self,
        *,
        config: GraphConfig,
        token_provider: TokenProvider | None = None,
        client_factory: Callable[[ResilienceConfig, httpx.Auth], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        provider = token_provider or (lambda: config.access_token)
        factory = client_factory or _default_client_factory
        self._client = factory(config.resilience, BearerTokenAuth(provider))

    @property
    def config(self) -> GraphConfig:
        return self._config

    async def __aenter__(self) -> GraphClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def new_batch(self) -> BatchRequest:
        return BatchRequest()

    async def post_batch(self, batch: BatchRequest) -> BatchResponse:
        log.debug("Posting Graph batch with %d steps", len(batch))
        payload = await self._request_json("POST", BATCH_PATH, json=batch.to_payload())
        try:
            body = BatchResponseBody.model_validate(payload)
        except ValidationError as exc:
            raise GraphServiceError(f"Unexpected Graph batch payload: {exc}") from exc
        return BatchResponse(body.responses)

    async def get[M: BaseModel](
        self,
        path: str,
        model: type[M],
        *,
        params: Mapping[str, str] | None = None,
    ) -> M:
        payload = await self._request_json("GET", path, params=params)
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise GraphServiceError(f"Unexpected Graph payload for {path}: {exc}") from exc

    async def get_photo_data_uri(self, size: str) -> str | None:
        """Return the signed-in user's photo as a data URI, or ``None`` if unset."""

        response = await self._send("GET", f"me/photos/{size}/$value")
        if response.status_code == httpx.codes.NOT_FOUND:
            log.debug("No %s profile photo for the signed-in user", size)
            return None
        _raise_for_status(response)
        content_type = response.headers.get("Content-Type", "").split(";", 1)[0].strip()
        if not content_type.startswith("image/"):
            content_type = DEFAULT_PHOTO_CONTENT_TYPE
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object = None,
    ) -> object:
        response = await self._send(method, path, params=params, json=json)
        _raise_for_status(response)
        try:
            return response.json()
        except ValueError as exc:
            raise GraphServiceError(
                f"Graph returned a non-JSON response for {path}",
                status_code=response.status_code,
            ) from exc

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            if json is None:
                return await self._client.request(method, url, params=params)
            return await self._client.request(method, url, params=params, json=json)
        except httpx.HTTPError as exc:
            raise GraphServiceError(f"Graph request {method} {path} failed: {exc}") from exc


def _relative_url(url: str, params: Mapping[str, str] | None) -> str:
    path = "/" + url.lstrip("/")
    if not params:
        return path
    # Graph expects literal "$" and "," in OData query options.
    query = "&".join(f"{key}={value}" for key, value in params.items())
    return f"{path}?{query}"


def _raise_for_status(response: httpx.Response) -> None:
    if response.status_code < 400:
        return
    try:
        payload: object = response.json()
    except ValueError:
        payload = None
    raise _error_from_payload(payload, status_code=response.status_code)


def _error_from_payload(payload: object, *, status_code: int) -> DirectoryServiceError:
    if isinstance(payload, dict) and "error" in payload:
        try:
            error = GraphErrorResponse.model_validate(payload).error
        except ValidationError:
            pass
        else:
            message = error.message or f"Graph request failed with status {status_code}"
            return GraphODataError(message, code=error.code, status_code=status_code)
    return GraphServiceError(
        f"Graph request failed with status {status_code}",
        status_code=status_code,
    )


__all__ = [
    "BatchRequest",
    "BatchResponse",
    "BearerTokenAuth",
    "GraphClient",
    "GraphODataError",
    "GraphServiceError",
    "TokenProvider",
]
