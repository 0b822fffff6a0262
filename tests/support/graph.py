"""In-process fake of the Graph endpoints used during enrichment."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from graphprofile.adapters.graph import GraphClient
from graphprofile.adapters.http_resilience import ResilientClient
from graphprofile.config.graph import GraphConfig

if TYPE_CHECKING:
    from collections.abc import Callable

    from graphprofile.config.http_resilience import ResilienceConfig

GRAPH_PREFIX = "/v1.0"


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig, httpx.Auth], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig, auth: httpx.Auth) -> ResilientClient:
        client = ResilientClient(resilience, auth=auth)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(async_handler),
            auth=auth,
        )
        return client

    return factory


@dataclass
class FakeGraph:
    """Answers ``$batch``, ``/me`` and photo requests from canned payloads.

    Batch sub-responses are returned in reverse order so callers must
    correlate them by id.
    """

    resources: dict[str, tuple[int, object]] = field(default_factory=dict)
    photo: tuple[int, bytes, str] = (404, b"", "application/json")
    fail_with: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)
    batch_requests: list[list[dict[str, str]]] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        path = request.url.path.removeprefix(GRAPH_PREFIX)
        if path == "/$batch":
            return self._batch(request)
        if path.startswith("/me/photos/"):
            status, content, content_type = self.photo
            return httpx.Response(status, content=content, headers={"Content-Type": content_type})
        status, body = self.resources.get(path, (404, graph_error("Request_ResourceNotFound")))
        return httpx.Response(status, json=body)

    @property
    def paths(self) -> list[str]:
        return [request.url.path.removeprefix(GRAPH_PREFIX) for request in self.requests]

    def _batch(self, request: httpx.Request) -> httpx.Response:
        steps: list[dict[str, str]] = json.loads(request.content)["requests"]
        self.batch_requests.append(steps)
        responses: list[dict[str, object]] = []
        for step in reversed(steps):
            path = step["url"].split("?", 1)[0]
            status, body = self.resources.get(path, (404, graph_error("Request_ResourceNotFound")))
            responses.append({"id": step["id"], "status": status, "headers": {}, "body": body})
        return httpx.Response(200, json={"responses": responses})


def make_graph_client(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    config: GraphConfig | None = None,
) -> GraphClient:
    return GraphClient(
        config=config or GraphConfig(access_token="test-token"),
        client_factory=make_client_factory(handler),
    )


def graph_error(code: str, message: str = "Resource not found.") -> dict[str, object]:
    return {"error": {"code": code, "message": message}}
