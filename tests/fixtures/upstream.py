"""Fake upstream services (Saleor, AvaTax, Typesense) behind one MockTransport."""

from collections.abc import Callable
from typing import Any

import httpx
import orjson

from tests.fixtures.http import HandlerType

SALEOR_HOST = "shop.example.com"
AVATAX_SANDBOX_HOST = "sandbox-rest.avatax.com"
TYPESENSE_HOST = "search.example.com"

GraphQLResolver = Callable[[dict[str, Any]], dict[str, Any]]


class Upstream:
    """Routes outbound requests to per-host handlers and records them.

    Hosts without a handler answer 599 so that unexpected calls fail loudly.
    """

    def __init__(self) -> None:
        self.handlers: dict[str, HandlerType] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.handlers.get(request.url.host)
        if handler is None:
            return httpx.Response(599, text=f"No fake for {request.url.host}")
        return handler(request)

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.host == host]

    def saleor(self, resolvers: dict[str, GraphQLResolver | dict[str, Any]]) -> None:
        """Answer Saleor GraphQL operations by operation name."""

        def handler(request: httpx.Request) -> httpx.Response:
            body = orjson.loads(request.content)
            operation = body["query"].split()[1].split("(")[0]
            resolver = resolvers.get(operation)
            if resolver is None:
                return httpx.Response(
                    200, json={"data": None, "errors": [{"message": f"No {operation}"}]}
                )
            data = resolver(body["variables"]) if callable(resolver) else resolver
            return httpx.Response(200, json={"data": data})

        self.handlers[SALEOR_HOST] = handler

    def graphql_operations(self) -> list[str]:
        return [
            orjson.loads(request.content)["query"].split()[1].split("(")[0]
            for request in self.requests_to(SALEOR_HOST)
        ]
