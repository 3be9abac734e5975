"""Client behaviors.

A behavior receives a ClientRequest just before it is sent and returns the
request that should go out instead. Behaviors are how cross-cutting concerns
such as authentication are layered onto requests without the code that builds
them knowing about it. They never modify the request they are given.
"""

import base64
import logging
from typing import Iterable, Protocol, runtime_checkable

from ._request import ClientRequest
from ._utils.constants import (
    HEADER_AUTHORIZATION,
    HEADER_HTTP_METHOD,
    HTTP_METHOD_DELETE,
    HTTP_METHOD_MERGE,
    HTTP_METHOD_POST,
    HTTP_METHOD_PUT,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class ClientBehavior(Protocol):
    def transform(self, request: ClientRequest) -> ClientRequest: ...


class BasicAuthBehavior:
    """Sends HTTP basic credentials with every request."""

    def __init__(self, user: str, password: str) -> None:
        credentials = f"{user}:{password}".encode("utf-8")
        self._header_value = f"Basic {base64.b64encode(credentials).decode('ascii')}"

    def transform(self, request: ClientRequest) -> ClientRequest:
        return request.with_header(HEADER_AUTHORIZATION, self._header_value)


class BearerTokenBehavior:
    """Sends a bearer access token with every request."""

    def __init__(self, token: str) -> None:
        self._header_value = f"Bearer {token}"

    def transform(self, request: ClientRequest) -> ClientRequest:
        return request.with_header(HEADER_AUTHORIZATION, self._header_value)


class MethodTunnelingBehavior:
    """Tunnels selected HTTP methods through POST.

    Some proxies and firewalls only let GET and POST through. For a request whose
    method is one of ``methods`` the request is rewritten as a POST and the real
    method travels in the ``X-HTTP-Method`` header. Other requests are returned
    as they are.
    """

    DEFAULT_METHODS = (HTTP_METHOD_PUT, HTTP_METHOD_MERGE, HTTP_METHOD_DELETE)

    def __init__(self, *methods: str) -> None:
        self.methods = frozenset(m.upper() for m in (methods or self.DEFAULT_METHODS))

    def transform(self, request: ClientRequest) -> ClientRequest:
        method = request.method.upper()
        if method not in self.methods:
            return request

        logger.debug(f"Tunneling {method} {request.url} through POST")
        return request.with_header(HEADER_HTTP_METHOD, method).with_method(
            HTTP_METHOD_POST
        )


def apply_behaviors(
    request: ClientRequest, behaviors: Iterable[ClientBehavior]
) -> ClientRequest:
    """Runs ``request`` through each behavior in order and returns the result."""
    for behavior in behaviors:
        request = behavior.transform(request)
    return request
