from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Generic, Mapping, Optional, TypeVar

from ._utils.constants import (
    HTTP_METHOD_DELETE,
    HTTP_METHOD_GET,
    HTTP_METHOD_MERGE,
    HTTP_METHOD_POST,
    HTTP_METHOD_PUT,
)

EntryT = TypeVar("EntryT")


@dataclass(frozen=True)
class ClientRequest(Generic[EntryT]):
    """Immutable description of an OData HTTP request waiting to be sent.

    Holds the HTTP method, target url, headers, query parameters and an optional
    payload (the ``entry``). Instances are never modified: the ``with_*`` methods
    return a new request with one field replaced and every other field carried
    over. Each request keeps its own read-only copy of the header and query
    parameter mappings, so a derived request never affects the one it came from.

    Nothing here is validated. Methods are free-form strings (``MERGE`` and other
    custom verbs are allowed), urls are opaque, and the entry is passed through
    by reference without being inspected or copied.

    Examples:
        ```python
        request = (
            ClientRequest.get("http://svc/Entities")
            .with_query_param("$top", "5")
            .with_header("Accept", "application/json")
        )
        ```
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)
    entry: Optional[EntryT] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "headers", MappingProxyType(dict(self.headers or {}))
        )
        object.__setattr__(
            self, "query_params", MappingProxyType(dict(self.query_params or {}))
        )

    def __reduce__(self):
        # mappingproxy cannot be pickled or deep-copied; rebuild from plain dicts
        return (
            self.__class__,
            (
                self.method,
                self.url,
                dict(self.headers),
                dict(self.query_params),
                self.entry,
            ),
        )

    @classmethod
    def get(cls, url: str) -> "ClientRequest[EntryT]":
        """Creates a new GET request.

        Args:
            url (str): The request url.

        Returns:
            ClientRequest: A request with no headers, query parameters or entry.
        """
        return cls(HTTP_METHOD_GET, url)

    @classmethod
    def post(cls, url: str, entry: Optional[EntryT]) -> "ClientRequest[EntryT]":
        """Creates a new POST request carrying ``entry`` as its payload.

        Args:
            url (str): The request url.
            entry: The payload. ``None`` means the request has no body.

        Returns:
            ClientRequest: A request with no headers or query parameters.
        """
        return cls(HTTP_METHOD_POST, url, entry=entry)

    @classmethod
    def put(cls, url: str, entry: Optional[EntryT]) -> "ClientRequest[EntryT]":
        """Creates a new PUT request carrying ``entry`` as its payload."""
        return cls(HTTP_METHOD_PUT, url, entry=entry)

    @classmethod
    def merge(cls, url: str, entry: Optional[EntryT]) -> "ClientRequest[EntryT]":
        """Creates a new MERGE request carrying ``entry`` as its payload."""
        return cls(HTTP_METHOD_MERGE, url, entry=entry)

    @classmethod
    def delete(cls, url: str) -> "ClientRequest[EntryT]":
        """Creates a new DELETE request."""
        return cls(HTTP_METHOD_DELETE, url)

    def with_header(self, name: str, value: str) -> "ClientRequest[EntryT]":
        """Returns a copy of this request with the header ``name`` set to ``value``.

        An existing header with the same name is overwritten.
        """
        return replace(self, headers={**self.headers, name: value})

    def with_query_param(self, name: str, value: str) -> "ClientRequest[EntryT]":
        """Returns a copy of this request with the query parameter ``name`` set to ``value``.

        An existing parameter with the same name is overwritten.
        """
        return replace(self, query_params={**self.query_params, name: value})

    def with_url(self, url: str) -> "ClientRequest[EntryT]":
        return replace(self, url=url)

    def with_method(self, method: str) -> "ClientRequest[EntryT]":
        return replace(self, method=method)

    def with_entry(self, entry: Optional[EntryT]) -> "ClientRequest[EntryT]":
        return replace(self, entry=entry)
