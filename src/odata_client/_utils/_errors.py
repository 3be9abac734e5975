import json
from contextlib import contextmanager
from typing import Any, Generator, Optional

import httpx

from ..models.errors import APIError, ODataClientError


def _extract_message(error_body: Any) -> Optional[str]:
    if not isinstance(error_body, dict):
        return None

    message = (
        error_body.get("message")
        or error_body.get("error")
        or error_body.get("detail")
        or error_body.get("odata.error")
    )
    # OData bodies nest the text: {"error": {"message": {"value": "..."}}}
    while isinstance(message, dict):
        message = message.get("message") or message.get("value")
    return message if isinstance(message, str) else None


@contextmanager
def handle_errors() -> Generator[None, None, None]:
    """Context manager for handling HTTP errors in API calls.

    Wraps a call to the service and converts httpx errors into
    ODataClientError subclasses. Any other exception propagates unchanged.

    Yields:
        None: The context manager yields control to the wrapped code.

    Raises:
        APIError: For HTTP errors with status codes and error messages.
        ODataClientError: For transport level failures (connection, timeout).
    """
    try:
        yield
    except httpx.HTTPStatusError as e:
        try:
            error_body = e.response.json()
        except ValueError:
            error_body = e.response.text

        message = _extract_message(error_body)
        if isinstance(error_body, dict):
            error_body = json.dumps(error_body)

        raise APIError(message or str(e), e.response.status_code, error_body) from e
    except httpx.HTTPError as e:
        raise ODataClientError(str(e)) from e
