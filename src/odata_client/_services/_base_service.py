import asyncio
import random
import time
from datetime import datetime
from email.utils import parsedate_to_datetime
from logging import getLogger
from typing import Any, Dict, Mapping, Optional, Sequence

from httpx import (
    AsyncClient,
    Client,
    ConnectError,
    Headers,
    HTTPStatusError,
    Response,
    TimeoutException,
)
from pydantic import BaseModel
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .._config import Config
from .._request import ClientRequest
from .._utils import get_httpx_client_kwargs, user_agent_value
from .._utils.constants import (
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_RETRY_AFTER,
    HEADER_USER_AGENT,
)
from .._version import __version__
from ..behaviors import ClientBehavior, apply_behaviors
from ..models.exceptions import EnrichedException


def is_retryable_exception(exception: BaseException) -> bool:
    return isinstance(exception, (ConnectError, TimeoutException))


def _masked(headers: Mapping[str, str]) -> Dict[str, str]:
    return {
        name: "***" if name.lower() == HEADER_AUTHORIZATION.lower() else value
        for name, value in headers.items()
    }


def _entry_kwargs(entry: Any, headers: Headers) -> Dict[str, Any]:
    """Turn a request entry into httpx body arguments."""
    if entry is None:
        return {}
    if isinstance(entry, BaseModel):
        headers.setdefault(HEADER_CONTENT_TYPE, CONTENT_TYPE_JSON)
        return {"content": entry.model_dump_json(by_alias=True, exclude_none=True)}
    if isinstance(entry, (bytes, str)):
        return {"content": entry}
    return {"json": entry}


class BaseService:
    """Sends ClientRequest values over HTTP.

    Every request passes through the configured behaviors first, then goes out on
    a shared httpx client. Rate limited responses (429) are retried after the
    delay the service asks for, and connection failures are retried with
    exponential backoff. Unsuccessful final responses raise EnrichedException.
    """

    def __init__(
        self, config: Config, behaviors: Sequence[ClientBehavior] = ()
    ) -> None:
        self._logger = getLogger("odata_client")
        self._config = config
        self._behaviors = list(behaviors)

        client_kwargs: Dict[str, Any] = {
            **get_httpx_client_kwargs(self._config.timeout),
            "headers": Headers(self.default_headers),
        }
        if self._config.base_url:
            client_kwargs["base_url"] = self._config.base_url

        # clients are created on first use so a sync-only service never opens an
        # AsyncClient it cannot close without an event loop
        self._client_kwargs = client_kwargs
        self._client: Optional[Client] = None
        self._client_async: Optional[AsyncClient] = None

        self._logger.debug(f"HEADERS: {_masked(self.default_headers)}")

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> "BaseService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = Client(**self._client_kwargs)
        return self._client

    @property
    def client_async(self) -> AsyncClient:
        if self._client_async is None:
            self._client_async = AsyncClient(**self._client_kwargs)
        return self._client_async

    def close(self) -> None:
        """Close the sync client. Use ``aclose()`` once ``send_async`` was used."""
        if self._client is not None:
            self._client.close()

    async def aclose(self) -> None:
        """Close both the sync and the async client."""
        self.close()
        if self._client_async is not None:
            await self._client_async.aclose()

    @property
    def behaviors(self) -> Sequence[ClientBehavior]:
        return tuple(self._behaviors)

    @property
    def default_headers(self) -> Dict[str, str]:
        return {
            HEADER_ACCEPT: CONTENT_TYPE_JSON,
            HEADER_USER_AGENT: user_agent_value(__version__),
            **self.auth_headers,
        }

    @property
    def auth_headers(self) -> Dict[str, str]:
        if not self._config.secret:
            return {}
        return {HEADER_AUTHORIZATION: f"Bearer {self._config.secret}"}

    def prepare(self, request: ClientRequest) -> ClientRequest:
        """Returns the request as it will be sent, after all behaviors ran."""
        return apply_behaviors(request, self._behaviors)

    def send(self, request: ClientRequest) -> Response:
        request = self.prepare(request)
        return self.request(request.method, request.url, **self._request_kwargs(request))

    async def send_async(self, request: ClientRequest) -> Response:
        request = self.prepare(request)
        return await self.request_async(
            request.method, request.url, **self._request_kwargs(request)
        )

    def _request_kwargs(self, request: ClientRequest) -> Dict[str, Any]:
        headers = Headers(dict(request.headers))
        kwargs = _entry_kwargs(request.entry, headers)
        kwargs["headers"] = headers
        if request.query_params:
            kwargs["params"] = dict(request.query_params)
        return kwargs

    def _parse_retry_after(self, headers: Headers) -> float:
        """Parse Retry-After header (RFC 6585/7231).

        Args:
            headers: HTTP response headers

        Returns:
            float: Seconds to wait before retry (minimum 0.0, default 1.0 if missing/invalid).
        """
        DEFAULT_RETRY_AFTER = 1.0
        retry_after = headers.get(HEADER_RETRY_AFTER)
        if not retry_after:
            return DEFAULT_RETRY_AFTER

        try:
            # Clamp to non-negative to prevent ValueError in time.sleep()
            return max(float(retry_after), 0.0)
        except ValueError:
            pass

        try:
            retry_date = parsedate_to_datetime(retry_after)
            delta = (retry_date - datetime.now(retry_date.tzinfo)).total_seconds()
            return max(delta, 0.0)
        except (ValueError, TypeError):
            return DEFAULT_RETRY_AFTER

    def _rate_limit_delay(self, response: Response, attempt: int) -> Optional[float]:
        if response.status_code != 429 or attempt >= self._config.max_retries:
            return None

        retry_after = self._parse_retry_after(response.headers)
        jitter = random.uniform(0, 0.1 * retry_after)
        sleep_time = retry_after + jitter
        self._logger.warning(
            f"Rate limited (429). Retrying after {sleep_time:.2f}s "
            f"(attempt {attempt + 1}/{self._config.max_retries})"
        )
        return sleep_time

    @retry(
        retry=retry_if_exception(is_retryable_exception),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        stop=stop_after_attempt(4),
        reraise=True,
    )
    def request(self, method: str, url: str, **kwargs: Any) -> Response:
        self._logger.debug(f"Request: {method} {url}")
        self._logger.debug(
            f"HEADERS: {_masked(kwargs.get('headers', self.client.headers))}"
        )

        for attempt in range(self._config.max_retries + 1):
            response = self.client.request(method, url, **kwargs)

            sleep_time = self._rate_limit_delay(response, attempt)
            if sleep_time is None:
                break
            response.close()
            time.sleep(sleep_time)

        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            # include the http response in the error message
            response.close()
            raise EnrichedException(e) from e

        return response

    @retry(
        retry=retry_if_exception(is_retryable_exception),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        stop=stop_after_attempt(4),
        reraise=True,
    )
    async def request_async(self, method: str, url: str, **kwargs: Any) -> Response:
        self._logger.debug(f"Request: {method} {url}")
        self._logger.debug(
            f"HEADERS: {_masked(kwargs.get('headers', self.client_async.headers))}"
        )

        for attempt in range(self._config.max_retries + 1):
            response = await self.client_async.request(method, url, **kwargs)

            sleep_time = self._rate_limit_delay(response, attempt)
            if sleep_time is None:
                break
            await response.aclose()  # Release connection before retry
            await asyncio.sleep(sleep_time)

        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            await response.aclose()
            raise EnrichedException(e) from e

        return response
