from typing import Optional


class ODataClientError(Exception):
    """Base class for errors raised by the OData client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class APIError(ODataClientError):
    """Raised when the service answers with an unsuccessful status code."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class BaseUrlMissingError(ODataClientError):
    def __init__(
        self,
        message="Service URL missing. Please set the base URL via the ODATA_URL environment variable.",
    ):
        super().__init__(message)
