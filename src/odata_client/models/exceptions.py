from httpx import HTTPStatusError, ResponseNotRead


class EnrichedException(HTTPStatusError):
    """An ``HTTPStatusError`` whose message includes the response body.

    Raised by the transport when the final response is not successful, so the
    service's own error description ends up in tracebacks and logs.
    """

    def __init__(self, error: HTTPStatusError) -> None:
        self.status_code = error.response.status_code
        self.url = str(error.request.url)
        self.http_method = error.request.method
        try:
            self.response_content = error.response.text
        except ResponseNotRead:
            self.response_content = ""

        message = (
            f"\nRequest URL: {self.url}"
            f"\nHTTP Method: {self.http_method}"
            f"\nStatus Code: {self.status_code}"
            f"\nResponse Content: {self.response_content[:1000]}"
        )
        super().__init__(message, request=error.request, response=error.response)

    def __str__(self) -> str:
        return self.args[0]
