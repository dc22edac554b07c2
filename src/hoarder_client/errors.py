"""Error taxonomy for the Hoarder client.

The string form of each error is what the command layer hands back to the
front-end, so messages are kept short and stable.
"""


class HoarderError(Exception):
    """Base class for every error raised by hoarder_client."""


class UrlError(HoarderError):
    """A server address could not be parsed as an absolute http(s) URL."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid URL: {detail}")


class NotFoundError(HoarderError):
    """No API key has been validated for the current server."""

    def __init__(self, message: str = "No API key found"):
        super().__init__(message)


class StorageError(HoarderError):
    """The credential store lock could not be acquired."""

    def __init__(self, message: str = "Failed to store API key"):
        super().__init__(message)


class ClientError(HoarderError):
    """Failure of a single request against the bookmark service."""


class TransportError(ClientError):
    """Connection, timeout, TLS or response-decoding failure."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"HTTP request failed: {detail}")


class ApiError(ClientError):
    """The service answered with a non-success status.

    ``body`` is the raw response text, untouched.
    """

    def __init__(self, body: str, status_code: int | None = None):
        self.body = body
        self.status_code = status_code
        super().__init__(f"API error: {body}")
