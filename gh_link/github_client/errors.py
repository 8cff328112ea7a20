"""Errors raised by the GitHub request layer."""

from typing import Any


class RequestError(Exception):
    """A GitHub request that did not produce a usable response.

    ``status`` is the HTTP status code, or 0 when no response was received
    (connection failure, timeout).
    """

    def __init__(self, status: int, url: str, body: Any = None, message: str = ""):
        self.status = status
        self.url = url
        self.body = body
        super().__init__(
            message or f"GitHub request to {url} failed with status {status}"
        )

    @property
    def is_not_found(self) -> bool:
        return self.status == 404
