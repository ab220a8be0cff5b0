from typing import Any, Optional


class UpstreamError(Exception):
    """
    Failure talking to the LinkedIn API.

    Transport errors, timeouts and non-success responses all map to this
    error. ``details`` holds the provider's error body when one was returned,
    otherwise the transport error message.
    """

    def __init__(self, message: str, details: Any = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.status = status

    def __str__(self) -> str:
        if self.details is None or self.details == "":
            return self.message
        return f"{self.message}: {self.details}"
