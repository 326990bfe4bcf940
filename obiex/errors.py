"""
Errors raised by the Obiex client.
"""
from typing import Any, Optional


class ObiexServerError(Exception):
    """
    Non-success response from the Obiex API.

    Attributes:
        message: Human-readable message from the error body
        data: Arbitrary payload from the error body (may be None)
        status_code: Numeric status code
    """

    def __init__(self, message: str, data: Any = None, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.data = data
        self.status_code = status_code

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"

    @classmethod
    def from_response_body(cls, body: Any, http_status: int, text: Optional[str] = None) -> "ObiexServerError":
        """
        Build an error from a parsed response body.

        Args:
            body: Parsed JSON body, or None if it was not JSON
            http_status: HTTP status of the response
            text: Raw body text, used as the message when body has none

        Returns:
            ObiexServerError instance
        """
        if isinstance(body, dict):
            message = body.get("message") or text or f"HTTP {http_status}"
            status_code = body.get("statusCode", http_status)
            try:
                status_code = int(status_code)
            except (ValueError, TypeError):
                status_code = http_status
            return cls(str(message), data=body.get("data"), status_code=status_code)

        return cls(text or f"HTTP {http_status}", data=body, status_code=http_status)
