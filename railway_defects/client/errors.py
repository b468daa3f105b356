from typing import Optional


class GatewayError(Exception):
    """Base class for every failure talking to the defect API."""


class NetworkUnreachable(GatewayError):
    """No response: connection refused, DNS failure or timeout."""


class ServerError(GatewayError):
    def __init__(self, status_code: int, reason: str = "", detail: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        message = f"Server error: {status_code}"
        if reason:
            message += f" - {reason}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class MalformedResponse(GatewayError):
    """The response body was not JSON or did not have the expected shape."""
