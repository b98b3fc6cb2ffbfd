"""GrandCentral error hierarchy.

Every failure of a GrandCentral request surfaces as one of these.
"""


class GrandCentralError(Exception):
    """Base error for all GrandCentral connector failures."""

    code = "GRANDCENTRAL_ERROR"

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class GrandCentralAuthError(GrandCentralError):
    """No API key is available for the request."""

    code = "AUTH_ERROR"


class GrandCentralApiError(GrandCentralError):
    """The API answered with a non-2xx status."""

    code = "API_ERROR"

    def __init__(self, message: str, status: int = None, body: str = None):
        super().__init__(message, {"status": status, "body": body})
        self.status = status
        self.body = body


class GrandCentralConnectionError(GrandCentralError):
    """The request never got an answer (network error or timeout)."""

    code = "CONNECTION_ERROR"
