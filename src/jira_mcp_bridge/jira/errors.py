"""Jira bridge exception hierarchy."""

from __future__ import annotations

UNKNOWN_ERROR = "Unknown error"


class JiraError(Exception):
    """Jira answered with a non-success status.

    ``status`` is the HTTP status code and ``err`` the first message Jira put in
    ``errorMessages`` (or ``"Unknown error"``).
    """

    def __init__(self, status: int, err: str = UNKNOWN_ERROR):
        self.status = status
        self.err = err
        super().__init__(f"Jira API error ({status}): {err}")

    def to_dict(self) -> dict[str, object]:
        return {"status": self.status, "err": self.err}


class JiraValidationError(JiraError):
    """Raised when the request is rejected as invalid (400), e.g. bad JQL."""

    def __init__(self, err: str = UNKNOWN_ERROR):
        super().__init__(400, err)


class JiraAuthenticationError(JiraError):
    """Raised when authentication fails (401)."""

    def __init__(self, err: str = UNKNOWN_ERROR):
        super().__init__(401, err)


class JiraPermissionError(JiraError):
    """Raised when the user lacks permissions (403)."""

    def __init__(self, err: str = UNKNOWN_ERROR):
        super().__init__(403, err)


class JiraNotFoundError(JiraError):
    """Raised when a resource is not found (404)."""

    def __init__(self, err: str = UNKNOWN_ERROR):
        super().__init__(404, err)


class JiraTransportError(Exception):
    """No usable response: connection failure, timeout, or an unparseable body.

    Carries no ``status`` attribute, unlike :class:`JiraError`.
    """

