"""Exceptions raised at the boundary with the remote data and DCF services.

Callers inside the pipeline catch ``DashboardError`` and convert it into
view state (a failed load slot, a form notice); nothing here is allowed to
reach the rendering layer.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for every failure surfaced by the service client."""


class NetworkFailure(DashboardError):
    """The request could not be sent or came back with a non-2xx status."""

    def __init__(self, url: str, status_code: int | None, message: str):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Request failed [{status_code}] {url}: {message}")


class ParseFailure(DashboardError):
    """The response body is not JSON or not the expected top-level shape."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Unexpected response from {url}: {message}")


class ServiceRejection(DashboardError):
    """The DCF service refused the submission with a user-facing message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
