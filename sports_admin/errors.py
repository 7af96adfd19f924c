"""Exceptions raised by the admin client."""

from __future__ import annotations


class ApiError(Exception):
    """Non-2xx response from the backend API."""

    def __init__(self, status_code: int, method: str, url: str, body: str | None = None) -> None:
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        super().__init__(f"{method} {url} failed with status {status_code}")


class ResourceNotFoundError(ApiError):
    """404 from the backend API."""


class CascadeStateError(RuntimeError):
    """A cascade run was asked to make a transition it does not allow."""
