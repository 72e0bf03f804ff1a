"""Exceptions raised by services and mapped to HTTP responses in ``main``."""

from typing import Any

NOT_FOUND_BODY = {"error": "Not found"}
SERVER_ERROR_BODY = {"error": "Server error"}


class AppError(Exception):
    status_code: int = 500

    @property
    def content(self) -> Any:
        return SERVER_ERROR_BODY


class DatabaseConnectionError(AppError, ConnectionError):
    """The database could not be reached when a handle was requested."""


class InternalError(AppError):
    pass


class NotFoundError(AppError):
    """No document matched. ``content`` is the JSON body sent with the 404."""

    status_code = 404

    def __init__(self, content: Any = NOT_FOUND_BODY):
        super().__init__("Not found")
        self._content = content

    @property
    def content(self) -> Any:
        return self._content


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def content(self) -> Any:
        return {"error": self.message}
