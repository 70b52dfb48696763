from __future__ import annotations


class ServiceError(Exception):
    """Base class for errors raised by the resource accessors."""

    status_code = 500

    def __init__(self, message: str | list[str]) -> None:
        super().__init__(message if isinstance(message, str) else "; ".join(message))
        self.messages = [message] if isinstance(message, str) else list(message)


class BadRequestError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404
