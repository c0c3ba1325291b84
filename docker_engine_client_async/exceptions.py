#!/usr/bin/env python

"""Errors raised while talking to the Docker Engine."""

from http import HTTPStatus


class DockerEngineClientError(Exception):
    """Base class of all errors raised by this package."""


class TransportError(DockerEngineClientError):
    """The connection to the docker daemon failed; fatal to the in-flight call."""


class ApiError(DockerEngineClientError):
    """
    The docker daemon rejected a request.
    """

    def __init__(self, status: int, message: str = None):
        """
        Args:
            status: The HTTP status code returned by the daemon.
            message: The error message returned by the daemon, if any.
        """
        if not message:
            try:
                message = HTTPStatus(status).phrase
            except ValueError:
                message = "Unknown error"
        super().__init__(f"{status}: {message}")
        self.message = message
        self.status = status

    @property
    def is_not_found(self) -> bool:
        """True if the daemon does not know the addressed resource."""
        return self.status == HTTPStatus.NOT_FOUND

    @staticmethod
    def from_status(status: int, message: str = None) -> "ApiError":
        """
        Initializes the most specific error for a given status code.

        Args:
            status: The HTTP status code returned by the daemon.
            message: The error message returned by the daemon, if any.

        Returns:
            The newly initialized error.
        """
        error_type = ApiError
        if status == HTTPStatus.BAD_REQUEST:
            error_type = BadRequestError
        elif status == HTTPStatus.FORBIDDEN:
            error_type = ForbiddenError
        elif status == HTTPStatus.NOT_FOUND:
            error_type = NotFoundError
        elif status == HTTPStatus.CONFLICT:
            error_type = ConflictError
        elif status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            error_type = ServerError
        return error_type(status, message)


class BadRequestError(ApiError):
    """Bad parameter (400)."""


class ForbiddenError(ApiError):
    """Operation not permitted in the current state (403)."""


class NotFoundError(ApiError):
    """No such resource (404)."""


class ConflictError(ApiError):
    """Resource conflict, e.g. a name already in use (409)."""


class ServerError(ApiError):
    """Daemon side failure (5xx)."""


class SerializationError(DockerEngineClientError):
    """Request options could not be encoded."""


class DecodeError(DockerEngineClientError):
    """A response body, or an attach frame, did not have the expected shape."""


class ProtocolViolation(DockerEngineClientError):
    """The attach stream produced a frame that the daemon never sends."""
