# benigna-api/benigna/core/errors.py
from fastapi import status


class BenignaError(Exception):
    """Base class for errors surfaced to the user as-is."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BenignaError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(BenignaError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(BenignaError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(BenignaError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(BenignaError):
    status_code = status.HTTP_409_CONFLICT


class InvalidTransitionError(BenignaError):
    status_code = status.HTTP_409_CONFLICT


class GeocodingError(BenignaError):
    status_code = status.HTTP_502_BAD_GATEWAY
