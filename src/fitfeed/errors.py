"""Exceptions raised by the fitfeed service layer."""


class FitfeedError(Exception):
    """Base class for errors surfaced to users."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FitfeedError):
    """Input failed validation."""


class AuthError(FitfeedError):
    """Missing or invalid credentials."""

    status_code = 401


class PermissionDeniedError(FitfeedError):
    """The user may not act on this resource."""

    status_code = 403


class NotFoundError(FitfeedError):
    """The requested row or file does not exist (or is not visible)."""

    status_code = 404


class ConflictError(FitfeedError):
    """A unique row or stored file already exists."""

    status_code = 409
