"""Domain errors raised by the stores and mapped to HTTP responses in main."""


class AppError(Exception):
    """Base class for errors that carry an HTTP status."""

    status_code = 500


class NotFoundError(AppError):
    """A referenced project, file, deployment or user does not exist."""

    status_code = 404


class ConflictError(AppError):
    """A uniqueness rule was violated (slug, file path, email)."""

    status_code = 409


class ValidationError(AppError):
    """Input is well-typed but breaks a domain rule."""

    status_code = 400


class UnauthorizedError(AppError):
    """Credentials were rejected."""

    status_code = 401
