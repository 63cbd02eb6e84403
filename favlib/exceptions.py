"""
Domain Errors

Services raise these instead of HTTPException so they stay usable
outside a request. The exception handlers registered in favlib.main
turn every LibraryError into a JSON body of the form:

    {"message": "<human readable message>"}

with the status code carried by the error class.
"""

from fastapi import status


class LibraryError(Exception):
    """Base class for every error surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Something went wrong."

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(LibraryError):
    """A required input field is missing or empty."""

    default_message = "All fields are required."


class ConflictError(LibraryError):
    """The username or email is already registered."""

    default_message = "User already exists."


class AuthError(LibraryError):
    """Missing, malformed or expired session token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class InvalidCredentialsError(AuthError):
    # Same message whether the username or the password was wrong.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials."


class NotFoundError(LibraryError):
    """A referenced user or book does not exist."""

    default_message = "Not found."


class UploadError(LibraryError):
    """The image host rejected the upload or could not be reached."""

    default_message = "Image upload failed."


class InternalError(LibraryError):
    """Unexpected failure, usually in the database."""

    default_message = "An internal error occurred."
