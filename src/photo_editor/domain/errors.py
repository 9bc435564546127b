"""Error taxonomy shared by services and the HTTP layer."""


class PhotoEditorError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(PhotoEditorError):
    """Request data is missing or malformed."""

    status_code = 400
    default_message = "Invalid input"


class UnauthenticatedError(PhotoEditorError):
    """No valid principal could be resolved."""

    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(PhotoEditorError):
    """The principal does not own the resource (or it does not exist)."""

    status_code = 403
    default_message = "Not authorized"


class NotFoundError(PhotoEditorError):
    """A resource inside an owned photo does not exist."""

    status_code = 404
    default_message = "Not found"


class StoreFailureError(PhotoEditorError):
    """The record store or asset store failed."""

    status_code = 500
    default_message = "Server error"
