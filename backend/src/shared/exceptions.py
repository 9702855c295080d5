class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str = "Resource", id: str = ""):
        super().__init__(f"{resource} not found: {id}" if id else f"{resource} not found")


class OfflineError(AppError):
    """Raised when a remote call is skipped for lack of connectivity.

    The local cache has already been written when a save raises this.
    """

    def __init__(self, message: str = "Offline: saved locally, will sync later"):
        super().__init__(message)


class RemoteTimeoutError(AppError):
    """Raised when a remote call exceeds its deadline."""

    def __init__(self, operation: str = "remote call", seconds: float | None = None):
        suffix = f" after {seconds:g}s" if seconds is not None else ""
        super().__init__(f"Timed out waiting for {operation}{suffix}")


class DualWriteFailureError(AppError):
    """Raised when neither the blob store nor the metadata index accepted a save."""

    def __init__(self, message: str = "Document could not be synced to any remote store"):
        super().__init__(message)


class MaterializationRequiredError(AppError):
    """Raised when the live content of a lite document is needed."""

    def __init__(self, document_id: str = ""):
        super().__init__(
            f"Document {document_id} must be fully loaded first" if document_id
            else "Document must be fully loaded first"
        )


class QuotaExceededError(AppError):
    """Raised when the account tier does not allow an action."""

    def __init__(self, message: str = "Quota exceeded for the current tier"):
        super().__init__(message)


class PolicyViolationError(AppError):
    """Raised when a request is outside what the system accepts."""

    def __init__(self, message: str = "Request not allowed"):
        super().__init__(message)


class AuthenticationError(AppError):
    """Raised when credentials are invalid."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AuthorizationError(AppError):
    """Raised when a user lacks permission for an action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)
