"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class APIError(ApplicationError):
    """Exception raised for errors during external API calls."""

    def __init__(
        self,
        message: str = "API call failed",
        original_exception: Exception | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.status_code = status_code
        self.message = f"API Error: {message}"
        if status_code:
            self.message += f" (Status Code: {status_code})"


class ValidationError(ApplicationError):
    """Exception raised when required input is missing. Never reaches the store."""

    def __init__(self, message: str = "Invalid input", field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.message = f"Validation Error: {message}"


class NotReadyError(ApplicationError):
    """Exception raised when the session bootstrap has not produced a user namespace yet."""

    def __init__(self, message: str = "Session is not ready") -> None:
        super().__init__(message)
        self.message = f"Not Ready: {message}"


class PersistenceError(ApplicationError):
    """Exception raised for errors during document store operations."""

    def __init__(self, message: str = "Store operation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Persistence Error: {message}"


class SubscriptionError(ApplicationError):
    """Exception delivered through a live subscription. The subscription is terminated."""

    def __init__(self, message: str = "Live subscription failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Subscription Error: {message}"
