from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError


class SnsPushError(Exception):
    """Base exception for all snspush errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ListingError(SnsPushError):
    """Raised when fetching a page of a paginated collection fails."""

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        code: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message or f"Listing failed during {operation}", original_error)
        self.operation = operation
        self.code = code


class SendError(SnsPushError):
    """Raised when publishing a message to a single target fails."""

    def __init__(
        self,
        target: str,
        message: str | None = None,
        code: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message or f"Failed to send message to {target}", original_error)
        self.target = target
        self.code = code


class ValidationError(SnsPushError):
    """Raised for malformed input, before or by the backend."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.field = field
        self.value = value


class UnsupportedPlatformError(ValidationError):
    """Raised when an Interface is configured for a platform we cannot format messages for."""

    def __init__(self, platform: Any) -> None:
        super().__init__(
            f'Unsupported platform "{platform}" was provided for Push Notifications',
            field="platform",
            value=platform,
        )
        self.platform = platform


class NotFoundError(SnsPushError):
    """Raised when the endpoint, topic, subscription or application does not exist."""

    def __init__(
        self, message: str = "Resource not found", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class EndpointDisabledError(SnsPushError):
    """Raised when publishing to an endpoint that SNS has disabled (e.g. stale token)."""

    def __init__(
        self, message: str = "Endpoint is disabled", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class ThrottlingError(SnsPushError):
    """Raised when SNS throttles requests."""

    def __init__(
        self, message: str = "Request rate exceeded", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class AuthorizationError(SnsPushError):
    """Raised when the credentials are not allowed to perform the operation."""

    def __init__(
        self, message: str = "Not authorized", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


@contextmanager
def handle_sns_errors(
    operation: str, target: str | None = None, listing: bool = False
) -> Generator[None, None, None]:
    """
    Context manager that catches botocore errors
    and raises the appropriate SnsPushError subclass.

    Args:
        operation: Name of the SNS operation, used in error messages
        target: Endpoint or topic ARN for publish calls. Failures become SendError.
        listing: True for page fetches. Failures become ListingError.

    Usage:
        with handle_sns_errors("ListTopics", listing=True):
            client.list_topics(...)
    """
    try:
        yield
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))
        description = f"SNS error during {operation} ({error_code}): {error_message}"

        if listing:
            raise ListingError(
                operation, message=description, code=error_code, original_error=e
            ) from e

        if target is not None:
            raise SendError(target, message=description, code=error_code, original_error=e) from e

        if error_code in ("NotFound", "NotFoundException", "ResourceNotFoundException"):
            raise NotFoundError(message=error_message, original_error=e) from e

        if error_code in ("EndpointDisabled", "EndpointDisabledException"):
            raise EndpointDisabledError(message=error_message, original_error=e) from e

        if error_code in ("Throttling", "ThrottlingException", "ThrottledException"):
            raise ThrottlingError(message=error_message, original_error=e) from e

        if error_code in ("AuthorizationError", "AuthorizationErrorException"):
            raise AuthorizationError(message=error_message, original_error=e) from e

        if error_code in (
            "InvalidParameter",
            "InvalidParameterException",
            "InvalidParameterValue",
            "InvalidParameterValueException",
        ):
            raise ValidationError(message=error_message, original_error=e) from e

        # Unknown error: wrap in generic SnsPushError
        raise SnsPushError(message=description, original_error=e) from e
    except BotoCoreError as e:
        # Connection/credential problems carry no error code
        description = f"SNS error during {operation}: {e}"
        if listing:
            raise ListingError(operation, message=description, original_error=e) from e
        if target is not None:
            raise SendError(target, message=description, original_error=e) from e
        raise SnsPushError(message=description, original_error=e) from e
