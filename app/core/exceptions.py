"""Custom exceptions for SteamHub application.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from SteamHubError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
"""

from typing import Any


class SteamHubError(Exception):
    """Base exception for all SteamHub errors.

    All custom exceptions in the application should inherit from this class.
    Provides a context dictionary for structured error information.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise SteamHubError("Something went wrong", context={"resource_id": "123"})
        ... except SteamHubError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize SteamHubError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "SteamHubError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Database Errors
# ============================================


class DatabaseError(SteamHubError):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize DatabaseError.

        Args:
            message: Error message
            context: Additional context
            operation: Database operation that failed (e.g., "insert", "update")
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class RecordNotFoundError(DatabaseError):
    """Raised when a database record is not found.

    Attributes:
        model: The model class that was queried
        record_id: The ID that was not found
    """

    def __init__(
        self,
        model: str,
        record_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            model: Name of the model class
            record_id: ID that was not found
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with id={record_id} not found", context=ctx)
        self.model = model
        self.record_id = record_id


# ============================================
# Workflow Errors
# ============================================


class WorkflowError(SteamHubError):
    """Base exception for rejected review workflow requests."""


class NonEditableFieldError(WorkflowError):
    """Raised when an edit names fields outside the editable set.

    Attributes:
        fields: Rejected field names
    """

    def __init__(
        self,
        fields: list[str],
        resource_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize NonEditableFieldError.

        Args:
            fields: Rejected field names
            resource_id: Resource being edited
            context: Additional context
        """
        ctx = context or {}
        ctx["fields"] = fields
        if resource_id:
            ctx["resource_id"] = resource_id
        self.fields = fields
        super().__init__(f"Fields cannot be edited: {', '.join(fields)}", context=ctx)


# ============================================
# Service Errors
# ============================================


class ServiceError(SteamHubError):
    """Base exception for service-related errors."""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ServiceError.

        Args:
            message: Error message
            service_name: Name of the service
            context: Additional context
        """
        ctx = context or {}
        if service_name:
            ctx["service_name"] = service_name
        super().__init__(message, context=ctx)


class ExternalAPIError(ServiceError):
    """Raised when an external API call fails.

    Attributes:
        service: Name of the external service
        status_code: HTTP status code (if applicable)
        endpoint: API endpoint that was called
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        response_body: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ExternalAPIError.

        Args:
            service: Name of the external service
            message: Error message
            status_code: HTTP status code (optional)
            endpoint: API endpoint (optional)
            response_body: Response body for debugging (optional)
            context: Additional context
        """
        ctx = context or {}
        ctx["service"] = service
        if status_code is not None:
            ctx["status_code"] = status_code
        if endpoint:
            ctx["endpoint"] = endpoint
        if response_body:
            ctx["response_body"] = response_body[:500]

        self.service = service
        self.status_code = status_code
        self.endpoint = endpoint

        super().__init__(f"{service} API error: {message}", service_name=service, context=ctx)


# ============================================
# Publication Errors
# ============================================


class PublicationError(SteamHubError):
    """Base exception for publication pipeline errors."""

    def __init__(
        self,
        message: str,
        resource_id: str | None = None,
        platform: str = "youtube",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize PublicationError.

        Args:
            message: Error message
            resource_id: Resource being published
            platform: Destination platform
            context: Additional context
        """
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        ctx["platform"] = platform
        self.resource_id = resource_id
        super().__init__(message, context=ctx)


class SourceLinkError(PublicationError):
    """Raised when a source link does not match any known share URL shape.

    Attributes:
        source_link: The link that could not be parsed
    """

    def __init__(
        self,
        source_link: str,
        resource_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SourceLinkError.

        Args:
            source_link: Link that could not be parsed
            resource_id: Resource ID
            context: Additional context
        """
        ctx = context or {}
        ctx["source_link"] = source_link
        self.source_link = source_link
        super().__init__(
            f"Could not extract Google Drive file ID from URL: {source_link!r}",
            resource_id=resource_id,
            context=ctx,
        )


class SourceStreamError(PublicationError):
    """Raised when the source byte stream fails or stalls mid-transfer."""


class YouTubeAPIError(PublicationError):
    """Raised when YouTube API call fails.

    Attributes:
        error_code: YouTube API error code
        error_reason: Error reason from API
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        error_reason: str | None = None,
        resource_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize YouTubeAPIError.

        Args:
            message: Error message
            error_code: YouTube error code
            error_reason: Error reason
            resource_id: Resource ID
            context: Additional context
        """
        ctx = context or {}
        if error_code:
            ctx["error_code"] = error_code
        if error_reason:
            ctx["error_reason"] = error_reason

        self.error_code = error_code
        self.error_reason = error_reason

        super().__init__(message, resource_id=resource_id, platform="youtube", context=ctx)


class QuotaExceededError(PublicationError):
    """Raised when YouTube API quota is exceeded."""

    def __init__(
        self,
        message: str = "YouTube API quota exceeded",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize QuotaExceededError.

        Args:
            message: Error message
            context: Additional context
        """
        super().__init__(message, platform="youtube", context=context)


# ============================================
# Authentication Errors
# ============================================


class AuthError(SteamHubError):
    """Base exception for authentication errors."""

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize AuthError.

        Args:
            message: Error message
            user_id: User ID if available
            context: Additional context
        """
        ctx = context or {}
        if user_id:
            ctx["user_id"] = user_id
        super().__init__(message, context=ctx)


class InvalidCredentialsError(AuthError):
    """Raised when credentials are missing or invalid.

    Attributes:
        credential_type: Type of credential (oauth_client, refresh_token, etc.)
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        credential_type: str | None = None,
        user_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize InvalidCredentialsError.

        Args:
            message: Error message
            credential_type: Type of credential
            user_id: User ID
            context: Additional context
        """
        ctx = context or {}
        if credential_type:
            ctx["credential_type"] = credential_type

        self.credential_type = credential_type

        super().__init__(message, user_id=user_id, context=ctx)


class TokenExpiredError(AuthError):
    """Raised when an OAuth token can no longer be refreshed.

    Attributes:
        token_type: Type of token (access, refresh, etc.)
    """

    def __init__(
        self,
        message: str = "Token has expired",
        token_type: str | None = None,
        user_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize TokenExpiredError.

        Args:
            message: Error message
            token_type: Type of token
            user_id: User ID
            context: Additional context
        """
        ctx = context or {}
        if token_type:
            ctx["token_type"] = token_type

        self.token_type = token_type

        super().__init__(message, user_id=user_id, context=ctx)
