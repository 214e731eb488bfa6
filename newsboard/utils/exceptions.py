"""
Newsboard Custom Exceptions
===========================

Exception hierarchy for the Newsboard data-access layer with error codes,
error kinds for the controller layer, context information, and client-safe
messages.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for categorizing exceptions."""

    # Configuration errors (C001-C099)
    CONFIG_INVALID = "C001"
    CONFIG_MISSING = "C002"

    # Database errors (D001-D099)
    DATABASE_CONNECTION = "D001"
    DATABASE_SCHEMA = "D002"
    DATABASE_CONSTRAINT = "D003"
    DATABASE_TRANSACTION = "D004"
    DATABASE_QUERY_ERROR = "D005"
    DATABASE_INSERT_ERROR = "D006"
    DATABASE_UPDATE_ERROR = "D007"

    # Validation errors (V001-V099)
    VALIDATION_INVALID_IDENTIFIER = "V001"
    VALIDATION_REQUIRED_FIELD = "V002"
    VALIDATION_INVALID_TYPE = "V003"
    VALIDATION_INVALID_REFERENCE = "V004"

    # Resource errors (R001-R099)
    RESOURCE_NOT_FOUND = "R001"

    # Seed data errors (S001-S099)
    SEED_INVALID_TIMESTAMP = "S001"
    SEED_UNRESOLVED_REFERENCE = "S002"
    SEED_FILE_MISSING = "S003"


class ErrorKind(str, Enum):
    """Error kinds surfaced to the controller layer."""

    INVALID_IDENTIFIER = "invalid_identifier"
    NOT_FOUND = "not_found"
    INVALID_BODY = "invalid_body"
    INVALID_REFERENCE = "invalid_reference"
    INFRASTRUCTURE = "infrastructure"


class NewsboardError(Exception):
    """Base exception for all Newsboard errors."""

    kind: ErrorKind = ErrorKind.INFRASTRUCTURE

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        recoverable: bool = False,
    ):
        """Initialize Newsboard error.

        Args:
            message: Technical error message for logging
            error_code: Categorized error code
            context: Additional context information
            user_message: Client-safe error message
            recoverable: Whether the error is recoverable
        """
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}
        self.user_message = user_message or message
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_kind": self.kind.value,
            "error_code": self.error_code.value if self.error_code else None,
            "error_message": str(self),
            "user_message": self.user_message,
            "context": self.context,
            "recoverable": self.recoverable,
        }

    def __str__(self) -> str:
        """String representation with error code."""
        if self.error_code:
            return f"[{self.error_code.value}] {super().__str__()}"
        return super().__str__()


def _passthrough(kwargs: Dict[str, Any], *consumed: str) -> Dict[str, Any]:
    return {k: v for k, v in kwargs.items() if k not in consumed}


class ConfigurationError(NewsboardError):
    """Configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        if config_key:
            context["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.CONFIG_INVALID),
            context=context,
            user_message=kwargs.get("user_message", f"Configuration error: {message}"),
            **_passthrough(kwargs, "context", "error_code", "user_message"),
        )


class DatabaseError(NewsboardError):
    """Storage-layer failures unrelated to input validity."""

    kind = ErrorKind.INFRASTRUCTURE

    def __init__(self, message: str, query: Optional[str] = None, **kwargs):
        """Initialize database error.

        Args:
            message: Error message
            query: SQL query that caused the error
            **kwargs: Additional arguments for NewsboardError
        """
        context = kwargs.get("context", {})
        if query:
            context["query"] = query

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.DATABASE_CONNECTION),
            context=context,
            user_message=kwargs.get("user_message", "Database operation failed"),
            recoverable=kwargs.get("recoverable", True),
            **_passthrough(kwargs, "context", "error_code", "user_message", "recoverable"),
        )


class InvalidIdentifierError(NewsboardError):
    """An identifier parameter is malformed."""

    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self, field_name: str, value: Any, **kwargs):
        context = kwargs.get("context", {})
        context.update({"field_name": field_name, "value": repr(value)})

        super().__init__(
            message=f"Malformed {field_name}: {value!r}",
            error_code=ErrorCode.VALIDATION_INVALID_IDENTIFIER,
            context=context,
            user_message=f"invalid {field_name}",
            recoverable=False,
        )
        self.field_name = field_name
        self.value = value


class NotFoundError(NewsboardError):
    """A well-formed identifier does not match any stored row."""

    kind = ErrorKind.NOT_FOUND

    ENTITY_KEYS = {
        "article": "article_id",
        "user": "username",
    }

    def __init__(self, entity: str, key: Any, **kwargs):
        context = kwargs.get("context", {})
        context.update({"entity": entity, "key": key})
        key_name = self.ENTITY_KEYS.get(entity, f"{entity} key")

        super().__init__(
            message=f"No {entity} found for {key_name}={key!r}",
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            context=context,
            user_message=f"valid but non existent {key_name}",
            recoverable=False,
        )
        self.entity = entity
        self.key = key


class InvalidBodyError(NewsboardError):
    """A request body is missing a field or has a field of the wrong type."""

    kind = ErrorKind.INVALID_BODY

    def __init__(self, message: str, field_name: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        if field_name:
            context["field_name"] = field_name

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.VALIDATION_INVALID_TYPE),
            context=context,
            user_message="invalid data type in the request body",
            recoverable=False,
        )
        self.field_name = field_name


class InvalidReferenceError(NewsboardError):
    """A body field that must reference an existing entity does not."""

    kind = ErrorKind.INVALID_REFERENCE

    def __init__(self, field_name: str, value: Any, **kwargs):
        context = kwargs.get("context", {})
        context.update({"field_name": field_name, "value": value})

        super().__init__(
            message=f"{field_name} {value!r} does not reference an existing row",
            error_code=ErrorCode.VALIDATION_INVALID_REFERENCE,
            context=context,
            user_message=f"invalid {field_name} in the request body",
            recoverable=False,
        )
        self.field_name = field_name
        self.value = value


class SeedDataError(NewsboardError):
    """Raw seed records that cannot be normalized."""

    def __init__(self, message: str, record: Optional[Dict[str, Any]] = None, **kwargs):
        context = kwargs.get("context", {})
        if record:
            context["record"] = record

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.SEED_INVALID_TIMESTAMP),
            context=context,
            user_message=kwargs.get("user_message", f"Seed data error: {message}"),
            recoverable=False,
        )


# Exception handling utilities


def handle_exception(
    exception: Exception,
    logger,
    operation: str,
    context: Optional[Dict[str, Any]] = None,
) -> NewsboardError:
    """Convert generic exceptions to Newsboard exceptions with proper logging.

    Args:
        exception: Original exception
        logger: Logger instance for error logging
        operation: Operation that was being performed
        context: Additional context information

    Returns:
        Newsboard exception with proper categorization
    """
    context = context or {}
    context["operation"] = operation
    context["original_exception_type"] = type(exception).__name__

    if isinstance(exception, NewsboardError):
        if exception.kind is ErrorKind.INFRASTRUCTURE:
            logger.error(f"Operation '{operation}' failed", extra=exception.to_dict())
        else:
            logger.debug(f"Operation '{operation}' rejected", extra=exception.to_dict())
        return exception

    if isinstance(exception, FileNotFoundError):
        error = ConfigurationError(
            message=f"Required file not found during {operation}: {exception}",
            error_code=ErrorCode.CONFIG_MISSING,
            context=context,
            user_message="Configuration file missing",
        )
    else:
        error = DatabaseError(
            message=f"Unexpected error during {operation}: {exception}",
            error_code=ErrorCode.DATABASE_CONNECTION,
            context=context,
        )

    logger.error(f"Operation '{operation}' failed", extra=error.to_dict())
    return error


def get_user_friendly_message(exception: Exception) -> str:
    """Get a client-safe error message for any exception."""
    if isinstance(exception, NewsboardError):
        return exception.user_message

    return "An unexpected error occurred. Please try again later."
