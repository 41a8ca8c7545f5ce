from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for sqlbuilder operations.

    Error codes categorize failures without creating numerous exception
    classes. Each category has its own prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors (1xxx)
        VALIDATION_*: Call-site argument errors (2xxx)
    """
    # Configuration errors (1xxx)
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"

    # Validation errors (2xxx)
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"
    INVALID_FIELD_REFERENCE = "VALIDATION_003"
    UNKNOWN_FIELD = "VALIDATION_004"
    INVALID_ENTITY = "VALIDATION_005"


class SqlBuilderError(Exception):
    """Base exception for all sqlbuilder errors.

    A single exception class categorized by error code. Every error raised
    by the package is a configuration mistake or a malformed call; none of
    them are transient, so there is no retry flag.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize sqlbuilder error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from sqlbuilder.logging import get_logger
        logger = get_logger(__name__)
        logger.debug(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "SqlBuilderError":
        """Create exception from error code.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for SqlBuilderError

        Returns:
            SqlBuilderError instance
        """
        return cls(message=message, error_code=error_code, **kwargs)


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> SqlBuilderError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        SqlBuilderError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return SqlBuilderError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> SqlBuilderError:
    """Create a validation error.

    Args:
        message: Error message
        field: Argument that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        SqlBuilderError with VALIDATION_ERROR code
    """
    error_code = kwargs.pop("error_code", ErrorCode.VALIDATION_ERROR)
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return SqlBuilderError(
        message=message,
        error_code=error_code,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def invalid_entity_error(entity: Any, **kwargs) -> SqlBuilderError:
    """Create an error for something that is not an entity class.

    Args:
        entity: The offending value
        **kwargs: Additional error details

    Returns:
        SqlBuilderError with INVALID_ENTITY code
    """
    return validation_error(
        f"Entity must be a class, got {type(entity).__name__}: {entity!r}",
        field="entity",
        value=entity,
        error_code=ErrorCode.INVALID_ENTITY,
        **kwargs
    )


def invalid_field_reference_error(
    entity: type,
    selector: Any,
    reason: str,
    cause: Optional[Exception] = None,
) -> SqlBuilderError:
    """Create an error for a selector that is not a plain field reference.

    Args:
        entity: Entity class the selector was evaluated against
        selector: The offending selector
        reason: Why the selector was rejected
        cause: Exception raised while evaluating the selector, if any

    Returns:
        SqlBuilderError with INVALID_FIELD_REFERENCE code
    """
    return SqlBuilderError(
        message=f"Selector for {entity.__name__} must reference exactly one field: {reason}",
        error_code=ErrorCode.INVALID_FIELD_REFERENCE,
        details={"entity": entity.__name__, "selector": repr(selector)},
        cause=cause,
    )


def unknown_field_error(entity: type, field_name: str) -> SqlBuilderError:
    """Create an error for a field name the entity does not declare.

    Args:
        entity: Entity class
        field_name: Name that could not be found

    Returns:
        SqlBuilderError with UNKNOWN_FIELD code
    """
    return SqlBuilderError(
        message=f"{entity.__name__} has no field named '{field_name}'",
        error_code=ErrorCode.UNKNOWN_FIELD,
        details={"entity": entity.__name__, "field": field_name},
    )
