"""Common exceptions for sqlbuilder.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions are SqlBuilderError
    instances and carry structured error information.
"""

from sqlbuilder.common.exceptions import (
    SqlBuilderError,
    ErrorCode,
    # Helper functions
    configuration_error,
    validation_error,
    invalid_entity_error,
    invalid_field_reference_error,
    unknown_field_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SqlBuilderError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "validation_error",
    "invalid_entity_error",
    "invalid_field_reference_error",
    "unknown_field_error",
]
