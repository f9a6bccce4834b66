"""
Custom Exception Classes for Topic Custom Fields

Configuration errors are startup-fatal. A field that is simply unset on a
topic is never an exception: it is reported as an absent (None) value.
"""

from typing import Any

from fastapi import status


class CustomFieldError(Exception):
    """Base exception class for all custom-field extension errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions (fatal at startup)
# ============================================================================


class FieldConfigurationError(CustomFieldError):
    """Raised when a field definition or plugin setting is invalid"""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field is not None:
            error_details["field"] = field
        super().__init__(message=message, details=error_details)


class UnknownFieldTypeError(FieldConfigurationError):
    """Raised when a field type is not one of string, integer, boolean or json"""

    def __init__(self, value_type: Any, field: str | None = None):
        super().__init__(
            message=f"Unknown custom field type '{value_type}'",
            field=field,
            details={"value_type": str(value_type)},
        )


class FieldConflictError(FieldConfigurationError):
    """Raised when a field is re-registered with a different type"""

    def __init__(self, field: str, existing_type: str, requested_type: str):
        super().__init__(
            message=f"Custom field '{field}' is already registered as '{existing_type}', not '{requested_type}'",
            field=field,
            details={"existing_type": existing_type, "requested_type": requested_type},
        )


class RegistryFrozenError(FieldConfigurationError):
    """Raised when a field is registered after startup has completed"""

    def __init__(self, field: str):
        super().__init__(message=f"Cannot register custom field '{field}' after startup", field=field)


# ============================================================================
# Lookup Exceptions
# ============================================================================


class FieldNotRegisteredError(CustomFieldError):
    """Raised when an accessor is requested for a field nobody registered"""

    def __init__(self, field: str):
        super().__init__(
            message=f"Custom field '{field}' is not registered",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"field": field},
        )


class UnknownHookError(CustomFieldError):
    """Raised when a listener subscribes to, or a caller fires, an undeclared hook"""

    def __init__(self, hook_name: str):
        super().__init__(message=f"Unknown hook '{hook_name}'", details={"hook": hook_name})
