"""
Errors raised by run-analytics.

The analytics engines never raise: sparse or missing data is always a valid
result. Errors only come from the two inputs the library does not control,
workout payloads handed over by the acquisition layer and settings read from
the environment.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Codes carried in serialized error payloads."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    WORKOUT_VALIDATION_ERROR = "WORKOUT_VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class RunAnalyticsError(Exception):
    """
    Base class for run-analytics errors.

    ``code`` defaults to the subclass's ``default_code``. ``details`` holds
    structured context, such as the offending payload field or setting name.
    """

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        """Error payload for logs or whatever surface reports the failure."""
        error: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"error": error}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value}, message={self.message!r})"


class WorkoutValidationError(RunAnalyticsError):
    """A workout payload could not be decoded into a Workout."""

    default_code = ErrorCode.WORKOUT_VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        if field:
            self.details["field"] = field


class ConfigurationError(RunAnalyticsError):
    """A setting holds a value that cannot be resolved (e.g. an unknown timezone)."""

    default_code = ErrorCode.CONFIGURATION_ERROR

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        if setting:
            self.details["setting"] = setting
