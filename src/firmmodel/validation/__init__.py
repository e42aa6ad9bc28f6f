"""Parameter validation for the firm model."""

from .parameter_validation import (
    ParameterCheckResult,
    ParameterValidationError,
    check_parameters,
    log_parameter_warnings,
)

__all__ = [
    "ParameterCheckResult",
    "ParameterValidationError",
    "check_parameters",
    "log_parameter_warnings",
]
