"""
Custom exception hierarchy for the wrist step counting pipeline.

Every failure carries the stage and invariant that was violated so callers can
tell bad sensor data apart from bad configuration. Nothing is retried or
swallowed inside the pipeline.

Version: 1.0.0
Date: 2026-10-19
"""

from typing import Optional, Dict, Any


# ============================================================================
# Base Exception
# ============================================================================

class StepCountError(Exception):
    """
    Base exception for all step counting errors.

    All custom exceptions inherit from this to allow catching all
    pipeline-specific errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Args:
            message: Human-readable error description
            details: Optional dict with additional context (stage, values, etc.)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def stage(self) -> Optional[str]:
        """Name of the pipeline stage that raised, if known"""
        return self.details.get("stage")

    def __str__(self) -> str:
        """Format error with details if available"""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} [{details_str}]"
        return self.message


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(StepCountError):
    """Base class for structurally invalid configurations"""
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when config file doesn't exist"""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found: {config_path}",
            details={"config_path": config_path}
        )


class ConfigValidationError(ConfigurationError):
    """Raised when a single config value is out of its valid range"""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration value for '{field}': {reason}",
            details={"field": field, "value": value, "reason": reason}
        )


class IncompatibleConfigError(ConfigurationError):
    """Raised when config contains incompatible parameter combinations"""

    def __init__(self, conflicting_params: Dict[str, Any], reason: str):
        super().__init__(
            f"Incompatible configuration: {reason}",
            details={"conflicting_params": conflicting_params, "reason": reason}
        )


# ============================================================================
# Input Errors
# ============================================================================

class InvalidInputError(StepCountError):
    """Raised for malformed sensor data or non-positive numeric parameters"""

    def __init__(self, reason: str, **details):
        super().__init__(
            f"Invalid input: {reason}",
            details={"reason": reason, **details}
        )


class NonMonotonicTimestampsError(InvalidInputError):
    """Raised when timestamps decrease or repeat within one window"""

    def __init__(self, index: int, previous: float, current: float):
        kind = "duplicate" if current == previous else "decreasing"
        super().__init__(
            f"{kind} timestamp at sample {index}",
            index=index,
            previous=previous,
            current=current
        )


class NonFiniteValueError(InvalidInputError):
    """Raised when a timestamp or acceleration component is NaN or infinite"""

    def __init__(self, field: str, count: int):
        super().__init__(
            f"{count} non-finite value(s) in {field}",
            field=field,
            count=count
        )


class InsufficientDataError(StepCountError):
    """Raised when a window has too few samples to interpolate"""

    def __init__(self, reason: str, required: Optional[int] = None, actual: Optional[int] = None):
        details = {"reason": reason}
        if required is not None:
            details["required"] = required
        if actual is not None:
            details["actual"] = actual

        super().__init__(
            f"Insufficient data: {reason}",
            details=details
        )


# ============================================================================
# Pipeline Errors
# ============================================================================

class PipelineError(StepCountError):
    """Base class for pipeline execution errors"""
    pass


class PipelineStageError(PipelineError):
    """Raised when a stage fails with an error outside this hierarchy"""

    def __init__(self, stage_name: str, original_error: Exception):
        super().__init__(
            f"Pipeline stage '{stage_name}' failed: {str(original_error)}",
            details={
                "stage": stage_name,
                "original_error": type(original_error).__name__,
                "error_message": str(original_error)
            }
        )
        self.original_error = original_error


class PipelineStateError(PipelineError):
    """Raised when a stage runs before its inputs exist"""

    def __init__(self, missing_data: list, stage: str):
        super().__init__(
            f"Invalid pipeline state at stage '{stage}': missing {', '.join(missing_data)}",
            details={"stage": stage, "missing_data": missing_data}
        )


# ============================================================================
# Utility Functions
# ============================================================================

def format_error_chain(error: Exception) -> str:
    """
    Format exception chain for logging.

    Args:
        error: Exception to format

    Returns:
        Multi-line string with full error chain
    """
    lines = [f"Error: {type(error).__name__}: {str(error)}"]

    if isinstance(error, StepCountError) and error.details:
        lines.append("Details:")
        for key, value in error.details.items():
            lines.append(f"  {key}: {value}")

    if error.__cause__ is not None:
        lines.append("\nCaused by:")
        lines.append(format_error_chain(error.__cause__))

    return "\n".join(lines)
