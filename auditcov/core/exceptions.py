"""
Exception Hierarchy for auditcov.

Coverage gaps are never exceptions: the verifier reports them as
diagnostics. The exceptions here cover the infrastructure around it, such
as reading model snapshots, action lists and settings files.

Each exception includes:
- error_code: Unique identifier for documentation lookup (e.g., "AC-LOAD-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Exception Hierarchy
-------------------
    AuditCovError (base)
    ├── ModelLoadError
    ├── ReportWriteError
    └── ValidationError
        └── ConfigValidationError
"""

from typing import Any, List, Optional


class AuditCovError(Exception):
    """
    Base exception for all auditcov errors.

    Example
    -------
        try:
            model = load_resource_model(path)
        except AuditCovError as e:
            logger.error(f"Cannot load model: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    # Default error info - subclasses should override
    error_code: str = "AC-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)

        # Override class defaults if provided
        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)


class ModelLoadError(AuditCovError):
    """
    Raised when a resource model snapshot or action list cannot be read.

    Attributes
    ----------
    path : str
        The file that failed to load
    """

    error_code = "AC-LOAD-001"
    why_it_happened = (
        "The file is missing, is not valid JSON/YAML, or does not match "
        "the expected resource model layout"
    )
    how_to_fix = [
        "Check that the file path is correct",
        "Validate the file with a JSON or YAML linter",
        "Regenerate the snapshot from the running application",
    ]

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.path = path


class ValidationError(AuditCovError):
    """Raised when input data does not meet requirements."""

    error_code = "AC-VAL-000"
    why_it_happened = "Validation failed for input data or configuration"
    how_to_fix = [
        "Check the error message for specific validation failures",
        "Review the expected format or value constraints",
    ]


class ConfigValidationError(ValidationError):
    """
    Raised when settings validation fails.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "AC-CFG-001"
    why_it_happened = (
        "A configuration value is invalid. "
        "The auditcov.yaml file may have incorrect settings"
    )
    how_to_fix = [
        "Check auditcov.yaml for syntax errors",
        "Verify the value type matches what's expected",
        "Remove keys that auditcov does not know about",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class ReportWriteError(AuditCovError):
    """
    Raised when the JSON coverage report cannot be written.

    Attributes
    ----------
    path : str
        The output path that could not be written
    """

    error_code = "AC-OUT-001"
    why_it_happened = (
        "The output path is a directory, is read-only, or its parent "
        "directory cannot be created"
    )
    how_to_fix = [
        "Pass a file path to --output, not a directory",
        "Check write permissions on the output location",
    ]

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.path = path
