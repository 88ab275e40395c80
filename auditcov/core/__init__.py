"""
Core Infrastructure for auditcov.

Architecture Position
---------------------
    CLI (outermost)
      └── Audit (model, registry, verifier, diagnostics, loader)
            └── **Core** (innermost - you are here)

The Core layer has NO dependencies on other auditcov modules.

Components
----------
**Logging (logging.py)**
    Structured logging with context binding and a Rich console handler.

**Exceptions (exceptions.py)**
    AuditCovError hierarchy with error codes and fix hints.

**Configuration (config.py)**
    VerifierSettings dataclass loaded from auditcov.yaml with ${VAR}
    environment expansion.
"""

from auditcov.core.config import VerifierSettings, load_settings
from auditcov.core.exceptions import (
    AuditCovError,
    ConfigValidationError,
    ModelLoadError,
    ReportWriteError,
    ValidationError,
)
from auditcov.core.logging import LogConfig, configure_logging, get_logger

__all__ = [
    # Config
    "VerifierSettings",
    "load_settings",
    # Exceptions
    "AuditCovError",
    "ConfigValidationError",
    "ModelLoadError",
    "ReportWriteError",
    "ValidationError",
    # Logging
    "LogConfig",
    "configure_logging",
    "get_logger",
]
