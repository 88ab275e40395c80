"""Coverage Diagnostics.

Diagnostics are soft compliance findings. They never abort model assembly;
the host decides whether to log them, print them or fail a CI job.

Two verbosity tiers are rendered for every diagnostic:
- message: terse warning line naming the endpoint
- detail: debug line naming the declaring handler
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from auditcov.audit.model import HttpVerb, ResourceNode
from auditcov.core.logging import StructuredLogger, get_logger

logger = get_logger(__name__)


class DiagnosticKind(Enum):
    """Kinds of audit coverage violations."""

    MISSING_AUDIT_ANNOTATION = "missing_audit_annotation"
    UNREGISTERED_AUDIT_ACTION = "unregistered_audit_action"


class DiagnosticSeverity(Enum):
    """Diagnostic severity levels."""

    WARNING = "warning"


def format_endpoint(verb: HttpVerb, path: str) -> str:
    """Render an endpoint as the verb right-aligned to six columns and the path."""
    return "%6s %s" % (verb.value, path)


@dataclass(frozen=True)
class Diagnostic:
    """Immutable coverage diagnostic."""

    kind: DiagnosticKind
    verb: HttpVerb
    resolved_path: str
    declaring_identity: str
    action_id: Optional[str] = None
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING

    @property
    def endpoint(self) -> str:
        return format_endpoint(self.verb, self.resolved_path)

    @property
    def message(self) -> str:
        """Terse warning line."""
        if self.kind is DiagnosticKind.MISSING_AUDIT_ANNOTATION:
            return f"REST endpoint not included in audit trail: {self.endpoint}"
        return (
            f"REST endpoint does not use a registered audit action: "
            f'{self.endpoint} (action: "{self.action_id}")'
        )

    @property
    def detail(self) -> str:
        """Debug line naming the declaring handler."""
        if self.kind is DiagnosticKind.MISSING_AUDIT_ANNOTATION:
            return (
                "Missing audit_event or no_audit_event marker: "
                f"{self.declaring_identity}"
            )
        return (
            "Make sure the audit actions are registered by an action provider: "
            f"{self.declaring_identity}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "verb": self.verb.value,
            "path": self.resolved_path,
            "action_id": self.action_id,
            "declaring_identity": self.declaring_identity,
            "message": self.message,
        }


@dataclass
class CoverageReport:
    """Result of one verification run.

    ``resources`` is the exact sequence that was verified, passed through
    unchanged.
    """

    resources: Sequence[ResourceNode]
    diagnostics: List[Diagnostic] = field(default_factory=list)
    resources_checked: int = 0
    methods_checked: int = 0

    @property
    def missing_count(self) -> int:
        """Count of mutating methods without any audit marker."""
        return sum(
            1
            for d in self.diagnostics
            if d.kind is DiagnosticKind.MISSING_AUDIT_ANNOTATION
        )

    @property
    def unregistered_count(self) -> int:
        """Count of methods using an action outside the registry."""
        return sum(
            1
            for d in self.diagnostics
            if d.kind is DiagnosticKind.UNREGISTERED_AUDIT_ACTION
        )

    @property
    def is_clean(self) -> bool:
        return not self.diagnostics

    @property
    def exit_code(self) -> int:
        """Get CI exit code based on diagnostics.

        Returns:
            0 = clean, 1 = warnings
        """
        return 0 if self.is_clean else 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "summary": {
                "total_diagnostics": len(self.diagnostics),
                "missing_audit_annotation": self.missing_count,
                "unregistered_audit_action": self.unregistered_count,
                "exit_code": self.exit_code,
            },
            "resources_checked": self.resources_checked,
            "methods_checked": self.methods_checked,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def log_diagnostic(
    diagnostic: Diagnostic, log: Optional[StructuredLogger] = None
) -> None:
    """Default emitter: warning line plus a debug line with the handler."""
    target = log or logger
    target.warning(diagnostic.message)
    target.debug(diagnostic.detail)
