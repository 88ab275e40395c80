"""Audit coverage module.

Resource model types, the action registry and the coverage verifier that
checks every mutating endpoint for an audit marker.
"""

from auditcov.audit.diagnostics import (
    CoverageReport,
    Diagnostic,
    DiagnosticKind,
    DiagnosticSeverity,
    format_endpoint,
    log_diagnostic,
)
from auditcov.audit.loader import (
    load_action_file,
    load_resource_model,
    parse_resource_model,
)
from auditcov.audit.markers import (
    audit_event,
    declaring_identity,
    no_audit_event,
    read_markers,
)
from auditcov.audit.model import (
    MUTATING_VERBS,
    AuditDescriptor,
    HttpVerb,
    MethodNode,
    ResourceModel,
    ResourceNode,
)
from auditcov.audit.registry import (
    ActionProvider,
    ActionRegistry,
    StaticActionProvider,
    create_registry,
)
from auditcov.audit.verifier import (
    CoverageVerifier,
    create_verifier,
    resolve_path,
)

__all__ = [
    # Model
    "HttpVerb",
    "MUTATING_VERBS",
    "AuditDescriptor",
    "MethodNode",
    "ResourceNode",
    "ResourceModel",
    # Registry
    "ActionProvider",
    "ActionRegistry",
    "StaticActionProvider",
    "create_registry",
    # Verifier
    "CoverageVerifier",
    "create_verifier",
    "resolve_path",
    # Diagnostics
    "CoverageReport",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSeverity",
    "format_endpoint",
    "log_diagnostic",
    # Markers
    "audit_event",
    "no_audit_event",
    "read_markers",
    "declaring_identity",
    # Snapshots
    "load_resource_model",
    "load_action_file",
    "parse_resource_model",
]
