"""Audit Coverage Verifier.

Checks every POST, PUT and DELETE method of a resource model for an audit
marker and reports missing ones. Methods marked with no_audit_event are not
reported as missing. Methods that declare an audit action are additionally
checked against the action registry.

The verifier is a pure checker: it never mutates the model, never raises
for coverage gaps and returns the resources it was given unchanged.

Traversal is an iterative pre-order walk (explicit stack), so a resource's
own methods are always reported before any of its sub-resources.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from auditcov.audit.diagnostics import (
    CoverageReport,
    Diagnostic,
    DiagnosticKind,
    log_diagnostic,
)
from auditcov.audit.model import MethodNode, ResourceModel, ResourceNode
from auditcov.audit.registry import ActionProvider, ActionRegistry
from auditcov.core.logging import get_logger

logger = get_logger(__name__)

DiagnosticEmitter = Callable[[Diagnostic], None]


def resolve_path(node: ResourceNode) -> str:
    """Reconstruct the absolute path of a resource from its parent chain.

    Exactly one separator is put between a segment and the accumulated path
    when the accumulated path does not already start with '/'. Nothing else
    is normalized: the root segment is used verbatim and trailing or
    repeated slashes are kept.

    Args:
        node: Resource to resolve.

    Returns:
        Resolved path, e.g. "/api/users".
    """
    path = node.path_segment
    parent = node.parent

    while parent is not None:
        if not path.startswith("/"):
            path = "/" + path
        path = parent.path_segment + path
        parent = parent.parent

    return path


def _emit_to_log(diagnostic: Diagnostic) -> None:
    log_diagnostic(diagnostic, logger)


class CoverageVerifier:
    """Verifies audit coverage of resource models against a registry."""

    def __init__(
        self,
        registry: ActionRegistry,
        emit: Optional[DiagnosticEmitter] = _emit_to_log,
    ) -> None:
        """Initialize verifier.

        Args:
            registry: Registered audit actions. Held by reference.
            emit: Called once per diagnostic as it is found. Defaults to
                logging; None disables emission.
        """
        self._registry = registry
        self._emit = emit

    @property
    def registry(self) -> ActionRegistry:
        return self._registry

    def check_method(
        self, node: ResourceNode, method: MethodNode
    ) -> Optional[Diagnostic]:
        """Apply the coverage policy to one method.

        An exemption only suppresses the missing-marker finding. A method
        that is exempt and still declares an unregistered action is
        reported.

        Returns:
            Diagnostic, or None if the method is covered.
        """
        if not method.http_verb.is_mutating:
            return None

        descriptor = method.audit_descriptor
        if descriptor is None and not method.exempt:
            return Diagnostic(
                kind=DiagnosticKind.MISSING_AUDIT_ANNOTATION,
                verb=method.http_verb,
                resolved_path=resolve_path(node),
                declaring_identity=method.declaring_identity,
            )

        if descriptor is not None and not self._registry.contains(
            descriptor.action_id
        ):
            return Diagnostic(
                kind=DiagnosticKind.UNREGISTERED_AUDIT_ACTION,
                verb=method.http_verb,
                resolved_path=resolve_path(node),
                declaring_identity=method.declaring_identity,
                action_id=descriptor.action_id,
            )

        return None

    def verify(self, roots: Sequence[ResourceNode]) -> CoverageReport:
        """Check every resource reachable from ``roots``.

        Args:
            roots: Root resources, in the order the host supplies them.

        Returns:
            CoverageReport holding ``roots`` unchanged and the diagnostics
            in pre-order.
        """
        report = CoverageReport(resources=roots)
        stack: List[ResourceNode] = list(reversed(roots))

        while stack:
            node = stack.pop()
            report.resources_checked += 1

            for method in node.methods:
                report.methods_checked += 1
                diagnostic = self.check_method(node, method)
                if diagnostic is None:
                    continue
                report.diagnostics.append(diagnostic)
                if self._emit is not None:
                    self._emit(diagnostic)

            # Children must be checked too, in their declared order.
            stack.extend(reversed(node.children))

        return report

    def process_resource_model(self, model: ResourceModel) -> ResourceModel:
        """Hook for the assembled top-level model.

        Returns:
            The same model, unmodified.
        """
        self.verify(model.resources)
        return model

    def process_sub_resource(self, model: ResourceModel) -> ResourceModel:
        """Hook for a dynamically resolved sub-resource model.

        Returns:
            The same model, unmodified.
        """
        self.verify(model.resources)
        return model


def create_verifier(
    registry: Optional[ActionRegistry] = None,
    providers: Optional[Iterable[ActionProvider]] = None,
    emit: Optional[DiagnosticEmitter] = _emit_to_log,
) -> CoverageVerifier:
    """Factory function to create a coverage verifier.

    Args:
        registry: Prebuilt registry. Takes precedence over ``providers``.
        providers: Action providers to build a registry from.
        emit: Diagnostic emitter, see CoverageVerifier.

    Returns:
        Configured CoverageVerifier instance.
    """
    if registry is None:
        registry = ActionRegistry(providers)
    return CoverageVerifier(registry, emit=emit)
