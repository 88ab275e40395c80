"""Audit declaration markers for handler functions.

Handlers declare their audit behavior with decorators:

    @audit_event(action="stream:delete")
    def delete_stream(stream_id: str) -> None: ...

    @no_audit_event("read-only probe, no state change")
    def probe() -> None: ...

The decorators only attach attributes and return the function unchanged.
Model builders call read_markers() when they turn handlers into MethodNode
instances; the verifier never inspects functions itself.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple, TypeVar

from auditcov.audit.model import AuditDescriptor

F = TypeVar("F", bound=Callable[..., Any])

AUDIT_EVENT_ATTR = "_audit_event"
NO_AUDIT_EVENT_ATTR = "_no_audit_event"


def audit_event(action: str) -> Callable[[F], F]:
    """Declare the audit action a handler emits."""

    def decorator(func: F) -> F:
        setattr(func, AUDIT_EVENT_ATTR, AuditDescriptor(action_id=action))
        return func

    return decorator


def no_audit_event(reason: str = "") -> Callable[[F], F]:
    """Declare that a handler intentionally emits no audit event."""

    def decorator(func: F) -> F:
        setattr(func, NO_AUDIT_EVENT_ATTR, reason)
        return func

    return decorator


def read_markers(func: Callable[..., Any]) -> Tuple[Optional[AuditDescriptor], bool]:
    """Read the declared markers of a handler.

    Returns:
        (audit descriptor or None, exempt flag)
    """
    descriptor = getattr(func, AUDIT_EVENT_ATTR, None)
    exempt = hasattr(func, NO_AUDIT_EVENT_ATTR)
    return descriptor, exempt


def declaring_identity(func: Callable[..., Any]) -> str:
    """Fully qualified name of a handler, for diagnostics."""
    module = getattr(func, "__module__", None) or "<unknown>"
    qualname = getattr(func, "__qualname__", None) or repr(func)
    return f"{module}.{qualname}"
