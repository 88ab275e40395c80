"""Resource Model Types.

The in-memory shape of an assembled HTTP API: resources nested into a tree,
each exposing methods bound to an HTTP verb. Model builders populate the
per-method audit metadata before handing the tree to the verifier; the
verifier only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class HttpVerb(str, Enum):
    """HTTP verbs a resource method can be bound to."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: str) -> "HttpVerb":
        """Map a verb string to a member, case-insensitively.

        Unknown verbs map to OTHER.
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.OTHER

    @property
    def is_mutating(self) -> bool:
        """Whether methods with this verb must be covered by the audit trail."""
        return self in MUTATING_VERBS


# PATCH is intentionally not part of the audited set.
MUTATING_VERBS = frozenset({HttpVerb.POST, HttpVerb.PUT, HttpVerb.DELETE})


@dataclass(frozen=True)
class AuditDescriptor:
    """Declares that a method emits an audit event under ``action_id``."""

    action_id: str


@dataclass
class MethodNode:
    """One operation exposed on a resource."""

    http_verb: HttpVerb
    audit_descriptor: Optional[AuditDescriptor] = None
    exempt: bool = False
    declaring_identity: str = ""


@dataclass
class ResourceNode:
    """One node of the resource hierarchy.

    ``parent`` is a back reference used for path resolution only. It is
    left out of repr and equality so comparing trees does not recurse
    upwards.
    """

    path_segment: str
    methods: List[MethodNode] = field(default_factory=list)
    children: List["ResourceNode"] = field(default_factory=list)
    parent: Optional["ResourceNode"] = field(default=None, repr=False, compare=False)

    def add_child(self, child: "ResourceNode") -> "ResourceNode":
        """Attach a sub-resource and set its parent link.

        Returns:
            The child, for chaining.
        """
        child.parent = self
        self.children.append(child)
        return child

    def add_method(self, method: MethodNode) -> MethodNode:
        """Expose a method on this resource."""
        self.methods.append(method)
        return method

    def walk(self) -> Iterator["ResourceNode"]:
        """Yield this node and its descendants in pre-order."""
        stack: List[ResourceNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class ResourceModel:
    """The resources handed over by the host at one lifecycle point."""

    resources: List[ResourceNode] = field(default_factory=list)

    def walk(self) -> Iterator[ResourceNode]:
        """Yield every resource of every root in pre-order."""
        for root in self.resources:
            yield from root.walk()
