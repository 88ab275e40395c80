"""
Shared pytest fixtures for auditcov tests.

Fixture Organization
--------------------
- **registry**: ActionRegistry with the stream actions used across tests
- **silent_verifier**: CoverageVerifier that does not emit diagnostics
- **api_tree**: Small resource tree rooted at /api
- **snapshot_file**: JSON snapshot of api_tree on disk
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from auditcov.audit import (
    ActionRegistry,
    AuditDescriptor,
    CoverageVerifier,
    HttpVerb,
    MethodNode,
    ResourceNode,
    StaticActionProvider,
)


def _method(
    verb: HttpVerb = HttpVerb.POST,
    action: Optional[str] = None,
    exempt: bool = False,
    identity: str = "tests.Handler#method",
) -> MethodNode:
    """Build a MethodNode with optional audit metadata."""
    return MethodNode(
        http_verb=verb,
        audit_descriptor=AuditDescriptor(action) if action is not None else None,
        exempt=exempt,
        declaring_identity=identity,
    )


@pytest.fixture
def registry() -> ActionRegistry:
    """Registry with the stream actions."""
    return ActionRegistry(
        [StaticActionProvider(["stream:create", "stream:update", "stream:delete"])]
    )


@pytest.fixture
def silent_verifier(registry: ActionRegistry) -> CoverageVerifier:
    """Verifier that collects diagnostics without logging them."""
    return CoverageVerifier(registry, emit=None)


@pytest.fixture
def api_tree() -> ResourceNode:
    """Resource tree:

        /api                 GET
          /streams           POST (stream:create), GET
            /{id}            DELETE (unmarked), PUT (stream:unknown)
          /system            POST (exempt)
    """
    root = ResourceNode("/api", methods=[_method(HttpVerb.GET)])
    streams = root.add_child(
        ResourceNode(
            "streams",
            methods=[
                _method(HttpVerb.POST, action="stream:create"),
                _method(HttpVerb.GET),
            ],
        )
    )
    streams.add_child(
        ResourceNode(
            "{id}",
            methods=[
                _method(HttpVerb.DELETE, identity="app.Streams#delete"),
                _method(HttpVerb.PUT, action="stream:unknown", identity="app.Streams#update"),
            ],
        )
    )
    root.add_child(ResourceNode("/system", methods=[_method(exempt=True)]))
    return root


@pytest.fixture
def snapshot_data() -> Dict[str, Any]:
    """Snapshot document equivalent to api_tree."""
    return {
        "resources": [
            {
                "path": "/api",
                "methods": [{"verb": "GET"}],
                "children": [
                    {
                        "path": "streams",
                        "methods": [
                            {"verb": "POST", "audit_action": "stream:create"},
                            {"verb": "GET"},
                        ],
                        "children": [
                            {
                                "path": "{id}",
                                "methods": [
                                    {"verb": "DELETE", "handler": "app.Streams#delete"},
                                    {
                                        "verb": "PUT",
                                        "audit_action": "stream:unknown",
                                        "handler": "app.Streams#update",
                                    },
                                ],
                            }
                        ],
                    },
                    {
                        "path": "/system",
                        "methods": [{"verb": "POST", "exempt": True}],
                    },
                ],
            }
        ]
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: Dict[str, Any]) -> Path:
    """JSON snapshot written to a temporary directory."""
    path = tmp_path / "model.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
def make_method():
    """Factory for MethodNode instances with optional audit metadata."""
    return _method
