"""Resource model snapshots and action lists.

A host application can dump its assembled resource model to JSON or YAML
so coverage can be checked in CI without starting the application:

    {
      "resources": [
        {
          "path": "/streams",
          "methods": [
            {"verb": "POST", "audit_action": "stream:create",
             "handler": "app.streams.StreamResource.create"}
          ],
          "children": [
            {"path": "{stream_id}",
             "methods": [{"verb": "DELETE", "exempt": true}]}
          ]
        }
      ]
    }

A bare list of resources is accepted as well. Snapshots are validated with
pydantic and converted into ResourceNode trees with parent links set.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from auditcov.audit.model import (
    AuditDescriptor,
    HttpVerb,
    MethodNode,
    ResourceModel,
    ResourceNode,
)
from auditcov.audit.registry import StaticActionProvider
from auditcov.core.exceptions import ModelLoadError
from auditcov.core.logging import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class MethodSchema(BaseModel):
    """One method entry of a snapshot."""

    model_config = ConfigDict(extra="forbid")

    verb: str = Field(..., description="HTTP verb, e.g. POST")
    audit_action: Optional[str] = Field(
        None, description="Action identifier declared by the audit marker"
    )
    exempt: bool = Field(False, description="Handler is marked no_audit_event")
    handler: str = Field("", description="Qualified name of the handler")

    def to_node(self) -> MethodNode:
        descriptor = (
            AuditDescriptor(action_id=self.audit_action)
            if self.audit_action is not None
            else None
        )
        return MethodNode(
            http_verb=HttpVerb.parse(self.verb),
            audit_descriptor=descriptor,
            exempt=self.exempt,
            declaring_identity=self.handler,
        )


class ResourceSchema(BaseModel):
    """One resource entry of a snapshot, with nested sub-resources."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field("", description="Path segment of this resource")
    methods: List[MethodSchema] = Field(default_factory=list)
    children: List["ResourceSchema"] = Field(default_factory=list)

    def to_node(self) -> ResourceNode:
        node = ResourceNode(
            path_segment=self.path,
            methods=[m.to_node() for m in self.methods],
        )
        for child in self.children:
            node.add_child(child.to_node())
        return node


ResourceSchema.model_rebuild()


class ResourceModelSchema(BaseModel):
    """Top-level snapshot document."""

    model_config = ConfigDict(extra="forbid")

    resources: List[ResourceSchema] = Field(default_factory=list)

    def to_model(self) -> ResourceModel:
        return ResourceModel(resources=[r.to_node() for r in self.resources])


def _read_structured(path: Path) -> Any:
    """Read a JSON or YAML document, chosen by file suffix."""
    if not path.exists():
        raise ModelLoadError(f"File not found: {path}", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ModelLoadError(f"Cannot read {path}: {e}", path=str(path)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ModelLoadError(f"Cannot parse {path}: {e}", path=str(path)) from e


def parse_resource_model(data: Any, source: str = "<memory>") -> ResourceModel:
    """Validate snapshot data and build the resource tree.

    Args:
        data: Parsed snapshot, either a mapping with ``resources`` or a list.
        source: Name used in error messages.

    Returns:
        ResourceModel with parent links set.

    Raises:
        ModelLoadError: If the data does not match the snapshot layout.
    """
    if data is None:
        data = {}
    if isinstance(data, list):
        data = {"resources": data}

    try:
        schema = ResourceModelSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ModelLoadError(
            f"Invalid resource model in {source}: {e}", path=source
        ) from e

    return schema.to_model()


def load_resource_model(path: Path) -> ResourceModel:
    """Load a resource model snapshot from a JSON or YAML file.

    Raises:
        ModelLoadError: On missing, unparsable or invalid files.
    """
    model = parse_resource_model(_read_structured(path), source=str(path))
    logger.info(
        "Loaded resource model",
        path=str(path),
        resources=sum(1 for _ in model.walk()),
    )
    return model


def _parse_text_actions(text: str) -> List[str]:
    actions: List[str] = []
    for line in text.splitlines():
        stripped = line.split("#", 1)[0].strip()
        if stripped:
            actions.append(stripped)
    return actions


def load_action_file(path: Path) -> StaticActionProvider:
    """Load audit action identifiers from a file.

    JSON and YAML files hold a list of strings or a mapping with an
    ``actions`` list. Any other file is read as plain text with one
    identifier per line; blank lines and ``#`` comments are ignored.

    Raises:
        ModelLoadError: On missing or malformed files.
    """
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES or suffix == ".json":
        data = _read_structured(path)
        if isinstance(data, dict):
            data = data.get("actions")
        if not isinstance(data, list) or not all(isinstance(a, str) for a in data):
            raise ModelLoadError(
                f"{path} must contain a list of action identifiers", path=str(path)
            )
        actions = data
    else:
        if not path.exists():
            raise ModelLoadError(f"File not found: {path}", path=str(path))
        try:
            actions = _parse_text_actions(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ModelLoadError(f"Cannot read {path}: {e}", path=str(path)) from e

    logger.debug("Loaded audit actions", path=str(path), actions=len(actions))
    return StaticActionProvider(actions, source=str(path))
