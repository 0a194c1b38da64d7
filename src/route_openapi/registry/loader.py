"""Flow export loader.

Reads a host flow export (a JSON/YAML list of nodes) into a RegistrySnapshot.
"""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from route_openapi.errors import RegistryLoadError
from .base import DOC_NODE_TYPE, HTTP_IN_TYPE, DocumentationRecord, RegistrySnapshot, RouteRecord


def load_structured(file_path: Path) -> object:
    """Read a YAML or JSON file.

    YAML is tried first; JSON that YAML rejects (tab indentation) falls back
    to the json module.
    """
    text = file_path.read_text(encoding="utf-8")

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as yaml_error:
        try:
            return json.loads(text)
        except (json.JSONDecodeError, ValueError):
            raise yaml_error


def load_flows(file_path: Path) -> RegistrySnapshot:
    """Load a flow export file into a registry snapshot."""
    try:
        data = load_structured(file_path)
    except (OSError, yaml.YAMLError) as e:
        raise RegistryLoadError(f"Cannot read flows from {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("flows", [])
    if data is None:
        data = []
    if not isinstance(data, list):
        raise RegistryLoadError(f"{file_path}: expected a list of nodes, got {type(data).__name__}")

    return snapshot_from_nodes(data)


def snapshot_from_nodes(nodes: list[dict]) -> RegistrySnapshot:
    """Build a snapshot from raw node dicts.

    Documentation nodes are keyed by id and inbound HTTP nodes become routes.
    Other node types and disabled nodes are left out.
    """
    routes: list[RouteRecord] = []
    documents: dict[str, DocumentationRecord] = {}

    for node in nodes:
        if not isinstance(node, dict) or node.get("d") is True:
            continue
        try:
            if node.get("type") == DOC_NODE_TYPE:
                doc = DocumentationRecord.model_validate(node)
                documents[doc.id] = doc
            elif node.get("type") == HTTP_IN_TYPE:
                routes.append(RouteRecord.model_validate(node))
        except ValidationError as e:
            raise RegistryLoadError(f"Invalid node {node.get('id', '?')!r}: {e}") from e

    return RegistrySnapshot(routes=tuple(routes), documents=documents)
