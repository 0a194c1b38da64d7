"""Document assembler: merges the base template with generated paths."""

import copy

from route_openapi.registry.base import RegistrySnapshot
from route_openapi.settings import DEFAULT_TEMPLATE, Settings
from .collector import DocumentedRoute, collect_routes
from .operation import build_operation

COMPONENT_CATEGORIES = ("schemas", "responses", "parameters", "securitySchemes")


def merge_template(template: dict | None = None) -> dict:
    """Shallow-merge a template override over the defaults.

    Top-level keys in the override replace the default value wholesale;
    ``info`` or ``components`` are never merged key by key. ``paths`` is
    always reset. Both inputs are deep-copied so the result can be mutated.
    """
    document = copy.deepcopy(DEFAULT_TEMPLATE)
    document.update(copy.deepcopy(template or {}))
    document["paths"] = {}
    return document


def apply_base_path(servers: list[dict], base_path: str | None) -> None:
    """Append the base path to every server url, in place."""
    if not base_path or base_path == "/":
        return
    for server in servers:
        url = server["url"]
        if url.endswith("/"):
            url = url[:-1]
        server["url"] = url + base_path


def cleanup_document(document: dict) -> dict:
    """Drop empty component categories, then ``components`` if nothing is left, and empty ``tags``."""
    components = document.get("components")
    if isinstance(components, dict):
        for key in COMPONENT_CATEGORIES:
            if key in components and not components[key]:
                del components[key]
        if not components:
            del document["components"]

    if isinstance(document.get("tags"), list) and not document["tags"]:
        del document["tags"]

    return document


def build_document(routes: list[DocumentedRoute], settings: Settings | None = None) -> dict:
    """Assemble the OpenAPI document for already collected routes."""
    settings = settings or Settings()

    document = merge_template(settings.openapi.template)
    apply_base_path(document.get("servers") or [], settings.base_path_prefix)

    paths = document["paths"]
    for item in routes:
        path, method, operation = build_operation(item.route, item.doc, settings.openapi.parameters)
        # Same path and method: the route processed last wins
        paths.setdefault(path, {})[method] = operation

    return cleanup_document(document)


def generate_document(snapshot: RegistrySnapshot, settings: Settings | None = None) -> dict:
    """Collect, build and assemble in one go."""
    return build_document(collect_routes(snapshot), settings)
