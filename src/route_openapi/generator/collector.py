"""Route collector: picks the documented inbound HTTP routes out of a snapshot."""

import logging

from pydantic import BaseModel, ConfigDict

from route_openapi.registry.base import HTTP_IN_TYPE, DocumentationRecord, RegistrySnapshot, RouteRecord

logger = logging.getLogger(__name__)


class DocumentedRoute(BaseModel):
    """A route paired with the documentation record it references."""

    model_config = ConfigDict(frozen=True)

    route: RouteRecord
    doc: DocumentationRecord


def collect_routes(snapshot: RegistrySnapshot) -> list[DocumentedRoute]:
    """Return the documented inbound HTTP routes, in registry order.

    Routes whose documentation reference is empty or does not resolve are
    treated as undocumented and skipped.
    """
    collected = []
    for route in snapshot.routes:
        if route.node_type != HTTP_IN_TYPE or not route.documentation_ref:
            continue

        doc = snapshot.get_document(route.documentation_ref)
        if doc is None:
            logger.debug(
                "Skipping %s %s: documentation %r not found",
                route.method, route.url_template, route.documentation_ref,
            )
            continue

        collected.append(DocumentedRoute(route=route, doc=doc))
    return collected
