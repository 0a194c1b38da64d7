"""Request-level entry point for serving the generated document."""

import logging

from route_openapi.registry.base import RegistrySnapshot
from route_openapi.settings import Settings
from .document import generate_document

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal server error"}


def render_swagger_json(snapshot: RegistrySnapshot, settings: Settings | None = None) -> tuple[int, dict]:
    """Generate the document for one request.

    Returns ``(200, document)`` on success. Any failure is logged and turned
    into ``(500, {"error": "Internal server error"})`` without details, so
    callers never see a partial document.
    """
    try:
        document = generate_document(snapshot, settings)
    except Exception:
        logger.exception("Error generating Swagger JSON")
        return 500, dict(INTERNAL_ERROR_BODY)
    return 200, document
