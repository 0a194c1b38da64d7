"""Operation builder: turns one documented route into an OpenAPI Operation."""

import copy
import re
from dataclasses import dataclass

from route_openapi.registry.base import DocumentationRecord, ParameterSpec, ResponseSpec, RouteRecord

# ASCII word characters only; "/:" with no name becomes "/{}"
_COLON_PARAM = re.compile(r"/:\w*", re.ASCII)

COLLECTION_FORMAT_STYLES = {
    "csv": "simple",
    "ssv": "spaceDelimited",
    "tsv": "pipeDelimited",
    "pipes": "pipeDelimited",
    "multi": "form",
}

DEFAULT_RESPONSE = {"200": {"description": "Successful response"}}


def ensure_leading_slash(url: str) -> str:
    return url if url.startswith("/") else "/" + url


def strip_terminal_slash(url: str) -> str:
    return url[:-1] if len(url) > 1 and url.endswith("/") else url


def convert_path(url_template: str) -> str:
    """Convert ``/users/:id/`` style templates to ``/users/{id}``."""
    path = _COLON_PARAM.sub(lambda m: "/{" + m.group(0)[2:] + "}", url_template)
    return strip_terminal_slash(ensure_leading_slash(path))


def split_tags(tags_csv: str | None) -> list[str]:
    if not tags_csv:
        return []
    return [tag.strip() for tag in tags_csv.split(",")]


def style_for_collection_format(collection_format: str | None) -> str:
    return COLLECTION_FORMAT_STYLES.get(collection_format, "simple")


# Where a parameter's schema comes from. Resolved once per parameter by
# resolve_schema_source(), then rendered by build_parameter().

@dataclass(frozen=True)
class ExplicitSchema:
    schema: dict


@dataclass(frozen=True)
class InferredSchema:
    type: str
    format: str | None = None
    items: dict | None = None
    collection_format: str | None = None

    @property
    def is_array(self) -> bool:
        return self.type == "array"


@dataclass(frozen=True)
class NoSchema:
    pass


SchemaSource = ExplicitSchema | InferredSchema | NoSchema


def resolve_schema_source(param: ParameterSpec) -> SchemaSource:
    """Explicit ``schema`` wins over the legacy type fields; neither means no schema."""
    if param.schema_ is not None:
        return ExplicitSchema(param.schema_)
    if param.type:
        return InferredSchema(
            type=param.type,
            format=param.format,
            items=param.items,
            collection_format=param.collection_format,
        )
    return NoSchema()


def build_parameter(param: ParameterSpec) -> dict:
    result = {
        "name": param.name,
        "in": param.location,
        "required": param.required or False,
        "description": param.description or "",
    }

    source = resolve_schema_source(param)
    if isinstance(source, ExplicitSchema):
        result["schema"] = copy.deepcopy(source.schema)
    elif isinstance(source, InferredSchema):
        schema = {"type": source.type}
        if source.format:
            schema["format"] = source.format
        if source.is_array and source.items is not None:
            schema["items"] = copy.deepcopy(source.items)
        result["schema"] = schema

        if source.is_array and source.collection_format:
            result["style"] = style_for_collection_format(source.collection_format)
            result["explode"] = source.collection_format == "multi"

    return result


def build_response(spec: ResponseSpec) -> dict:
    response = {"description": spec.description or "No description"}
    if spec.schema_ is not None:
        response["content"] = {"application/json": {"schema": copy.deepcopy(spec.schema_)}}
    return response


def build_responses(responses: dict[str, ResponseSpec]) -> dict:
    result = {status: build_response(spec) for status, spec in responses.items()}
    if not result:
        result = {status: dict(body) for status, body in DEFAULT_RESPONSE.items()}
    return result


def build_operation(
    route: RouteRecord,
    doc: DocumentationRecord,
    global_params: list[ParameterSpec] | None = None,
) -> tuple[str, str, dict]:
    """Build the Operation for a route.

    Returns ``(path, method, operation)`` where ``path`` is the OpenAPI path
    key and ``method`` the lower-cased verb.
    """
    path = convert_path(route.url_template)

    if doc.summary is not None:
        summary = doc.summary
    else:
        summary = doc.name or route.name or f"{route.method.upper()} {path}"

    operation = {
        "summary": summary,
        "description": doc.description if doc.description is not None else "",
        "tags": split_tags(doc.tags_csv),
        "deprecated": doc.deprecated if doc.deprecated is not None else False,
        "parameters": [build_parameter(p) for p in [*doc.parameters, *(global_params or [])]],
        "responses": build_responses(doc.responses),
    }

    if doc.request_body and doc.request_body.get("content"):
        operation["requestBody"] = copy.deepcopy(doc.request_body)

    return path, route.method.lower(), operation
