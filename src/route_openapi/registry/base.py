"""Data models for the route registry snapshot.

Host flow exports use their own field names (``url``, ``swaggerDoc``, ``in``,
``requestBody``...). The models accept those names as aliases and expose
snake_case attributes to the generator.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTP_IN_TYPE = "http in"
DOC_NODE_TYPE = "swagger-doc"

ParameterLocation = Literal["query", "path", "header", "cookie"]
CollectionFormat = Literal["csv", "ssv", "tsv", "pipes", "multi"]


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class ParameterSpec(_Record):
    """A route or global parameter, in either OpenAPI 3 or legacy 2.0 shape."""

    name: str | None = None
    location: ParameterLocation | str | None = Field(default=None, alias="in")
    required: bool | None = None
    description: str | None = None
    schema_: dict | None = Field(default=None, alias="schema")
    # Legacy (2.0-style) fields, only read when no schema is given
    type: str | None = None
    format: str | None = None
    items: dict | None = None
    collection_format: CollectionFormat | str | None = Field(default=None, alias="collectionFormat")


class ResponseSpec(_Record):
    description: str | None = None
    schema_: dict | None = Field(default=None, alias="schema")


class DocumentationRecord(_Record):
    """Documentation metadata attached to a route by reference."""

    id: str = ""
    name: str | None = None
    summary: str | None = None
    description: str | None = None
    tags_csv: str | None = Field(default=None, alias="tags")
    deprecated: bool | None = None
    parameters: list[ParameterSpec] = []
    request_body: dict | None = Field(default=None, alias="requestBody")
    responses: dict[str, ResponseSpec] = {}

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value):
        return [] if value is None else value

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value):
        # YAML loads bare status codes (200:) as integers
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(status): spec if spec is not None else {} for status, spec in value.items()}
        return value


class RouteRecord(_Record):
    """A registered HTTP route as seen in the host registry."""

    node_id: str = Field(default="", alias="id")
    node_type: str = Field(default="", alias="type")
    name: str | None = None
    method: str
    url_template: str = Field(alias="url")
    documentation_ref: str | None = Field(default=None, alias="swaggerDoc")


class RegistrySnapshot(_Record):
    """Immutable view of the registry at the time a document is generated."""

    routes: tuple[RouteRecord, ...] = ()
    documents: dict[str, DocumentationRecord] = {}

    def get_document(self, ref: str | None) -> DocumentationRecord | None:
        if not ref:
            return None
        return self.documents.get(ref)
