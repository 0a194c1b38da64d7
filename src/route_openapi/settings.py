"""Generator settings.

Settings follow the host settings file layout::

    httpNodeRoot: /api
    openapi:
      template:
        info: {title: Orders API, version: 2.0.0}
      parameters:
        - {name: X-Request-Id, in: header, type: string}

Everything else in the file is ignored.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from route_openapi.errors import SettingsError
from route_openapi.registry.base import ParameterSpec
from route_openapi.registry.loader import load_structured

DEFAULT_TEMPLATE = {
    "openapi": "3.0.0",
    "info": {
        "title": "My Node-RED API",
        "version": "1.0.0",
        "description": "A sample API",
    },
    "servers": [
        {
            "url": "http://localhost:1880/",
            "description": "Local server",
        },
    ],
    "paths": {},
    "components": {
        "schemas": {},
        "responses": {},
        "parameters": {},
        "securitySchemes": {},
    },
    "tags": [],
}


class OpenApiSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    template: dict = {}
    parameters: list[ParameterSpec] = []

    @field_validator("template", "parameters", mode="before")
    @classmethod
    def _none_to_default(cls, value, info):
        if value is None:
            return {} if info.field_name == "template" else []
        return value


class Settings(BaseModel):
    """Global configuration applied to every generated document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_path_prefix: str | None = Field(default=None, alias="httpNodeRoot")
    openapi: OpenApiSettings = OpenApiSettings()

    @field_validator("openapi", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return {} if value is None else value

    def with_overrides(
        self,
        base_path: str | None = None,
        title: str | None = None,
        version: str | None = None,
    ) -> "Settings":
        """Return a copy with command line overrides applied.

        Title and version go into the template's ``info`` object, which keeps
        the rest of an overridden ``info`` (or the default one) intact.
        """
        update: dict = {}
        if base_path is not None:
            update["base_path_prefix"] = base_path

        if title is not None or version is not None:
            template = dict(self.openapi.template)
            info = dict(template.get("info") or DEFAULT_TEMPLATE["info"])
            if title is not None:
                info["title"] = title
            if version is not None:
                info["version"] = version
            template["info"] = info
            update["openapi"] = self.openapi.model_copy(update={"template": template})

        return self.model_copy(update=update)


def load_settings(file_path: Path | None) -> Settings:
    """Load settings from a YAML/JSON file. ``None`` or an empty file gives defaults."""
    if file_path is None:
        return Settings()

    try:
        data = load_structured(file_path)
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"Cannot read settings from {file_path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise SettingsError(f"{file_path}: expected a mapping, got {type(data).__name__}")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {file_path}: {e}") from e
