"""Exceptions raised while loading registry snapshots and settings."""


class RouteOpenApiError(Exception):
    """Base class for route-openapi errors."""


class RegistryLoadError(RouteOpenApiError):
    """A flow export could not be read or has the wrong shape."""


class SettingsError(RouteOpenApiError):
    """A settings file could not be read or failed validation."""
