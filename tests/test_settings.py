from pathlib import Path

import pytest

from route_openapi.errors import SettingsError
from route_openapi.settings import DEFAULT_TEMPLATE, OpenApiSettings, Settings, load_settings

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadSettings:
    def test_none_gives_defaults(self):
        settings = load_settings(None)
        assert settings.base_path_prefix is None
        assert settings.openapi.template == {}
        assert settings.openapi.parameters == []

    def test_fixture(self):
        settings = load_settings(FIXTURES / "settings.yaml")
        assert settings.base_path_prefix == "/api"
        assert settings.openapi.template["info"]["title"] == "Users API"
        assert settings.openapi.parameters[0].name == "X-Request-Id"
        assert settings.openapi.parameters[0].location == "header"

    def test_empty_file(self, tmp_path):
        f = tmp_path / "settings.yaml"
        f.write_text("")
        assert load_settings(f) == Settings()

    def test_null_openapi_section(self, tmp_path):
        f = tmp_path / "settings.yaml"
        f.write_text("httpNodeRoot: /x\nopenapi:\n")
        settings = load_settings(f)
        assert settings.base_path_prefix == "/x"
        assert settings.openapi.parameters == []

    def test_json_settings(self, tmp_path):
        f = tmp_path / "settings.json"
        f.write_text('{"httpNodeRoot": "/v2", "openapi": {"parameters": null}}')
        assert load_settings(f).base_path_prefix == "/v2"

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "settings.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(SettingsError, match="expected a mapping"):
            load_settings(f)

    def test_invalid_values(self, tmp_path):
        f = tmp_path / "settings.yaml"
        f.write_text("openapi:\n  parameters: 12\n")
        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(f)

    def test_unreadable_yaml(self, tmp_path):
        f = tmp_path / "settings.yaml"
        f.write_text("openapi: [unclosed\n")
        with pytest.raises(SettingsError, match="Cannot read settings"):
            load_settings(f)


class TestWithOverrides:
    def test_no_overrides(self):
        settings = Settings(base_path_prefix="/a")
        assert settings.with_overrides() == settings

    def test_base_path(self):
        assert Settings().with_overrides(base_path="/v1").base_path_prefix == "/v1"

    def test_title_with_null_info(self):
        settings = Settings(openapi=OpenApiSettings(template={"info": None})).with_overrides(title="Orders")
        assert settings.openapi.template["info"] == {**DEFAULT_TEMPLATE["info"], "title": "Orders"}

    def test_title_on_default_info(self):
        settings = Settings().with_overrides(title="Orders")
        assert settings.openapi.template["info"] == {**DEFAULT_TEMPLATE["info"], "title": "Orders"}
        assert DEFAULT_TEMPLATE["info"]["title"] == "My Node-RED API"

    def test_version_on_template_info(self):
        settings = load_settings(FIXTURES / "settings.yaml").with_overrides(version="3.0.0")
        assert settings.openapi.template["info"] == {"title": "Users API", "version": "3.0.0"}
        assert settings.openapi.template["servers"][0]["url"] == "https://example.com/"
