import json
from pathlib import Path
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from route_openapi.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliGenerate:
    def test_generate_to_file(self, tmp_path):
        output_file = tmp_path / "out" / "swagger.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "flows.json"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        doc = json.loads(output_file.read_text(encoding="utf-8"))
        assert doc["openapi"] == "3.0.0"
        assert "/users/{id}" in doc["paths"]

    def test_generate_to_stdout(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(FIXTURES / "flows.json")])

        assert result.exit_code == 0
        doc = json.loads(result.stdout)
        assert sorted(doc["paths"]) == ["/search", "/users", "/users/{id}"]

    def test_generate_yaml_with_settings(self, tmp_path):
        output_file = tmp_path / "swagger.yaml"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "flows.json"),
            "--settings", str(FIXTURES / "settings.yaml"),
            "--format", "yaml",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        doc = yaml.safe_load(output_file.read_text(encoding="utf-8"))
        assert doc["servers"] == [{"url": "https://example.com/api", "description": "Production"}]
        assert doc["info"]["title"] == "Users API"

    def test_overrides(self, tmp_path):
        output_file = tmp_path / "swagger.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "flows.json"),
            "--base-path", "/v1",
            "--title", "Renamed",
            "--version", "9.9.9",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        doc = json.loads(output_file.read_text(encoding="utf-8"))
        assert doc["servers"][0]["url"] == "http://localhost:1880/v1"
        assert doc["info"]["title"] == "Renamed"
        assert doc["info"]["version"] == "9.9.9"
        assert doc["info"]["description"] == "A sample API"

    @patch("route_openapi.cli.render_swagger_json")
    def test_generation_failure(self, mock_render, tmp_path):
        mock_render.return_value = (500, {"error": "Internal server error"})
        output_file = tmp_path / "swagger.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "flows.json"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 1
        assert "Internal server error" in result.output
        assert not output_file.exists()

    def test_bad_flows_file(self, tmp_path):
        flows = tmp_path / "flows.json"
        flows.write_text('{"flows": 3}')
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(flows)])

        assert result.exit_code != 0
        assert "expected a list" in result.output

    def test_missing_flows_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(tmp_path / "missing.json")])
        assert result.exit_code == 2


class TestCliRoutes:
    def test_lists_documented_routes(self):
        runner = CliRunner()
        result = runner.invoke(main, ["routes", str(FIXTURES / "flows.json")])

        assert result.exit_code == 0
        assert "GET     /users/{id}  (doc-get-user)" in result.output
        assert "POST    /users  (doc-create-user)" in result.output
        assert "/health" not in result.output
        assert "DELETE" not in result.output
        assert "3 documented of 5 routes." in result.output
