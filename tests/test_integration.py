"""End-to-end tests over HTTP with a mocked transport."""

import json
from pathlib import Path
from unittest.mock import patch, MagicMock

from click.testing import CliRunner

from resource_graph.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


def _response(path: Path, status: int = 200) -> MagicMock:
    res = MagicMock()
    res.text = path.read_text(encoding="utf-8")
    res.status_code = status
    res.ok = status < 400
    return res


class TestEndToEnd:
    @patch("resource_graph.parser.fetch.requests.get")
    def test_yaml_document_over_http(self, mock_get, tmp_path):
        mock_get.return_value = _response(FIXTURES / "petstore.yaml")
        output_file = tmp_path / "petstore.json"

        runner = CliRunner()
        result = runner.invoke(main, [
            "parse", "https://petstore.example.com/v1/swagger.yaml",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert data["entrypoint"] == "https://petstore.example.com/v1/swagger.yaml"

        pet, owner = data["resources"]
        assert pet["url"] == "https://petstore.example.com/v1/Pets"
        assert owner["url"] == "https://petstore.example.com/v1/Owners"
        assert [o["type"] for o in pet["operations"]] == ["show", "edit", "delete", "list", "create"]
        assert [p["name"] for p in pet["parameters"]] == ["limit", "status"]

        fields = {f["name"]: f for f in pet["fields"]}
        assert fields["ownerId"]["reference"] == "Owner"
        assert fields["ownerId"]["max_cardinality"] == 1
        assert fields["createdAt"]["type"] == "dateTime"
        owner_fields = {f["name"]: f for f in owner["fields"]}
        assert owner_fields["pets"]["embedded"] == "Pet"
        assert owner_fields["pets"]["max_cardinality"] is None

    @patch("resource_graph.parser.fetch.requests.get")
    def test_http_failure_is_reported(self, mock_get):
        mock_get.return_value = _response(FIXTURES / "items.json", status=503)

        runner = CliRunner()
        result = runner.invoke(main, ["resources", "https://api.example.com/swagger.json"])

        assert result.exit_code == 1
        assert "HTTP 503" in result.output
