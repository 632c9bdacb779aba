import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from resource_schema.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliSchema:
    def test_schema_from_yaml(self, tmp_path):
        output_file = tmp_path / "out" / "order-schema.json"
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(FIXTURES / "order.yaml"), "-o", str(output_file)])

        assert result.exit_code == 0
        schema = json.loads(output_file.read_text(encoding="utf-8"))
        assert schema["title"] == "Order"
        assert schema["required"] == ["id", "customer", "lines"]
        assert schema["properties"]["id"]["type"] == "integer"
        assert schema["properties"]["lines"]["items"]["properties"]["state"]["enum"] == ["OPEN", "SHIPPED"]
        assert "_links" not in schema["properties"]

    def test_title_option_overrides_file(self, tmp_path):
        output_file = tmp_path / "schema.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "schema", str(FIXTURES / "order.yaml"),
            "-o", str(output_file),
            "--title", "PurchaseOrder",
        ])

        assert result.exit_code == 0
        assert json.loads(output_file.read_text(encoding="utf-8"))["title"] == "PurchaseOrder"

    def test_root_array_from_json(self, tmp_path):
        output_file = tmp_path / "carts.json"
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(FIXTURES / "carts.json"), "-o", str(output_file)])

        assert result.exit_code == 0
        schema = json.loads(output_file.read_text(encoding="utf-8"))
        assert schema["type"] == "array"
        assert schema["items"]["required"] == ["id"]

    def test_output_is_stable(self, tmp_path):
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        runner = CliRunner()
        runner.invoke(main, ["schema", str(FIXTURES / "order.yaml"), "-o", str(first)])
        runner.invoke(main, ["schema", str(FIXTURES / "order.yaml"), "-o", str(second)])
        assert first.read_bytes() == second.read_bytes()

    def test_conflict_fails(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(FIXTURES / "conflict.yaml"), "-o", str(tmp_path / "x.json")])

        assert result.exit_code != 0
        assert "Conflicting field path 'user'" in result.output
        assert not (tmp_path / "x.json").exists()

    def test_invalid_descriptor_file_fails(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("- path: id\n")
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(bad)])

        assert result.exit_code != 0
        assert "Error" in result.output

    @patch("resource_schema.cli.generate_schema")
    def test_passes_file_title(self, mock_generate, tmp_path):
        mock_generate.return_value = "{}"
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(FIXTURES / "order.yaml"), "-o", str(tmp_path / "s.json")])

        assert result.exit_code == 0
        assert mock_generate.call_args[1]["title"] == "Order"


class TestCliMultipart:
    def test_multipart_schema(self, tmp_path):
        output_file = tmp_path / "upload.json"
        runner = CliRunner()
        result = runner.invoke(main, ["multipart", str(FIXTURES / "upload.yaml"), "-o", str(output_file)])

        assert result.exit_code == 0
        schema = json.loads(output_file.read_text(encoding="utf-8"))
        assert list(schema["properties"]) == ["title", "tags"]
        assert schema["required"] == ["title"]


class TestCliResource:
    def test_resource_document(self, tmp_path):
        output_file = tmp_path / "resource.json"
        runner = CliRunner()
        result = runner.invoke(main, ["resource", str(FIXTURES / "add_line_item.yaml"), "-o", str(output_file)])

        assert result.exit_code == 0
        document = json.loads(output_file.read_text(encoding="utf-8"))
        assert document["operationId"] == "carts-add-line-item"
        assert document["tags"] == ["carts"]
        assert document["description"] == "Add a line item to a cart"

        request = document["request"]
        assert request["path"] == "/carts/{id}/line-items"
        assert request["method"] == "POST"
        assert request["headers"][0]["example"] == "application/json"
        assert request["schema"] == {"name": "LineItemRequest"}
        assert request["jsonSchema"]["title"] == "LineItemRequest"
        assert request["securityRequirements"] == {"type": "OAUTH2", "requiredScopes": ["cart:write"]}

        response = document["response"]
        assert response["status"] == 201
        assert response["headers"][0]["example"] == "/carts/1/line-items/3"
        assert [f["path"] for f in response["responseFields"]] == ["id"]

    def test_multipart_without_model_fails(self):
        runner = CliRunner()
        result = runner.invoke(main, ["resource", str(FIXTURES / "upload_without_model.yaml")])

        assert result.exit_code != 0
        assert "Missing request model for multipart request" in result.output

    def test_log_level_option(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "--log-level", "debug",
            "schema", str(FIXTURES / "carts.json"),
            "-o", str(tmp_path / "carts.json"),
        ])
        assert result.exit_code == 0
