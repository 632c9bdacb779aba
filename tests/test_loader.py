from pathlib import Path

import pytest
from pydantic import ValidationError

from resource_schema.loader import load_descriptors, load_document, load_multipart, load_resource
from resource_schema.resource.base import RequestBody

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadDocument:
    def test_yaml(self):
        data = load_document(FIXTURES / "order.yaml")
        assert data["title"] == "Order"

    def test_json(self):
        data = load_document(FIXTURES / "carts.json")
        assert isinstance(data, list)
        assert data[0]["path"] == "[]"

    def test_json_with_tabs_falls_back(self, tmp_path):
        f = tmp_path / "fields.json"
        f.write_text('[\n\t{"path": "id", "type": "integer"}\n]')
        assert load_document(f) == [{"path": "id", "type": "integer"}]


class TestLoadDescriptors:
    def test_mapping_with_title(self):
        descriptors, title = load_descriptors(FIXTURES / "order.yaml")
        assert title == "Order"
        assert len(descriptors) == 7
        assert descriptors[0].path == "id"
        assert descriptors[-1].ignored is True

    def test_plain_list(self):
        descriptors, title = load_descriptors(FIXTURES / "carts.json")
        assert title is None
        assert [d.path for d in descriptors] == ["[]", "[].id", "[].total"]

    def test_invalid_descriptor(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("- path: id\n")
        with pytest.raises(ValidationError):
            load_descriptors(f)

    def test_not_a_list(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("just text")
        with pytest.raises(ValueError):
            load_descriptors(f)


class TestLoadMultipart:
    def test_parts(self):
        parts = load_multipart(FIXTURES / "upload.yaml")
        assert list(parts) == ["metadata", "file"]
        assert [d.path for d in parts["metadata"]] == ["title", "tags[]"]
        assert parts["file"] == []


class TestLoadResource:
    def test_parameters_and_operation(self):
        parameters, operation = load_resource(FIXTURES / "add_line_item.yaml")
        assert parameters.summary == "Add a line item to a cart"
        assert isinstance(parameters.request, RequestBody)
        assert operation.name == "carts-add-line-item"
        assert operation.request.uri_template == "/carts/{id}/line-items"
        assert operation.response.status == 201
        assert operation.security_requirements.required_scopes == ["cart:write"]

    def test_missing_operation(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("parameters: {}\n")
        with pytest.raises(ValueError):
            load_resource(f)
