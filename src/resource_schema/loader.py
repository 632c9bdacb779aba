"""Load descriptor and operation documents from YAML or JSON files."""

import json
from pathlib import Path
from typing import Any

import yaml

from resource_schema.resource.base import CapturedOperation, ResourceParameters
from resource_schema.schema.base import FieldDescriptor


def load_document(file_path: Path) -> Any:
    """Parse a YAML or JSON document.

    YAML is tried first since it covers most JSON; JSON is the fallback for
    files YAML rejects (e.g. tabs used for indentation).
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as yaml_error:
        try:
            return json.loads(text)
        except (json.JSONDecodeError, ValueError):
            raise yaml_error


def load_descriptors(file_path: Path) -> tuple[list[FieldDescriptor], str | None]:
    """Load field descriptors and an optional title.

    Accepts either a list of descriptors or a mapping with ``fields`` and ``title``.
    """
    data = load_document(file_path)
    title = None
    if isinstance(data, dict):
        title = data.get("title")
        data = data.get("fields", [])
    if not isinstance(data, list):
        raise ValueError(f"{file_path}: expected a list of field descriptors")
    return [FieldDescriptor.model_validate(item) for item in data], title


def load_multipart(file_path: Path) -> dict[str, list[FieldDescriptor]]:
    """Load per-part field descriptors from a mapping with ``parts``."""
    data = load_document(file_path)
    if not isinstance(data, dict) or not isinstance(data.get("parts"), dict):
        raise ValueError(f"{file_path}: expected a mapping with 'parts'")
    return {
        name: [FieldDescriptor.model_validate(item) for item in fields or []]
        for name, fields in data["parts"].items()
    }


def load_resource(file_path: Path) -> tuple[ResourceParameters, CapturedOperation]:
    """Load documented parameters and the captured operation."""
    data = load_document(file_path)
    if not isinstance(data, dict) or "operation" not in data:
        raise ValueError(f"{file_path}: expected a mapping with 'parameters' and 'operation'")
    parameters = ResourceParameters.model_validate(data.get("parameters") or {})
    operation = CapturedOperation.model_validate(data["operation"])
    return parameters, operation
