"""Schema checks for imageset Contents.json documents.

A manifest is only rewritten after it passes these checks, so a file the
tool does not understand is reported and left exactly as it was.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Any

from jsonschema import Draft7Validator

SCHEMA_RESOURCE = "contents.schema.json"


@lru_cache(maxsize=1)
def contents_validator() -> Draft7Validator:
    """Build the validator for the packaged Contents.json schema.

    Raises:
        FileNotFoundError: If the schema is missing from the package
        jsonschema.SchemaError: If the schema itself is malformed
    """
    text = (resources.files("xcassets_heif") / "schemas" / SCHEMA_RESOURCE).read_text(encoding="utf-8")
    schema = json.loads(text)
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def _location(path: Any) -> str:
    return " -> ".join(str(part) for part in path) or "root"


def manifest_problems(document: Any) -> list[str]:
    """Describe every way ``document`` breaks the schema.

    Problems are ordered by their location in the document, each as
    ``"Validation error at <a -> b | root>: <message>"``. An empty list
    means the document is a valid manifest.
    """
    errors = sorted(
        contents_validator().iter_errors(document),
        key=lambda e: [str(part) for part in e.absolute_path],
    )
    return [f"Validation error at {_location(e.absolute_path)}: {e.message}" for e in errors]


def is_valid_manifest(document: Any) -> bool:
    return contents_validator().is_valid(document)
