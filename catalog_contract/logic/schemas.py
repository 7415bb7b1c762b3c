"""JSON Schema registry for catalog response shapes.

Schemas ship inside the package under `catalog_contract/schemas/` and are
resolved exclusively from an in-memory registry keyed by `$id`, so no remote
fetches happen during validation.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from jsonschema import Draft202012Validator, FormatChecker
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012


SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

SCHEMA_FILES: Dict[str, str] = {
    "ProductRecord": "product_record.schema.json",
    "ProductListPage": "product_list_page.schema.json",
    "CategoryEntryList": "category_entry_list.schema.json",
    "CategoryNameList": "category_name_list.schema.json",
    "DeletedProduct": "deleted_product.schema.json",
    "NotFoundMessage": "not_found.schema.json",
}


def _load_schema(filename: str) -> Dict[str, Any]:
    path = SCHEMAS_DIR / filename
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise FileNotFoundError(f"Schema not found: {path}") from None


@lru_cache(maxsize=1)
def _schemas() -> Dict[str, Dict[str, Any]]:
    return {name: _load_schema(fname) for name, fname in SCHEMA_FILES.items()}


@lru_cache(maxsize=1)
def _registry() -> Registry:
    resources = [
        (sch["$id"], Resource.from_contents(sch, default_specification=DRAFT202012))
        for sch in _schemas().values()
        if isinstance(sch.get("$id"), str)
    ]
    return Registry().with_resources(resources)


def _schema(name: str) -> Dict[str, Any]:
    try:
        return _schemas()[name]
    except KeyError:
        raise KeyError(f"Unknown schema {name!r}; known: {sorted(SCHEMA_FILES)}") from None


def schema_errors(instance: Any, schema_name: str) -> List[str]:
    """Return readable messages for every violation, empty when valid."""
    validator = Draft202012Validator(
        _schema(schema_name),
        registry=_registry(),
        format_checker=FormatChecker(),
    )
    messages = []
    for err in sorted(validator.iter_errors(instance), key=lambda e: e.json_path):
        messages.append(f"{err.json_path}: {err.message}")
    return messages


__all__ = ["SCHEMA_FILES", "schema_errors"]
