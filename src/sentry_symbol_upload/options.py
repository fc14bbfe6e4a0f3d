"""Loading and validation of the optional upload options file."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from .errors import InvalidOptions

SCHEMA_PATH = Path(__file__).resolve().parent / "options_schema.json"


@dataclass(frozen=True)
class UploadOptions:
    upload_symbols: bool = True
    upload_sources: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadOptions":
        validate_options(data)
        return cls(
            upload_symbols=data.get("upload_symbols", True),
            upload_sources=data.get("upload_sources", False),
        )


def load_schema() -> Dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def validate_options(data: Any) -> None:
    try:
        jsonschema.validate(instance=data, schema=load_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise InvalidOptions(f"Invalid upload options at {location}: {exc.message}") from exc


def load_options(path: Optional[Path]) -> UploadOptions:
    if path is None:
        return UploadOptions()
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise InvalidOptions(f"Options file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidOptions(f"Options file {path} is not valid JSON: {exc}") from exc
    return UploadOptions.from_dict(data)
