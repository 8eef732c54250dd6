from __future__ import annotations

import difflib
import json
import sys
from pathlib import Path
from typing import Any

import jsonschema

from .errors import BindgenError

SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"


def load_json_object(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise BindgenError(f"Unable to read JSON file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise BindgenError(f"Invalid JSON in '{path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise BindgenError(f"JSON root in '{path}' must be an object")
    return payload


def render_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2, sort_keys=False) + "\n"


def validate_with_schema(kind: str, payload: dict[str, Any], label: str) -> None:
    schema_path = SCHEMA_ROOT / f"{kind}.schema.json"
    if not schema_path.exists():
        raise BindgenError(f"Unknown schema kind: {kind}")
    schema = load_json_object(schema_path)
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise BindgenError(f"{label} failed {kind} schema validation at {location}: {exc.message}") from exc


def write_if_changed(path: Path, content: str, check: bool, dry_run: bool) -> int:
    """Bring a generated file at path up to date with content.

    Returns 0 when the file already matches or was written, 1 when check
    is set and the file is missing or stale. In check mode the drift is
    reported as "<path>: missing" or "<path>: out of date" on stderr,
    followed by a unified diff on stdout; nothing is written. dry_run skips
    the write but still reports success.
    """
    exists = path.exists()
    existing = path.read_text(encoding="utf-8") if exists else ""
    if exists and existing == content:
        return 0
    if check:
        state = "out of date" if exists else "missing"
        print(f"{path}: {state}", file=sys.stderr)
        diff = difflib.unified_diff(
            existing.splitlines(),
            content.splitlines(),
            fromfile=f"a/{path}" if exists else "/dev/null",
            tofile=f"b/{path}",
            lineterm="",
        )
        print("\n".join(diff))
        return 1
    if dry_run:
        return 0
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return 0
