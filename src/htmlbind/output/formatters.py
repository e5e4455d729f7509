"""JSON/human output helpers for bound object graphs.

The CLI renders bound objects for humans (indented key-value pairs) or
machines (--json). Failures are rendered from a BindingFailure.
"""

from __future__ import annotations

import dataclasses
import json as _json
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from htmlbind.serializers.result import BindingFailure


def to_data(value: Any) -> Any:
    """Convert a bound object graph into JSON-compatible data."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return to_data(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [to_data(item) for item in value]
    if isinstance(value, dict):
        return {str(k): to_data(v) for k, v in value.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_data(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__"):
        return {k: to_data(v) for k, v in vars(value).items() if not k.startswith("_")}
    return str(value)


def _format_human(data: Any, indent: int = 0) -> list[str]:
    pad = "  " * indent
    lines: list[str] = []
    if isinstance(data, dict):
        for key, item in data.items():
            if isinstance(item, (dict, list)) and item:
                lines.append(f"{pad}{key}:")
                lines.extend(_format_human(item, indent + 1))
            else:
                lines.append(f"{pad}{key}: {_json.dumps(item)}")
    elif isinstance(data, list):
        for index, item in enumerate(data):
            if isinstance(item, (dict, list)) and item:
                lines.append(f"{pad}[{index}]")
                lines.extend(_format_human(item, indent + 1))
            else:
                lines.append(f"{pad}[{index}] {_json.dumps(item)}")
    else:
        lines.append(f"{pad}{_json.dumps(data)}")
    return lines


def format_value(value: Any, *, json_output: bool = False) -> str:
    """Format a bound object graph for display."""
    data = to_data(value)
    if json_output:
        return _json.dumps(data, indent=2)
    return "\n".join(_format_human(data))


def format_failure(failure: BindingFailure, *, json_output: bool = False) -> str:
    """Format a binding failure for stderr."""
    if json_output:
        return failure.model_dump_json(indent=2)
    where = f" at {failure.path}" if failure.path else ""
    return f"ERROR: {failure.code}{where}: {failure.message}"
