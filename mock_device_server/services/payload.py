"""
Helpers for inspecting raw request payloads.

Request bodies arrive as raw JSON (dict, list, scalar or None). These helpers
answer the handful of questions the generators ask about them, and render
payloads for the log.
"""

import json
from typing import Any, Dict, Mapping

from pydantic import BaseModel


def as_mapping(payload: Any) -> Mapping[str, Any]:
    """Treat a non-object body as an empty object."""
    if isinstance(payload, Mapping):
        return payload
    return {}


def is_positive_amount(value: Any) -> bool:
    """True for a JSON number strictly greater than zero. Booleans are not amounts."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


def is_truthy(value: Any) -> bool:
    """
    Truthiness as device clients written in JavaScript expect it.

    Only None, False, "", 0 and NaN are falsy. Empty arrays and objects
    count as set, unlike Python's ``bool()``.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value == value and value != 0
    if isinstance(value, str):
        return value != ""
    return True


def is_non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def format_amount(value: Any) -> str:
    """
    Print an amount the way it appears on a slip.

    Whole floats lose the trailing ``.0`` (``250.0`` → ``250``).
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def nested(payload: Mapping[str, Any], key: str) -> Dict[str, Any]:
    """Return ``payload[key]`` if it is an object, else an empty dict."""
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def for_log(data: Any) -> str:
    """Compact JSON for log lines; Cyrillic stays readable."""
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    return json.dumps(data, ensure_ascii=False, default=str)
