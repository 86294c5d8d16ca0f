"""Locate the first balanced JSON object in model output."""

from __future__ import annotations

import json
from typing import Any, Optional


def find_json_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` span, ignoring braces inside strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : index + 1]
        # Unbalanced from this brace; try the next one
        start = text.find("{", start + 1)
    return None


def extract_json_object(text: Optional[str]) -> dict[str, Any]:
    """Parse the first JSON object embedded in ``text``.

    Raises:
        ValueError: If no object is found or it does not parse.
    """
    if not text:
        raise ValueError("Empty response")

    candidate = find_json_object(text)
    if candidate is None:
        raise ValueError("No JSON object found in response")

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in response: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError("JSON response is not an object")
    return data
