#!/usr/bin/env python3
"""
Utility Functions
Flattened, colourised console dumps of decoded explorer entities
"""

import json
from typing import Any, List, Tuple

import click
from pydantic import BaseModel


def flatten_object(obj: Any, prefix: str = "") -> List[Tuple[str, Any]]:
    """Flatten nested dicts/lists into dotted keys; lists also get a 'key[count]' entry"""
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json")

    if isinstance(obj, dict):
        items = obj.items()
    else:
        items = enumerate(obj)

    result = []
    for key, value in items:
        new_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, (dict, list, tuple)):
            if not isinstance(value, dict):
                result.append((f"{new_key}[count]", len(value)))
            result.extend(flatten_object(value, new_key))
        else:
            result.append((new_key, value))
    return result


def format_flattened(flattened: List[Tuple[str, Any]], color: bool = True) -> str:
    lines = []
    for key, value in flattened:
        encoded = json.dumps(value)
        if color:
            lines.append(f"{click.style(key, fg='blue', bold=True)}: {click.style(encoded, fg='green')}")
        else:
            lines.append(f"{key}: {encoded}")
    return "\n".join(lines) + "\n" if lines else ""


def print_object_flattened(obj: Any, prefix: str = "", color: bool = True) -> str:
    return format_flattened(flatten_object(obj, prefix), color=color)
