"""
snake_case <-> camelCase key transforms for JSON-like structures.

Only dict keys are rewritten; values are recursed into when they are dicts
or lists and returned unchanged otherwise. For camelCase-keyed input,
to_camel_case(to_snake_case(obj)) == obj.
"""
import re
from typing import Any

# Leading underscores are part of the key, not word separators
_SNAKE_SEGMENT = re.compile(r"(?<=[A-Za-z0-9])_([a-z])")
_UPPER = re.compile(r"([A-Z])")


def snake_to_camel(key: str) -> str:
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), key)


def camel_to_snake(key: str) -> str:
    return _UPPER.sub(lambda m: "_" + m.group(1).lower(), key)


def _transform(obj: Any, convert) -> Any:
    if isinstance(obj, list):
        return [_transform(item, convert) for item in obj]
    if isinstance(obj, dict):
        return {
            (convert(key) if isinstance(key, str) else key): _transform(value, convert)
            for key, value in obj.items()
        }
    return obj


def to_camel_case(obj: Any) -> Any:
    return _transform(obj, snake_to_camel)


def to_snake_case(obj: Any) -> Any:
    return _transform(obj, camel_to_snake)
