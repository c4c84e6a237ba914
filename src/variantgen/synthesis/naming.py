from __future__ import annotations

import keyword
import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def is_identifier(value: str) -> bool:
    return value.isidentifier() and not keyword.iskeyword(value)


def to_snake_case(name: str) -> str:
    parts = [p for p in re.split(r"[^a-zA-Z0-9]+", _CAMEL_BOUNDARY.sub("_", name)) if p]
    return "_".join(p.lower() for p in parts)


def positional_field_name(index: int) -> str:
    return f"_{index}"


def lift_method_name(enum_name: str) -> str:
    return f"into_{to_snake_case(enum_name)}"


def projection_method_name(enum_name: str) -> str:
    return f"try_from_{to_snake_case(enum_name)}"


def pattern_binding(index: int) -> str:
    # Never derived from the field name, which may be `_` or `cls`.
    return f"field_{index}"
