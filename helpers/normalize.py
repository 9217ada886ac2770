# helpers/normalize.py
import re

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def snake_to_camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def normalize_row(row: dict, allowed_fields) -> dict:
    """
    Convert an exported camelCase record into keyword arguments for a model.

    Keys already in snake_case pass through; keys the model does not know are dropped.
    """
    normalized = {}
    for key, value in row.items():
        field = camel_to_snake(key)
        if field in allowed_fields:
            normalized[field] = value
    return normalized


def denormalize_row(row: dict) -> dict:
    """Model dict -> camelCase record, omitting unset optional values."""
    return {snake_to_camel(k): v for k, v in row.items() if v is not None}
