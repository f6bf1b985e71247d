"""
Key casing helpers applied once at the request-parsing boundary.

Clients send either snake_case or camelCase; everything below the schemas
works with snake_case and responses go out as camelCase. Only the keys of
the mapping being parsed are renamed: nested models normalize their own
keys, and free-form dict values (auth metadata) keep theirs.
"""

from typing import Any, Iterable, Mapping, Optional

from pydantic.alias_generators import to_snake


def to_snake_keys(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return {to_snake(k) if isinstance(k, str) else k: v for k, v in obj.items()}
    return obj


def extract_resource_id(item: Any, keys: Iterable[str]) -> Optional[str]:
    """Return the id carried by either a bare id, a join row or a full resource object.

    Mappings are searched with ``keys`` in priority order (snake_case, after
    normalization); the first non-empty value wins.
    """
    if item is None:
        return None
    if isinstance(item, str):
        return item or None
    if isinstance(item, Mapping):
        normalized = to_snake_keys(item)
        for key in keys:
            value = normalized.get(key)
            if value:
                return str(value)
        return None
    raise TypeError(f"Unsupported association item: {type(item).__name__}")
