"""Dictionary merge helpers."""

import copy
from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with ``override`` merged over ``base``.

    Nested mappings merge key by key; lists and scalars in ``override``
    replace the base value wholesale. ``None`` values in ``override`` are
    skipped so partial documents cannot erase fields by accident.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


__all__ = ["deep_merge"]
