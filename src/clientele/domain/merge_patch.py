"""JSON Merge Patch (RFC 7396).

Operates on plain JSON values (dicts, lists, scalars). Inputs are never
mutated; the result shares no mutable structure with the patch.
"""

from __future__ import annotations

import copy
from typing import Any

__all__ = ["merge_patch"]


def merge_patch(target: Any, patch: Any) -> Any:
    """Apply `patch` to `target` and return the merged value.

    - An object patch is merged key by key into the target (a non-object
      target is treated as ``{}``).
    - A ``null`` member removes that key from the target.
    - Any other member replaces the target's value wholesale; arrays are never
      merged element-wise.
    - Keys absent from the patch are left untouched.

    Examples:
        >>> merge_patch({"a": "b", "c": {"d": "e"}}, {"a": "z", "c": {"d": None}})
        {'a': 'z', 'c': {}}
        >>> merge_patch({"a": [1, 2]}, {"a": [3]})
        {'a': [3]}
    """
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)

    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)
    return result
