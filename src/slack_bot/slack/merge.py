"""Deep merge of generic structured values.

Used to layer user-supplied attachment properties over a generated Slack
attachment.  Mappings merge key-by-key, sequences concatenate, and any
other value is replaced by the override.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def deep_merge(base: Any, override: Any) -> Any:
    """Merge *override* onto *base* and return the result.

    Neither argument is mutated.

    - mapping + mapping: keys are merged recursively; keys present only in
      *override* are added.
    - sequence + sequence: entries of *base* followed by entries of
      *override*.  Strings are not sequences here.
    - anything else: *override* wins.

    Args:
        base: The generated value.
        override: The value layered on top.

    Returns:
        A new merged value.
    """
    if isinstance(base, Mapping) and isinstance(override, Mapping):
        merged: dict[Any, Any] = {key: _copy(value) for key, value in base.items()}
        for key, value in override.items():
            if key in merged:
                merged[key] = deep_merge(merged[key], value)
            else:
                merged[key] = _copy(value)
        return merged

    if _is_sequence(base) and _is_sequence(override):
        return [_copy(item) for item in base] + [_copy(item) for item in override]

    return _copy(override)


def _copy(value: Any) -> Any:
    """Copy nested containers so the merge result shares nothing with its inputs."""
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    if _is_sequence(value):
        return [_copy(item) for item in value]
    return value
