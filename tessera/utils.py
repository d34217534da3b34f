"""Small helpers shared by the bus, the store and the view."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
import math
import threading
from typing import Any


def resolve_names(value: Any) -> list[str]:
    """Normalize an event/type selector into an ordered list of names.

    Accepts a whitespace separated string, a list or tuple of names, or a
    mapping whose keys are the names. Anything else resolves to nothing.
    """
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Mapping):
        return [key for key in value if isinstance(key, str) and key]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item]
    return []


def same_value(left: Any, right: Any) -> bool:
    """Return True when a write of ``right`` over ``left`` changes nothing.

    NaN equals NaN, while +0.0 and -0.0 are distinct.
    """
    if left is right:
        return True
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    if isinstance(left, float) or isinstance(right, float):
        if not isinstance(left, (int, float)) or not isinstance(right, (int, float)):
            return False
        if math.isnan(left) or math.isnan(right):
            return math.isnan(left) and math.isnan(right)
        if left == 0 and right == 0:
            return math.copysign(1.0, left) == math.copysign(1.0, right)
        return left == right
    try:
        return bool(left == right)
    except Exception:  # noqa: BLE001 - exotic __eq__ implementations.
        return False


def deep_copy(value: Any) -> Any:
    """Return a detached copy suitable for handing to callers."""
    return deepcopy(value)


class IdGenerator:
    """Hand out process-unique, prefix-tagged identifiers.

    Each generator owns its counter, so two frameworks never share ids
    implicitly.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter = start
        self._lock = threading.Lock()

    def next_id(self, prefix: str = "") -> str:
        """Return the next identifier, e.g. ``mid1``."""
        with self._lock:
            self._counter += 1
            return f"{prefix}{self._counter}"


default_id_generator = IdGenerator()
