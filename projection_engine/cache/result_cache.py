"""
Memoization store for engine results.

Keys are a canonical JSON encoding of ``(operation, *arguments)``:

- the operation name is always the first element, so identical argument
  tuples for different operations never collide;
- ints and floats are encoded as floats (``10`` and ``10.0`` share a key),
  booleans stay booleans;
- enum members are encoded as their values, so ``PeriodType.ANNUAL`` and
  ``"annual"`` share a key;
- sequences become lists and keep their order, mappings are encoded with
  sorted keys, ``None`` becomes ``null``;
- dates are encoded as ISO strings.

Values are stored by reference: a hit returns the very object that was
stored, never a copy or a recomputation.
"""

import json
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def _canonical(value: Any) -> Any:
    if isinstance(value, Enum):
        return _canonical(value.value)
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    raise TypeError(f"Cannot build cache key from {type(value).__name__}")


def make_key(operation: str, *args: Any) -> str:
    """Build the canonical cache key for an operation call."""
    return json.dumps([operation, *(_canonical(a) for a in args)],
                      sort_keys=True, separators=(",", ":"), allow_nan=True)


class ResultCache:
    """Process-local key/value store with hit and miss counters."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._store: dict[str, Any] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def get(self, key: str) -> Optional[Any]:
        return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def get_or_compute(self, key: str, factory: Callable[[], T]) -> T:
        """
        Return the stored value for key, computing and storing it on a miss.

        Args:
            key: Canonical key from make_key()
            factory: Zero-argument callable producing the value

        Returns:
            The cached object (same reference on every hit)
        """
        if not self.enabled:
            self.misses += 1
            return factory()

        if key in self._store:
            self.hits += 1
            return self._store[key]

        self.misses += 1
        value = factory()
        self._store[key] = value
        return value

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        self._store.clear()
        self.hits = 0
        self.misses = 0

    def get_stats(self) -> dict[str, int]:
        return {"entries": len(self._store), "hits": self.hits, "misses": self.misses}
