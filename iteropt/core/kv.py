"""Ordered key/value records attached to iterations for reporting."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional, Tuple


class KV:
    """Ordered list of ``(key, value)`` pairs.

    Insertion order is preserved and keys are not required to be unique.

    Example:
        >>> kv = KV([("alpha", 0.5)]).push("iter", 3)
        >>> kv.keys()
        ['alpha', 'iter']
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[str, Any]]] = None) -> None:
        self.kv: List[Tuple[str, Any]] = list(pairs) if pairs is not None else []

    def push(self, key: str, value: Any) -> "KV":
        """Append a pair and return ``self`` for chaining."""
        self.kv.append((key, value))
        return self

    def merge(self, other: Optional["KV"]) -> "KV":
        """Append all pairs of ``other`` (if any) and return ``self``."""
        if other is not None:
            self.kv.extend(other.kv)
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the first pair named ``key``."""
        for k, v in self.kv:
            if k == key:
                return v
        return default

    def keys(self) -> List[str]:
        return [k for k, _ in self.kv]

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.kv)

    def __len__(self) -> int:
        return len(self.kv)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KV):
            return NotImplemented
        return self.kv == other.kv

    def __repr__(self) -> str:
        return f"KV({self.kv!r})"

    def __str__(self) -> str:
        return ", ".join(f"{k}: {v}" for k, v in self.kv)


def make_kv(**pairs: Any) -> KV:
    """Build a :class:`KV` from keyword arguments, keeping their order."""
    return KV(pairs.items())


__all__ = ["KV", "make_kv"]
