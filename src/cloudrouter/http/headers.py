"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Built from the ``headers`` (and,
when the gateway sends it, ``multiValueHeaders``) fields of a
URL-triggered event.
"""

from collections.abc import Iterator, Mapping
from typing import Any


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: tuple[tuple[str, str], ...] = ()) -> None:
        object.__setattr__(self, "_pairs", tuple((name.lower(), value) for name, value in pairs))

    @classmethod
    def from_event(
        cls,
        headers: Mapping[str, Any] | None,
        multi_value: Mapping[str, Any] | None = None,
    ) -> "Headers":
        """Build headers from an event's header mappings.

        Values from ``multi_value`` take precedence for the names they
        cover; list values expand into repeated headers.
        """
        pairs: list[tuple[str, str]] = []
        covered: set[str] = set()
        for name, values in (multi_value or {}).items():
            covered.add(name.lower())
            if isinstance(values, (list, tuple)):
                pairs.extend((name, str(v)) for v in values)
            else:
                pairs.append((name, str(values)))
        for name, value in (headers or {}).items():
            if name.lower() in covered or value is None:
                continue
            pairs.append((name, str(value)))
        return cls(tuple(pairs))

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._pairs:
            if name == key_lower:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name == key_lower for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._pairs:
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._pairs if name == key_lower]

    @property
    def content_type(self) -> str:
        """Media type without parameters, lower-cased (``""`` if absent)."""
        value = self.get("content-type") or ""
        return value.split(";", 1)[0].strip().lower()
