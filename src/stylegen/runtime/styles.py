from __future__ import annotations

from typing import Any, Iterator, TypeVar

from stylegen.runtime.capabilities import Nonfolding, Property

V = TypeVar("V")


class StyleMap:
    """Values of style properties, keyed by generated property keys."""

    def __init__(self) -> None:
        self._entries: dict[Property[Any], Any] = {}

    def set(self, key: Property[V], value: V) -> None:
        self._entries[key] = value

    def set_opt(self, key: Property[V], value: V | None) -> None:
        if value is not None:
            self.set(key, value)

    def get(self, key: Property[V]) -> V:
        if key in self._entries:
            return self._entries[key]
        return key.default_ref()

    def contains(self, key: Property[Any]) -> bool:
        return key in self._entries

    def for_node(self, node: type) -> StyleMap:
        """The entries whose keys belong to ``node``."""
        scoped = StyleMap()
        scoped._entries = {
            key: value for key, value in self._entries.items() if key.node_id() is node
        }
        return scoped

    def chain(self, outer: StyleMap) -> StyleMap:
        """Layer this map over ``outer``.

        Foldable keys set in both maps are merged with the key's fold, with
        this map's value as the inner one. Other keys are overwritten.
        """
        merged = StyleMap()
        merged._entries = dict(outer._entries)
        for key, value in self._entries.items():
            if key in merged._entries and key.FOLDING and not isinstance(key, Nonfolding):
                merged._entries[key] = key.fold(value, merged._entries[key])
            else:
                merged._entries[key] = value
        return merged

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[Property[Any]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        parts = [f"{key!r}: {value!r}" for key, value in self._entries.items()]
        return f"StyleMap({{{', '.join(parts)}}})"
