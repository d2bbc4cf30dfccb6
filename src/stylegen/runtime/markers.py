"""Declaration markers.

They only exist so that declaration files import cleanly before generation;
the generator reads them from the source text and removes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

C = TypeVar("C", bound=type)


def node_class(cls: C) -> C:
    return cls


@dataclass(frozen=True)
class fold:
    combinator: Callable[[Any, Any], Any]


@dataclass(frozen=True)
class _Flag:
    name: str

    def __repr__(self) -> str:
        return self.name


shorthand = _Flag("shorthand")
variadic = _Flag("variadic")
skip = _Flag("skip")
