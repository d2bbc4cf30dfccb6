from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Annotated, Any, Iterable, Literal, Mapping, TypeVar, Union, get_args, get_origin


class ArgumentError(ValueError):
    """Raised when an argument cannot be read as the requested type."""


@dataclass(frozen=True)
class Arg:
    value: object
    name: str | None = None


def accepts(value: object, expected: object) -> bool:
    """Check ``value`` against a runtime type expression.

    Forward references, type variables and other expressions that cannot be
    checked at runtime accept every value.
    """
    if expected is None or expected is Any or expected is object:
        return True
    if isinstance(expected, (str, TypeVar)):
        return True
    origin = get_origin(expected)
    if origin is Union or origin is types.UnionType:
        return any(accepts(value, option) for option in get_args(expected))
    if origin is Literal:
        return value in get_args(expected)
    if origin is Annotated:
        return accepts(value, get_args(expected)[0])
    if origin is not None:
        expected = origin
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return True
    try:
        return isinstance(value, expected)  # type: ignore[arg-type]
    except TypeError:
        return True


def _type_name(expected: object) -> str:
    if isinstance(expected, type):
        return expected.__name__
    return str(expected)


class Args:
    """An argument list with named, positional and collecting access.

    Reading an argument consumes it, so whatever is left after the setters ran
    was not understood by anyone.
    """

    def __init__(self, items: Iterable[Arg] = ()) -> None:
        self.items: list[Arg] = list(items)

    @classmethod
    def of(cls, *positional: object, named: Mapping[str, object] | None = None) -> Args:
        items = [Arg(value) for value in positional]
        items.extend(Arg(value, name) for name, value in (named or {}).items())
        return cls(items)

    def named(self, name: str, expected: object = None) -> Any:
        """Remove every argument called ``name`` and return the last one."""
        matches = [item for item in self.items if item.name == name]
        if not matches:
            return None
        self.items = [item for item in self.items if item.name != name]
        value = matches[-1].value
        if not accepts(value, expected):
            raise ArgumentError(
                f"expected {_type_name(expected)} for argument {name!r}, "
                f"found {type(value).__name__}"
            )
        return value

    def find(self, expected: object = None) -> Any:
        """Remove and return the first positional argument of a type."""
        for index, item in enumerate(self.items):
            if item.name is None and accepts(item.value, expected):
                del self.items[index]
                return item.value
        return None

    def all(self, expected: object = None) -> list[Any]:
        """Remove and return every positional argument of a type."""
        taken = [
            item.value
            for item in self.items
            if item.name is None and accepts(item.value, expected)
        ]
        self.items = [
            item
            for item in self.items
            if item.name is not None or not accepts(item.value, expected)
        ]
        return taken

    def finish(self) -> None:
        if not self.items:
            return
        item = self.items[0]
        if item.name is None:
            raise ArgumentError(f"unexpected argument {item.value!r}")
        raise ArgumentError(f"unexpected argument {item.name!r}")

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        parts = [
            repr(item.value) if item.name is None else f"{item.name}: {item.value!r}"
            for item in self.items
        ]
        return f"Args({', '.join(parts)})"
