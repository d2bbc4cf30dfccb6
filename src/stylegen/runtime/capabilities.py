"""Capabilities implemented by generated node classes and property keys."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from stylegen.runtime.args import Args
    from stylegen.runtime.styles import StyleMap

V = TypeVar("V")


class Property(Generic[V]):
    """Base of every generated property key.

    A key has no state of its own. Two keys are equal exactly when they are
    instances of the same generated type, so copying a key only ever copies
    the identity of a style slot.
    """

    __slots__ = ()

    NAME: ClassVar[str] = ""
    FOLDING: ClassVar[bool] = False

    @classmethod
    def node_id(cls) -> type:
        raise NotImplementedError(f"{cls.__qualname__} does not name its node")

    @classmethod
    def default(cls) -> V:
        raise NotImplementedError(f"{cls.__qualname__} has no default")

    @classmethod
    def default_ref(cls) -> V:
        return cls.default()

    @classmethod
    def fold(cls, inner: V, outer: V) -> V:
        return inner

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __copy__(self) -> Property[V]:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> Property[V]:
        return self

    def __repr__(self) -> str:
        return self.NAME or type(self).__qualname__


class Nonfolding:
    """Marker for keys whose values are overwritten, never merged."""

    __slots__ = ()


class Construct:
    @classmethod
    def construct(cls, ctx: object, args: Args) -> object:
        raise NotImplementedError(f"{cls.__qualname__} cannot be constructed")


class Set:
    @classmethod
    def set(cls, args: Args, styles: StyleMap) -> None:
        raise NotImplementedError(f"{cls.__qualname__} has no style setter")
