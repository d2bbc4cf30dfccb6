"""Runtime collaborators referenced by generated code."""

from typing import Generic

from stylegen.runtime.args import Arg, ArgumentError, Args, accepts
from stylegen.runtime.capabilities import Construct, Nonfolding, Property, Set
from stylegen.runtime.lazy import Lazy
from stylegen.runtime.markers import fold, node_class, shorthand, skip, variadic
from stylegen.runtime.styles import StyleMap

__all__ = [
    "Arg",
    "ArgumentError",
    "Args",
    "Construct",
    "Generic",
    "Lazy",
    "Nonfolding",
    "Property",
    "Set",
    "StyleMap",
    "accepts",
    "fold",
    "node_class",
    "shorthand",
    "skip",
    "variadic",
]
