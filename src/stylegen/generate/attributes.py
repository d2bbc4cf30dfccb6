from __future__ import annotations

import libcst as cst

from stylegen.exceptions import DiagnosticKind, GenerationError
from stylegen.generate.model import ProcessedProperty, PropertyDeclaration, code_of
from stylegen.generate.parser import tail_name

_FLAGS = ("shorthand", "variadic", "skip")


def _fold_combinator(attr: cst.BaseExpression) -> cst.BaseExpression | None:
    if not isinstance(attr, cst.Call):
        return None
    if tail_name(attr.func) != "fold":
        return None
    if len(attr.args) != 1 or attr.args[0].keyword is not None or attr.args[0].star:
        raise GenerationError(
            DiagnosticKind.MALFORMED_ATTRIBUTE,
            "fold takes exactly one positional combinator",
            attr,
        )
    return attr.args[0].value


def process_property(prop: PropertyDeclaration) -> ProcessedProperty:
    """Interpret the ``Annotated`` metadata of a property, in written order."""
    fold: str | None = None
    flags = dict.fromkeys(_FLAGS, False)
    extras: list[cst.SubscriptElement] = []

    for element in prop.attribute_elements:
        attr = element.slice.value if isinstance(element.slice, cst.Index) else None
        if attr is None:
            extras.append(element)
            continue
        combinator = _fold_combinator(attr)
        if combinator is not None:
            fold = code_of(combinator)
        elif tail_name(attr) in flags:
            flags[tail_name(attr)] = True
        else:
            extras.append(element)

    if flags["shorthand"] and flags["variadic"]:
        raise GenerationError(
            DiagnosticKind.CONFLICTING_ATTRIBUTES,
            f"shorthand and variadic are mutually exclusive on {prop.name!r}",
            prop.statement,
        )

    return ProcessedProperty(
        name=prop.name,
        value_type=prop.value_type,
        default=prop.default,
        fold=fold,
        shorthand=flags["shorthand"],
        variadic=flags["variadic"],
        skip=flags["skip"],
        extra_attributes=tuple(code_of(element.slice) for element in extras),
        declaration=prop,
        extra_elements=tuple(extras),
    )
