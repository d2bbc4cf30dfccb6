from __future__ import annotations

from typing import Sequence

import libcst as cst

from stylegen.generate.model import ProcessedProperty, code_of
from stylegen.generate.naming import argument_name

_SEQUENCE_TYPES = {"list", "List", "Sequence", "tuple", "Tuple"}


def _element_type(prop: ProcessedProperty) -> str | None:
    node = prop.declaration.value_type_node if prop.declaration is not None else None
    if not isinstance(node, cst.Subscript) or len(node.slice) != 1:
        return None
    head = node.value
    name = head.attr.value if isinstance(head, cst.Attribute) else getattr(head, "value", None)
    element = node.slice[0].slice
    if name not in _SEQUENCE_TYPES or not isinstance(element, cst.Index):
        return None
    return code_of(element.value)


def _statements(prop: ProcessedProperty) -> list[str]:
    named = f"args.named({argument_name(prop.name)!r}, {prop.value_type})"
    if prop.variadic:
        element = _element_type(prop) or ""
        return [
            f"value = {named}",
            "if value is None:",
            f"    value = args.all({element}) or None",
            f"styles.set_opt(cls.{prop.name}, value)",
        ]
    if prop.shorthand:
        return [
            f"value = {named}",
            "if value is None:",
            f"    value = args.find({prop.value_type})",
            f"styles.set_opt(cls.{prop.name}, value)",
        ]
    return [f"styles.set_opt(cls.{prop.name}, {named})"]


def synthesize_set(properties: Sequence[ProcessedProperty], *, runtime: str) -> cst.FunctionDef:
    """Build the ``set`` method used when a declaration does not supply one.

    Each non-skipped property is read from its named argument first, then
    from the positional arguments when it is variadic or a shorthand. A
    property without a value is left unset.
    """
    body: list[str] = []
    for prop in properties:
        if prop.skip:
            continue
        body.extend(_statements(prop))
    if not body:
        body = ["pass"]
    lines = [
        "@classmethod",
        f"def set(cls, args: {runtime}.Args, styles: {runtime}.StyleMap) -> None:",
        *(f"    {line}" for line in body),
    ]
    method = cst.parse_statement("\n".join(lines) + "\n")
    assert isinstance(method, cst.FunctionDef)
    return method
