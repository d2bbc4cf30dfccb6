from __future__ import annotations

import libcst as cst

from stylegen.generate.model import ClassDeclaration, ProcessedProperty, code_of
from stylegen.generate.naming import display_name, key_path


def _key_bases(prop: ProcessedProperty, owner: ClassDeclaration, runtime: str) -> list[str]:
    bases = [f"{runtime}.Property[{prop.value_type}]"]
    if not prop.folding:
        bases.append(f"{runtime}.Nonfolding")
    if owner.generic_params and not owner.uses_type_parameters:
        bases.append(f"{runtime}.Generic[{', '.join(owner.generic_params)}]")
    return bases


def _key_source(prop: ProcessedProperty, owner: ClassDeclaration, runtime: str) -> str:
    type_params = ""
    if owner.uses_type_parameters:
        type_params = code_of(owner.node.type_parameters)
    value_type = prop.value_type
    lines = [
        f"class Key{type_params}({', '.join(_key_bases(prop, owner, runtime))}):",
        "    __slots__ = ()",
        "",
        f"    NAME = {display_name(owner.name, prop.name)!r}",
    ]
    if prop.folding:
        lines.append("    FOLDING = True")
    lines += [
        f"    _default_cell = {runtime}.Lazy(lambda: ({prop.default}))",
        "",
        "    @classmethod",
        "    def node_id(cls) -> type:",
        f"        return {owner.name}",
        "",
        "    @classmethod",
        f"    def default(cls) -> {value_type}:",
        f"        return ({prop.default})",
        "",
        "    @classmethod",
        f"    def default_ref(cls) -> {value_type}:",
        "        return cls._default_cell.force()",
    ]
    if prop.folding:
        lines += [
            "",
            "    @classmethod",
            f"    def fold(cls, inner: {value_type}, outer: {value_type}) -> {value_type}:",
            f"        return ({prop.fold})(inner, outer)",
        ]
    return "\n".join(lines) + "\n"


def synthesize_key(
    prop: ProcessedProperty,
    owner: ClassDeclaration,
    *,
    runtime: str,
    leading_lines: tuple[cst.EmptyLine, ...] = (),
) -> cst.ClassDef:
    """Build the namespace class holding the key type of one property."""
    key = cst.parse_statement(_key_source(prop, owner, runtime))
    return cst.ClassDef(
        name=cst.Name(prop.name),
        body=cst.IndentedBlock(body=[key]),
        leading_lines=leading_lines,
    )


def key_annotation(prop: ProcessedProperty, owner: ClassDeclaration, namespace: str) -> str:
    path = key_path(namespace, prop.name)
    if not owner.generic_params:
        return path
    return f"{path}[{', '.join(owner.generic_params)}]"


def rewrite_property(
    prop: ProcessedProperty, owner: ClassDeclaration, namespace: str
) -> cst.SimpleStatementLine:
    """Turn ``NAME: V = default`` into ``NAME: <key type> = <key>()``.

    Unrecognized ``Annotated`` metadata stays on the rewritten annotation.
    """
    statement = prop.declaration.statement
    small = statement.body[0]
    annotation: cst.BaseExpression = cst.parse_expression(key_annotation(prop, owner, namespace))
    original = prop.declaration.annotation
    if prop.extra_elements and isinstance(original, cst.Subscript):
        first = original.slice[0]
        *kept, last = prop.extra_elements
        annotation = original.with_changes(
            slice=[
                first.with_changes(slice=cst.Index(value=annotation)),
                *kept,
                last.with_changes(comma=cst.MaybeSentinel.DEFAULT),
            ]
        )
    value = cst.parse_expression(f"{key_path(namespace, prop.name)}()")
    small = small.with_changes(
        annotation=small.annotation.with_changes(annotation=annotation),
        value=value,
    )
    return statement.with_changes(body=[small])
