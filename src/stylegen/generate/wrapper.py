from __future__ import annotations

from typing import Sequence

import libcst as cst

from stylegen.generate.keys import rewrite_property, synthesize_key
from stylegen.generate.model import ClassDeclaration, GenerateConfig, ProcessedProperty
from stylegen.generate.parser import marker_decorator
from stylegen.generate.setter import synthesize_set

_CAPABILITIES = ("Construct", "Set")


def _base_names(node: cst.ClassDef) -> set[str]:
    names: set[str] = set()
    for base in node.bases:
        value = base.value
        if isinstance(value, cst.Name):
            names.add(value.value)
        elif isinstance(value, cst.Attribute):
            names.add(value.attr.value)
    return names


def _namespace_class(
    declaration: ClassDeclaration,
    properties: Sequence[ProcessedProperty],
    *,
    namespace: str,
    runtime: str,
) -> cst.ClassDef:
    doc = cst.SimpleStatementLine(
        [cst.Expr(cst.SimpleString(f'"""Property keys of {declaration.name}."""'))]
    )
    keys = [
        synthesize_key(prop, declaration, runtime=runtime, leading_lines=(cst.EmptyLine(),))
        for prop in properties
    ]
    return cst.ClassDef(
        name=cst.Name(namespace),
        body=cst.IndentedBlock(body=[doc, *keys]),
        leading_lines=declaration.node.leading_lines,
    )


def _rewritten_class(
    declaration: ClassDeclaration,
    properties: Sequence[ProcessedProperty],
    *,
    namespace: str,
    config: GenerateConfig,
) -> cst.ClassDef:
    node = declaration.node
    runtime = config.runtime_module
    rewritten = {
        id(prop.declaration.statement): rewrite_property(prop, declaration, namespace)
        for prop in properties
    }
    body = [rewritten.get(id(statement), statement) for statement in node.body.body]
    if declaration.set is None:
        method = synthesize_set(properties, runtime=runtime)
        body.append(method.with_changes(leading_lines=[cst.EmptyLine()]))

    present = _base_names(node)
    bases = list(node.bases)
    for capability in _CAPABILITIES:
        if capability not in present:
            bases.append(cst.Arg(value=cst.parse_expression(f"{runtime}.{capability}")))

    return node.with_changes(
        decorators=[
            decorator
            for decorator in node.decorators
            if not marker_decorator(decorator, config.markers)
        ],
        bases=bases,
        body=node.body.with_changes(body=body),
        leading_lines=[cst.EmptyLine(), cst.EmptyLine()],
    )


def wrap_declaration(
    declaration: ClassDeclaration,
    properties: Sequence[ProcessedProperty],
    *,
    namespace: str,
    config: GenerateConfig,
) -> list[cst.BaseStatement]:
    """The statements that replace a marked class in its module.

    The namespace class comes first so that the class body of the node can
    create its keys; the keys only look the node up when they are used.
    """
    return [
        _namespace_class(
            declaration, properties, namespace=namespace, runtime=config.runtime_module
        ),
        _rewritten_class(declaration, properties, namespace=namespace, config=config),
    ]
