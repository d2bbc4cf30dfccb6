from __future__ import annotations

from typing import Sequence

import libcst as cst

from stylegen.exceptions import DiagnosticKind, GenerationError
from stylegen.generate.model import (
    ClassDeclaration,
    MethodDeclaration,
    PropertyDeclaration,
    code_of,
)

_GENERIC_BASES = {"Generic"}
_RECOGNIZED_METHODS = ("construct", "set")


def tail_name(expr: cst.BaseExpression) -> str | None:
    if isinstance(expr, cst.Name):
        return expr.value
    if isinstance(expr, cst.Attribute):
        return expr.attr.value
    return None


def is_docstring(stmt: cst.CSTNode) -> bool:
    if not isinstance(stmt, cst.SimpleStatementLine) or not stmt.body:
        return False
    expr = stmt.body[0]
    return isinstance(expr, cst.Expr) and isinstance(
        expr.value, (cst.SimpleString, cst.ConcatenatedString)
    )


def is_marked(node: cst.ClassDef, markers: Sequence[str]) -> bool:
    return any(marker_decorator(decorator, markers) for decorator in node.decorators)


def marker_decorator(decorator: cst.Decorator, markers: Sequence[str]) -> bool:
    expr = decorator.decorator
    if isinstance(expr, cst.Call):
        expr = expr.func
    return tail_name(expr) in markers


def _generic_argument(element: cst.SubscriptElement) -> str:
    index = element.slice
    if not isinstance(index, cst.Index):
        raise GenerationError(
            DiagnosticKind.MALFORMED_SELF_TYPE,
            "generic arguments must be type variables",
            element,
        )
    value = index.value
    if isinstance(value, cst.Name):
        return ("*" if getattr(index, "star", None) else "") + value.value
    if (
        isinstance(value, cst.Subscript)
        and tail_name(value.value) == "Unpack"
        and len(value.slice) == 1
        and isinstance(value.slice[0].slice, cst.Index)
        and isinstance(value.slice[0].slice.value, cst.Name)
    ):
        return code_of(value)
    raise GenerationError(
        DiagnosticKind.MALFORMED_SELF_TYPE,
        f"generic argument {code_of(value)!r} is not a type variable",
        value,
    )


def _type_parameter(param: cst.TypeParam) -> str:
    inner = param.param
    if isinstance(inner, cst.TypeVarTuple):
        return f"*{inner.name.value}"
    return inner.name.value


def parse_self(node: cst.ClassDef) -> tuple[str, tuple[str, ...]]:
    """Split the class header into its name and generic parameters."""
    params: list[str] = []
    if node.type_parameters is not None:
        params.extend(_type_parameter(param) for param in node.type_parameters.params)
    for base in node.bases:
        value = base.value
        head = value.value if isinstance(value, cst.Subscript) else value
        if tail_name(head) == "Protocol":
            raise GenerationError(
                DiagnosticKind.MALFORMED_SELF_TYPE,
                f"{node.name.value} cannot derive from Protocol",
                value,
            )
        if not isinstance(value, cst.Subscript) or tail_name(value.value) not in _GENERIC_BASES:
            continue
        if node.type_parameters is not None:
            raise GenerationError(
                DiagnosticKind.MALFORMED_SELF_TYPE,
                "generic parameters are declared twice",
                value,
            )
        params.extend(_generic_argument(element) for element in value.slice)
    return node.name.value, tuple(params)


def _split_annotation(
    annotation: cst.BaseExpression,
) -> tuple[cst.BaseExpression, tuple[cst.SubscriptElement, ...]]:
    if not isinstance(annotation, cst.Subscript) or tail_name(annotation.value) != "Annotated":
        return annotation, ()
    first, *rest = annotation.slice
    if not isinstance(first.slice, cst.Index):
        return annotation, ()
    return first.slice.value, tuple(rest)


def _parse_property(statement: cst.BaseStatement) -> PropertyDeclaration:
    if not isinstance(statement, cst.SimpleStatementLine) or len(statement.body) != 1:
        raise GenerationError(
            DiagnosticKind.UNEXPECTED_ITEM,
            "expected a property declaration or a construct/set method",
            statement,
        )
    small = statement.body[0]
    if not isinstance(small, cst.AnnAssign) or not isinstance(small.target, cst.Name):
        raise GenerationError(
            DiagnosticKind.UNEXPECTED_ITEM,
            "expected a property declaration or a construct/set method",
            statement,
        )
    if small.value is None:
        raise GenerationError(
            DiagnosticKind.UNEXPECTED_ITEM,
            f"property {small.target.value!r} has no default value",
            statement,
        )
    value_type, attributes = _split_annotation(small.annotation.annotation)
    return PropertyDeclaration(
        name=small.target.value,
        value_type=code_of(value_type),
        default=code_of(small.value),
        attributes=tuple(code_of(element.slice) for element in attributes),
        statement=statement,
        annotation=small.annotation.annotation,
        value_type_node=value_type,
        default_node=small.value,
        attribute_elements=attributes,
    )


def _method(node: cst.FunctionDef) -> MethodDeclaration:
    return MethodDeclaration(name=node.name.value, source=code_of(node), node=node)


def parse_declaration(node: cst.ClassDef) -> ClassDeclaration:
    """Read a marked class into its declaration.

    Raises ``GenerationError`` for the first item that is neither a property
    nor one of the recognized methods, and when ``construct`` is missing.
    """
    name, generic_params = parse_self(node)
    properties: list[PropertyDeclaration] = []
    methods: dict[str, MethodDeclaration] = {}
    seen: set[str] = set()

    body = node.body.body if isinstance(node.body, cst.IndentedBlock) else ()
    for index, statement in enumerate(body):
        if index == 0 and is_docstring(statement):
            continue
        if isinstance(statement, cst.FunctionDef):
            method_name = statement.name.value
            if method_name not in _RECOGNIZED_METHODS:
                raise GenerationError(
                    DiagnosticKind.UNEXPECTED_METHOD,
                    f"unexpected method {method_name!r}, only 'construct' and 'set' are allowed",
                    statement,
                )
            if method_name in methods:
                raise GenerationError(
                    DiagnosticKind.UNEXPECTED_METHOD,
                    f"method {method_name!r} is declared twice",
                    statement,
                )
            methods[method_name] = _method(statement)
            continue
        prop = _parse_property(statement)
        if prop.name in seen:
            raise GenerationError(
                DiagnosticKind.UNEXPECTED_ITEM,
                f"property {prop.name!r} is declared twice",
                statement,
            )
        seen.add(prop.name)
        properties.append(prop)

    if "construct" not in methods:
        raise GenerationError(
            DiagnosticKind.MISSING_CONSTRUCTOR,
            f"{name} has no construct method",
            node,
        )

    return ClassDeclaration(
        name=name,
        generic_params=generic_params,
        properties=tuple(properties),
        construct=methods["construct"],
        set=methods.get("set"),
        node=node,
    )
