from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import libcst as cst

from stylegen.exceptions import DiagnosticKind

Position = Tuple[int, int]

_EMPTY_MODULE = cst.Module(body=[])


def code_of(node: cst.CSTNode) -> str:
    return _EMPTY_MODULE.code_for_node(node)


@dataclass(frozen=True)
class MethodDeclaration:
    name: str
    source: str
    node: cst.FunctionDef = field(compare=False, repr=False)


@dataclass(frozen=True)
class PropertyDeclaration:
    name: str
    value_type: str
    default: str
    attributes: Tuple[str, ...] = ()
    statement: Optional[cst.SimpleStatementLine] = field(default=None, compare=False, repr=False)
    annotation: Optional[cst.BaseExpression] = field(default=None, compare=False, repr=False)
    value_type_node: Optional[cst.BaseExpression] = field(default=None, compare=False, repr=False)
    default_node: Optional[cst.BaseExpression] = field(default=None, compare=False, repr=False)
    attribute_elements: Tuple[cst.SubscriptElement, ...] = field(
        default=(), compare=False, repr=False
    )


@dataclass(frozen=True)
class ClassDeclaration:
    name: str
    generic_params: Tuple[str, ...] = ()
    properties: Tuple[PropertyDeclaration, ...] = ()
    construct: Optional[MethodDeclaration] = None
    set: Optional[MethodDeclaration] = None
    node: Optional[cst.ClassDef] = field(default=None, compare=False, repr=False)

    @property
    def uses_type_parameters(self) -> bool:
        return self.node is not None and self.node.type_parameters is not None


@dataclass(frozen=True)
class ProcessedProperty:
    name: str
    value_type: str
    default: str
    fold: Optional[str] = None
    shorthand: bool = False
    variadic: bool = False
    skip: bool = False
    extra_attributes: Tuple[str, ...] = ()
    declaration: Optional[PropertyDeclaration] = field(default=None, compare=False, repr=False)
    extra_elements: Tuple[cst.SubscriptElement, ...] = field(
        default=(), compare=False, repr=False
    )

    @property
    def folding(self) -> bool:
        return self.fold is not None


@dataclass(frozen=True)
class GenerateConfig:
    markers: Tuple[str, ...] = ("node_class",)
    namespace_suffix: str = "_types"
    runtime_module: str = "stylegen.runtime"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    path: str = "<string>"
    line: int = 0
    column: int = 0

    def render(self) -> str:
        return f"{self.path}:{self.line}:{self.column}: {self.kind.value}: {self.message}"


@dataclass(frozen=True)
class TextEdit:
    path: str
    start: Position
    end: Position
    replacement: str


@dataclass
class GenerationResult:
    code: str
    declarations: List[ClassDeclaration] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics and not self.errors


@dataclass
class GenerationPlan:
    edits: List[TextEdit] = field(default_factory=list)
    declarations: List[ClassDeclaration] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
