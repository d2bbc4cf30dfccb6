from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

import libcst as cst
from libcst.metadata import CodeRange, MetadataWrapper, PositionProvider

from stylegen.exceptions import DiagnosticKind, GenerationError
from stylegen.generate.attributes import process_property
from stylegen.generate.model import (
    ClassDeclaration,
    Diagnostic,
    GenerateConfig,
    GenerationPlan,
    GenerationResult,
    ProcessedProperty,
    TextEdit,
)
from stylegen.generate.naming import namespace_name
from stylegen.generate.parser import is_docstring, is_marked, parse_declaration
from stylegen.generate.wrapper import wrap_declaration

logger = logging.getLogger(__name__)


def _is_import(stmt: cst.CSTNode) -> bool:
    if not isinstance(stmt, cst.SimpleStatementLine):
        return False
    return any(isinstance(item, (cst.Import, cst.ImportFrom)) for item in stmt.body)


def _find_import_insert_index(body: list[cst.BaseStatement]) -> int:
    insert_idx = 0
    if body and is_docstring(body[0]):
        insert_idx = 1
    while insert_idx < len(body) and _is_import(body[insert_idx]):
        insert_idx += 1
    return insert_idx


def _module_expr_to_str(expr: cst.BaseExpression | None) -> str | None:
    if isinstance(expr, cst.Name):
        return expr.value
    if isinstance(expr, cst.Attribute):
        parts = []
        current: cst.BaseExpression | None = expr
        while isinstance(current, cst.Attribute):
            parts.append(current.attr.value)
            current = current.value
        if isinstance(current, cst.Name):
            parts.append(current.value)
            return ".".join(reversed(parts))
    return None


def _has_module_import(body: list[cst.BaseStatement], module_name: str) -> bool:
    for stmt in body:
        if not isinstance(stmt, cst.SimpleStatementLine):
            continue
        for item in stmt.body:
            if not isinstance(item, cst.Import):
                continue
            for alias in item.names:
                if alias.asname is None and _module_expr_to_str(alias.name) == module_name:
                    return True
    return False


def _ensure_runtime_import(module: cst.Module, runtime: str) -> cst.Module:
    body = list(module.body)
    if _has_module_import(body, runtime):
        return module
    import_stmt = cst.SimpleStatementLine(
        [cst.Import(names=[cst.ImportAlias(name=cst.parse_expression(runtime))])]
    )
    body.insert(_find_import_insert_index(body), import_stmt)
    return module.with_changes(body=body)


def _bound_names(body: list[cst.BaseStatement]) -> set[str]:
    names: set[str] = set()
    for stmt in body:
        if isinstance(stmt, (cst.ClassDef, cst.FunctionDef)):
            names.add(stmt.name.value)
            continue
        if not isinstance(stmt, cst.SimpleStatementLine):
            continue
        for item in stmt.body:
            if isinstance(item, cst.Assign):
                names.update(
                    target.target.value
                    for target in item.targets
                    if isinstance(target.target, cst.Name)
                )
            elif isinstance(item, cst.AnnAssign) and isinstance(item.target, cst.Name):
                names.add(item.target.value)
            elif isinstance(item, (cst.Import, cst.ImportFrom)) and not isinstance(
                item.names, cst.ImportStar
            ):
                for alias in item.names:
                    if alias.asname is not None and isinstance(alias.asname.name, cst.Name):
                        names.add(alias.asname.name.value)
                    else:
                        dotted = _module_expr_to_str(alias.name) or ""
                        names.add(dotted.split(".")[0])
    return names


class _NestedMarkedClasses(cst.CSTVisitor):
    """Collects marked classes that are not statements of the module body."""

    def __init__(self, markers: Sequence[str], top_level: Sequence[cst.BaseStatement]) -> None:
        self.markers = markers
        self.top_level = {id(statement) for statement in top_level}
        self.found: list[cst.ClassDef] = []

    def visit_ClassDef(self, node: cst.ClassDef) -> bool:
        if not is_marked(node, self.markers):
            return True
        if id(node) not in self.top_level:
            self.found.append(node)
        return False


class GenerationEngine:
    def __init__(self, config: GenerateConfig | None = None, project_root: Path | None = None) -> None:
        self.config = config or GenerateConfig()
        self.project_root = project_root

    def expand_source(self, source: str, *, path: str = "<string>") -> GenerationResult:
        """Expand every marked class of a module.

        A declaration that fails is reported and left as written; the other
        declarations of the module are still expanded.
        """
        try:
            module = cst.parse_module(source)
        except cst.ParserSyntaxError as exc:
            return GenerationResult(code=source, errors=[f"LibCST parse failed for {path}: {exc}"])
        wrapper = MetadataWrapper(module)
        positions = wrapper.resolve(PositionProvider)
        module = wrapper.module

        result = GenerationResult(code=source)
        existing = _bound_names(list(module.body))
        new_body: list[cst.BaseStatement] = []
        expanded = 0
        for statement in module.body:
            if not isinstance(statement, cst.ClassDef) or not is_marked(
                statement, self.config.markers
            ):
                new_body.append(statement)
                continue
            replacement = self._expand(statement, result, positions, path, existing)
            if replacement is None:
                new_body.append(statement)
                continue
            new_body.extend(replacement)
            expanded += 1

        nested = _NestedMarkedClasses(self.config.markers, module.body)
        module.visit(nested)
        for node in nested.found:
            error = GenerationError(
                DiagnosticKind.UNEXPECTED_ITEM,
                f"marked class {node.name.value!r} must be defined at module level",
                node,
            )
            result.diagnostics.append(self._diagnostic(error, node, positions, path))

        if expanded:
            new_module = _ensure_runtime_import(
                module.with_changes(body=new_body), self.config.runtime_module
            )
            result.code = new_module.code
        logger.info(
            "expanded %d declaration(s) in %s with %d diagnostic(s)",
            expanded,
            path,
            len(result.diagnostics),
        )
        return result

    def _expand(
        self,
        node: cst.ClassDef,
        result: GenerationResult,
        positions: Mapping[cst.CSTNode, CodeRange],
        path: str,
        existing: set[str],
    ) -> list[cst.BaseStatement] | None:
        logger.debug("expanding %s", node.name.value)
        try:
            declaration = parse_declaration(node)
        except GenerationError as exc:
            result.diagnostics.append(self._diagnostic(exc, node, positions, path))
            return None
        result.declarations.append(declaration)

        properties: list[ProcessedProperty] = []
        failed = False
        for prop in declaration.properties:
            try:
                properties.append(process_property(prop))
            except GenerationError as exc:
                result.diagnostics.append(self._diagnostic(exc, node, positions, path))
                failed = True
        if failed:
            return None

        namespace = namespace_name(declaration.name, self.config.namespace_suffix, existing)
        existing.add(namespace)
        logger.debug(
            "%s: %d key(s) in %s, %s set method",
            declaration.name,
            len(properties),
            namespace,
            "explicit" if declaration.set is not None else "generated",
        )
        return wrap_declaration(declaration, properties, namespace=namespace, config=self.config)

    def _diagnostic(
        self,
        exc: GenerationError,
        fallback: cst.CSTNode,
        positions: Mapping[cst.CSTNode, CodeRange],
        path: str,
    ) -> Diagnostic:
        code_range = None
        if exc.node is not None:
            code_range = positions.get(exc.node)
        if code_range is None:
            code_range = positions.get(fallback)
        line, column = (0, 0)
        if code_range is not None:
            line, column = code_range.start.line, code_range.start.column + 1
        return Diagnostic(kind=exc.kind, message=exc.message, path=path, line=line, column=column)

    def parse_source(self, source: str, *, path: str = "<string>") -> list[ClassDeclaration]:
        return self.expand_source(source, path=path).declarations

    def plan_file(self, path: Path) -> GenerationPlan:
        if self.project_root and not path.is_absolute():
            path = self.project_root / path
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            return GenerationPlan(errors=[f"Failed to read {path}: {exc}"])
        result = self.expand_source(source, path=str(path))
        plan = GenerationPlan(
            declarations=result.declarations,
            diagnostics=result.diagnostics,
            errors=result.errors,
        )
        if result.code == source:
            if not result.declarations and not result.diagnostics and not result.errors:
                plan.warnings.append(f"No marked declarations in {path}.")
            return plan
        end_line = len(source.splitlines())
        plan.edits.append(
            TextEdit(path=str(path), start=(0, 0), end=(end_line, 0), replacement=result.code)
        )
        return plan
