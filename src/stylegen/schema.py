from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from stylegen.generate.attributes import process_property
from stylegen.exceptions import GenerationError
from stylegen.generate.model import ClassDeclaration, Diagnostic, GenerationResult


class DiagnosticDTO(BaseModel):
    kind: str
    message: str
    path: str
    line: int
    column: int


class PropertyDTO(BaseModel):
    name: str
    value_type: str
    default: str
    fold: Optional[str] = None
    shorthand: bool = False
    variadic: bool = False
    skip: bool = False
    attributes: List[str] = []


class DeclarationDTO(BaseModel):
    name: str
    generic_params: List[str] = []
    properties: List[PropertyDTO] = []
    has_set: bool = False


class InspectResponse(BaseModel):
    path: str
    declarations: List[DeclarationDTO] = []
    diagnostics: List[DiagnosticDTO] = []
    errors: List[str] = []


def diagnostic_dto(diagnostic: Diagnostic) -> DiagnosticDTO:
    return DiagnosticDTO(
        kind=diagnostic.kind.value,
        message=diagnostic.message,
        path=diagnostic.path,
        line=diagnostic.line,
        column=diagnostic.column,
    )


def declaration_dto(declaration: ClassDeclaration) -> DeclarationDTO:
    properties: list[PropertyDTO] = []
    for prop in declaration.properties:
        try:
            processed = process_property(prop)
        except GenerationError:
            # Reported as a diagnostic; keep the raw attributes.
            properties.append(
                PropertyDTO(
                    name=prop.name,
                    value_type=prop.value_type,
                    default=prop.default,
                    attributes=list(prop.attributes),
                )
            )
            continue
        properties.append(
            PropertyDTO(
                name=processed.name,
                value_type=processed.value_type,
                default=processed.default,
                fold=processed.fold,
                shorthand=processed.shorthand,
                variadic=processed.variadic,
                skip=processed.skip,
                attributes=list(processed.extra_attributes),
            )
        )
    return DeclarationDTO(
        name=declaration.name,
        generic_params=list(declaration.generic_params),
        properties=properties,
        has_set=declaration.set is not None,
    )


def inspect_response(path: str, result: GenerationResult) -> InspectResponse:
    return InspectResponse(
        path=path,
        declarations=[declaration_dto(declaration) for declaration in result.declarations],
        diagnostics=[diagnostic_dto(diagnostic) for diagnostic in result.diagnostics],
        errors=list(result.errors),
    )
