from stylegen.generate.attributes import process_property
from stylegen.generate.engine import GenerationEngine
from stylegen.generate.keys import rewrite_property, synthesize_key
from stylegen.generate.model import (
    ClassDeclaration,
    Diagnostic,
    GenerateConfig,
    GenerationPlan,
    GenerationResult,
    MethodDeclaration,
    ProcessedProperty,
    PropertyDeclaration,
    TextEdit,
)
from stylegen.generate.parser import parse_declaration, parse_self
from stylegen.generate.setter import synthesize_set
from stylegen.generate.wrapper import wrap_declaration

__all__ = [
    "ClassDeclaration",
    "Diagnostic",
    "GenerateConfig",
    "GenerationEngine",
    "GenerationPlan",
    "GenerationResult",
    "MethodDeclaration",
    "ProcessedProperty",
    "PropertyDeclaration",
    "TextEdit",
    "parse_declaration",
    "parse_self",
    "process_property",
    "rewrite_property",
    "synthesize_key",
    "synthesize_set",
    "wrap_declaration",
]
