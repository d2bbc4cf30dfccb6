"""Errors raised while expanding a node class declaration."""

from __future__ import annotations

from enum import Enum

import libcst as cst


class DiagnosticKind(str, Enum):
    UNEXPECTED_ITEM = "UnexpectedItem"
    UNEXPECTED_METHOD = "UnexpectedMethod"
    MISSING_CONSTRUCTOR = "MissingConstructor"
    CONFLICTING_ATTRIBUTES = "ConflictingAttributes"
    MALFORMED_SELF_TYPE = "MalformedSelfType"
    MALFORMED_ATTRIBUTE = "MalformedAttribute"


class GenerationError(Exception):
    """A declaration that cannot be expanded.

    ``node`` is the offending piece of the declaration; the engine turns it
    into a source position when it reports the error.
    """

    def __init__(self, kind: DiagnosticKind, message: str, node: cst.CSTNode | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.node = node

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
