from __future__ import annotations

import libcst as cst
import pytest

from stylegen.exceptions import DiagnosticKind, GenerationError
from stylegen.generate.parser import is_marked, parse_declaration, parse_self
from tests.source_helpers import PARA_SOURCE, source


def _class(text: str) -> cst.ClassDef:
    module = cst.parse_module(source(text))
    classes = [stmt for stmt in module.body if isinstance(stmt, cst.ClassDef)]
    return classes[-1]


def _error(text: str) -> GenerationError:
    with pytest.raises(GenerationError) as excinfo:
        parse_declaration(_class(text))
    return excinfo.value


def test_parse_declaration_splits_properties_and_methods() -> None:
    declaration = parse_declaration(_class(PARA_SOURCE))
    assert declaration.name == "Para"
    assert declaration.generic_params == ()
    assert [prop.name for prop in declaration.properties] == [
        "WIDTH",
        "STRONG",
        "GAP",
        "FILL",
        "SPACING_ABOVE",
        "HIDDEN",
    ]
    assert declaration.construct is not None
    assert declaration.set is None
    strong = declaration.properties[1]
    assert strong.value_type == "int"
    assert strong.default == "0"
    assert strong.attributes == ("fold(combine)",)


def test_parse_declaration_is_deterministic() -> None:
    first = parse_declaration(_class(PARA_SOURCE))
    second = parse_declaration(_class(PARA_SOURCE))
    assert first == second
    assert first is not second


def test_parse_self_reads_generic_base() -> None:
    node = _class(
        """
        class Pair(Generic[K, V], Base):
            pass
        """
    )
    assert parse_self(node) == ("Pair", ("K", "V"))


def test_parse_self_reads_type_parameters() -> None:
    node = _class(
        """
        class Pair[K, *Ts, **P]:
            pass
        """
    )
    assert parse_self(node) == ("Pair", ("K", "*Ts", "P"))


@pytest.mark.parametrize(
    "header",
    [
        "class Bad(Generic[list[T]]):",
        "class Bad(Generic[0]):",
        "class Bad(Protocol[T]):",
        "class Bad(typing.Protocol):",
    ],
)
def test_parse_self_rejects_malformed_headers(header: str) -> None:
    with pytest.raises(GenerationError) as excinfo:
        parse_self(_class(f"{header}\n    pass\n"))
    assert excinfo.value.kind is DiagnosticKind.MALFORMED_SELF_TYPE


def test_missing_constructor() -> None:
    error = _error(
        """
        @node_class
        class Para:
            WIDTH: float = 10.0

            @classmethod
            def set(cls, args, styles):
                pass
        """
    )
    assert error.kind is DiagnosticKind.MISSING_CONSTRUCTOR


def test_unexpected_method() -> None:
    error = _error(
        """
        @node_class
        class Para:
            WIDTH: float = 10.0

            def construct(ctx, args):
                pass

            def layout(self):
                pass
        """
    )
    assert error.kind is DiagnosticKind.UNEXPECTED_METHOD
    assert "layout" in error.message


def test_duplicate_method_is_rejected() -> None:
    error = _error(
        """
        class Para:
            def construct(ctx, args):
                pass

            def construct(ctx, args):
                pass
        """
    )
    assert error.kind is DiagnosticKind.UNEXPECTED_METHOD


@pytest.mark.parametrize(
    "item",
    [
        "WIDTH = 10.0",
        "WIDTH: float",
        "class Inner:\n                pass",
        "print('hi')",
        "A: int = 1; B: int = 2",
    ],
)
def test_unexpected_items(item: str) -> None:
    error = _error(
        f"""
        class Para:
            {item}

            def construct(ctx, args):
                pass
        """
    )
    assert error.kind is DiagnosticKind.UNEXPECTED_ITEM


def test_duplicate_property_is_rejected() -> None:
    error = _error(
        """
        class Para:
            WIDTH: float = 1.0
            WIDTH: float = 2.0

            def construct(ctx, args):
                pass
        """
    )
    assert error.kind is DiagnosticKind.UNEXPECTED_ITEM


def test_is_marked_accepts_plain_dotted_and_called_markers() -> None:
    for decorator in ("@node_class", "@runtime.node_class", "@node_class()"):
        node = _class(f"{decorator}\nclass Para:\n    pass\n")
        assert is_marked(node, ("node_class",))
    assert not is_marked(_class("@dataclass\nclass Para:\n    pass\n"), ("node_class",))


def test_parse_self_rejects_parameters_declared_twice() -> None:
    with pytest.raises(GenerationError) as excinfo:
        parse_self(_class("class Bad[T](Generic[T]):\n    pass\n"))
    assert excinfo.value.kind is DiagnosticKind.MALFORMED_SELF_TYPE
