from __future__ import annotations

from pathlib import Path
import textwrap

from stylegen.config import generate_config, generate_defaults, load_config, merge_payload
from stylegen.generate import GenerateConfig


def test_generate_defaults_reads_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "stylegen.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            [generate]
            markers = ["node_class", "elem"]
            namespace_suffix = "Keys"
            runtime_module = "mydoc.runtime"
            """
        ).strip()
        + "\n"
    )
    defaults = generate_defaults(root=tmp_path)
    assert defaults["markers"] == ["node_class", "elem"]
    assert defaults["namespace_suffix"] == "Keys"
    config = generate_config(defaults)
    assert config == GenerateConfig(
        markers=("node_class", "elem"),
        namespace_suffix="Keys",
        runtime_module="mydoc.runtime",
    )


def test_missing_or_invalid_config_yields_defaults(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == {}
    broken = tmp_path / "broken.toml"
    broken.write_text("[generate\nmarkers = 1\n")
    assert generate_defaults(config_path=broken) == {}
    assert generate_config({}) == GenerateConfig()
    assert generate_config(None) == GenerateConfig()


def test_generate_section_must_be_a_table(tmp_path: Path) -> None:
    config_path = tmp_path / "stylegen.toml"
    config_path.write_text('generate = "nope"\n')
    assert generate_defaults(config_path=config_path) == {}


def test_generate_config_normalizes_values() -> None:
    config = generate_config(
        {
            "markers": "node_class, elem,",
            "namespace_suffix": "",
            "runtime_module": "   ",
        }
    )
    assert config.markers == ("node_class", "elem")
    assert config.namespace_suffix == "_types"
    assert config.runtime_module == "stylegen.runtime"


def test_merge_payload_prefers_explicit_values() -> None:
    defaults = {"markers": ["node_class"], "namespace_suffix": "Keys"}
    payload = {"markers": None, "namespace_suffix": "_k", "runtime_module": "rt"}
    merged = merge_payload(payload, defaults)
    assert merged == {"markers": ["node_class"], "namespace_suffix": "_k", "runtime_module": "rt"}
