from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from stylegen import cli
from tests.source_helpers import PARA_SOURCE, source

_BROKEN = """
@node_class
class Para:
    WIDTH: float = 1.0

    def draw(self):
        pass
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(source(text), encoding="utf-8")
    return path


def _invoke(args: list[str]):
    return CliRunner().invoke(cli.app, args)


def test_cli_help_lists_commands() -> None:
    result = _invoke(["--help"])
    assert result.exit_code == 0
    assert "generate" in result.output
    assert "inspect" in result.output


def test_generate_writes_to_stdout(tmp_path: Path) -> None:
    path = _write(tmp_path, "para.py", PARA_SOURCE)
    result = _invoke(["generate", str(path)])
    assert result.exit_code == 0
    assert "class Para_types:" in result.stdout
    assert path.read_text() == source(PARA_SOURCE)


def test_generate_writes_into_out_dir(tmp_path: Path) -> None:
    first = _write(tmp_path, "para.py", PARA_SOURCE)
    second = _write(tmp_path, "plain.py", "x = 1\n")
    out_dir = tmp_path / "out"
    result = _invoke(["generate", str(first), str(second), "--out-dir", str(out_dir)])
    assert result.exit_code == 0
    assert "class Para_types:" in (out_dir / "para.py").read_text()
    assert (out_dir / "plain.py").read_text() == "x = 1\n"
    assert f"Wrote {out_dir / 'para.py'}" in result.stdout


def test_generate_needs_a_target_for_several_paths(tmp_path: Path) -> None:
    first = _write(tmp_path, "a.py", "x = 1\n")
    second = _write(tmp_path, "b.py", "y = 1\n")
    result = _invoke(["generate", str(first), str(second)])
    assert result.exit_code == 2


def test_generate_in_place_then_check(tmp_path: Path) -> None:
    path = _write(tmp_path, "para.py", PARA_SOURCE)
    check = _invoke(["generate", "--check", str(path)])
    assert check.exit_code == 1
    assert path.read_text() == source(PARA_SOURCE)

    written = _invoke(["generate", "--in-place", str(path)])
    assert written.exit_code == 0
    assert "class Para_types:" in path.read_text()

    # Generated files no longer carry the marker.
    again = _invoke(["generate", "--check", str(path)])
    assert again.exit_code == 0


def test_generate_reports_diagnostics(tmp_path: Path) -> None:
    path = _write(tmp_path, "para.py", _BROKEN)
    result = _invoke(["generate", str(path)])
    assert result.exit_code == 1
    assert f"{path}:5:5: UnexpectedMethod:" in result.output


def test_generate_reports_unreadable_file(tmp_path: Path) -> None:
    result = _invoke(["generate", str(tmp_path / "missing.py")])
    assert result.exit_code == 1
    assert "Failed to read" in result.output


def test_generate_options_override_config(tmp_path: Path) -> None:
    (tmp_path / "stylegen.toml").write_text('[generate]\nnamespace_suffix = "Keys"\n')
    path = _write(tmp_path, "para.py", PARA_SOURCE.replace("node_class", "elem"))
    result = _invoke(
        [
            "generate",
            str(path),
            "--config",
            str(tmp_path / "stylegen.toml"),
            "--marker",
            "elem",
            "--runtime-module",
            "stylegen.runtime",
        ]
    )
    assert result.exit_code == 0
    assert "class ParaKeys:" in result.stdout


def test_inspect_writes_json_report(tmp_path: Path) -> None:
    path = _write(tmp_path, "para.py", PARA_SOURCE)
    output = tmp_path / "report.json"
    result = _invoke(["inspect", str(path), "--output", str(output)])
    assert result.exit_code == 0
    payload = json.loads(output.read_text())
    assert payload["path"] == str(path)
    assert payload["diagnostics"] == []
    [declaration] = payload["declarations"]
    assert declaration["name"] == "Para"
    assert declaration["has_set"] is False
    props = {prop["name"]: prop for prop in declaration["properties"]}
    assert props["STRONG"]["fold"] == "combine"
    assert props["GAP"]["variadic"] is True
    assert props["FILL"]["shorthand"] is True
    assert props["HIDDEN"]["skip"] is True


def test_inspect_reports_diagnostics_on_stdout(tmp_path: Path) -> None:
    path = _write(tmp_path, "para.py", _BROKEN)
    result = _invoke(["inspect", str(path)])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["declarations"] == []
    [diagnostic] = payload["diagnostics"]
    assert diagnostic["kind"] == "UnexpectedMethod"
    assert (diagnostic["line"], diagnostic["column"]) == (5, 5)
