from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from stylegen.config import TomlTable, generate_config, generate_defaults, merge_payload
from stylegen.generate import GenerateConfig, GenerationEngine, GenerationResult
from stylegen.schema import inspect_response

app = typer.Typer(add_completion=False)
logger = logging.getLogger(__name__)

_STDOUT_ALIAS = "-"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every expansion step."),
) -> None:
    """Generate style property keys for node classes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_config(config: Optional[Path], overrides: TomlTable) -> GenerateConfig:
    defaults = generate_defaults(config_path=config)
    return generate_config(merge_payload(overrides, defaults))


def _read_source(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"Failed to read {path}: {exc}", err=True)
        return None


def _report(result: GenerationResult) -> bool:
    for error in result.errors:
        typer.echo(error, err=True)
    for diagnostic in result.diagnostics:
        typer.echo(diagnostic.render(), err=True)
    return not result.ok


def _write_text_to_target(target: str | Path, payload: str) -> None:
    if str(target) == _STDOUT_ALIAS:
        typer.echo(payload, nl=False)
        return
    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")


def _target_for(path: Path, *, out_dir: Optional[Path], in_place: bool) -> str | Path:
    if out_dir is not None:
        return out_dir / path.name
    if in_place:
        return path
    return _STDOUT_ALIAS


@app.command("generate")
def generate(
    paths: List[Path] = typer.Argument(..., help="Declaration files to expand."),
    out_dir: Optional[Path] = typer.Option(
        None, "--out-dir", help="Write each expanded file into this directory."
    ),
    in_place: bool = typer.Option(False, "--in-place", help="Rewrite the input files."),
    check: bool = typer.Option(
        False, "--check", help="Write nothing; fail when an output would change."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    markers: Optional[List[str]] = typer.Option(
        None, "--marker", help="Decorator name marking a declaration (repeatable)."
    ),
    namespace_suffix: Optional[str] = typer.Option(None, "--namespace-suffix"),
    runtime_module: Optional[str] = typer.Option(None, "--runtime-module"),
) -> None:
    """Expand marked node classes into keys, setters and capabilities."""
    if out_dir is None and not in_place and len(paths) > 1:
        raise typer.BadParameter("several paths need --out-dir or --in-place")
    engine = GenerationEngine(
        config=_resolve_config(
            config,
            {
                "markers": list(markers) if markers else None,
                "namespace_suffix": namespace_suffix,
                "runtime_module": runtime_module,
            },
        )
    )
    failed = False
    for path in paths:
        source = _read_source(path)
        if source is None:
            failed = True
            continue
        result = engine.expand_source(source, path=str(path))
        failed = _report(result) or failed
        target = _target_for(path, out_dir=out_dir, in_place=in_place or check)
        if check:
            current = _read_source(Path(target)) if target != _STDOUT_ALIAS else source
            if current != result.code:
                typer.echo(f"would regenerate {target}", err=True)
                failed = True
            continue
        if target == path and result.code == source:
            logger.info("%s is up to date", path)
            continue
        _write_text_to_target(target, result.code)
        if target != _STDOUT_ALIAS:
            typer.echo(f"Wrote {target}")
    if failed:
        raise typer.Exit(code=1)


@app.command("inspect")
def inspect_declarations(
    path: Path = typer.Argument(..., help="Declaration file to read."),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Write the JSON report to this path."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Report the declarations of a file and their diagnostics as JSON."""
    source = _read_source(path)
    if source is None:
        raise typer.Exit(code=1)
    engine = GenerationEngine(config=_resolve_config(config, {}))
    result = engine.expand_source(source, path=str(path))
    response = inspect_response(str(path), result)
    payload = json.dumps(response.model_dump(), indent=2, sort_keys=True) + "\n"
    _write_text_to_target(output if output is not None else _STDOUT_ALIAS, payload)
    if not result.ok:
        raise typer.Exit(code=1)
