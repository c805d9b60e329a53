"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from semdoc.config import Settings, load_config
from semdoc.core.export import dumps
from semdoc.core.models import InvalidDocumentError
from semdoc.core.parse import load_document
from semdoc.core.pipeline import parse_content, run_parse


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _load(path: Path, settings: Settings):
    try:
        return load_document(path, settings.parser_config)
    except (OSError, ValueError) as e:
        _fail(f"Cannot read {path}", e)


def parse_cmd(
    path: Annotated[Path, typer.Argument(help="JSON/YAML document tree or markdown file")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Write <slug>.json here instead of stdout")] = None,
    code_json: Annotated[Optional[bool], typer.Option("--parse-code-as-json", help="Try JSON on code blocks")] = None,
    sequence: Annotated[bool, typer.Option("--sequence/--no-sequence", help="Include the flat sequence")] = True,
    raw: Annotated[bool, typer.Option("--raw/--no-raw", help="Include the input tree")] = True,
    ):
    """Parse one document and print (or write) its semantic structure as JSON."""
    settings = _settings(overrides={"parse_code_as_json": code_json})
    loaded = _load(path, settings)
    try:
        parsed = parse_content(loaded.tree, settings.parse_options())
    except InvalidDocumentError as e:
        _fail(f"Invalid document {path}", e)

    text = dumps(parsed, indent=settings.indent, include_raw=raw, include_sequence=sequence)
    if out is None:
        typer.echo(text)
        return
    dest = Path(out) / f"{loaded.slug}.json"
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(text, encoding="utf-8")
    typer.echo(f"  {path} -> {dest}")


def sequence_cmd(
    path: Annotated[Path, typer.Argument(help="JSON/YAML document tree or markdown file")],
    code_json: Annotated[Optional[bool], typer.Option("--parse-code-as-json", help="Try JSON on code blocks")] = None,
    ):
    """Print only the flat element sequence of a document."""
    settings = _settings(overrides={"parse_code_as_json": code_json})
    loaded = _load(path, settings)
    try:
        parsed = parse_content(loaded.tree, settings.parse_options())
    except InvalidDocumentError as e:
        _fail(f"Invalid document {path}", e)

    elements = [e.model_dump(mode="json", by_alias=True) for e in parsed.sequence]
    typer.echo(json.dumps(elements, indent=settings.indent or None, ensure_ascii=False))


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to process")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    code_json: Annotated[Optional[bool], typer.Option("--parse-code-as-json", help="Try JSON on code blocks")] = None,
    ):
    """Parse every document under path into one JSON file each."""
    settings = _settings(overrides={
        "output_dir": out, "parser_config": parser, "parse_code_as_json": code_json,
    })
    output_dir = Path(settings.output_dir)
    try:
        results = run_parse(
            path, output_dir, settings.parse_options(),
            parser_config=settings.parser_config, indent=settings.indent,
        )
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No input documents found under {path}.")
        raise typer.Exit(1)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Parsed {len(results)} document(s) to {output_dir}/")
