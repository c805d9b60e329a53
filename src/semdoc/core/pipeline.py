"""Pipeline entry points: parse_content and file-level parse orchestration"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from semdoc.core.export import write_parsed
from semdoc.core.groups.resolve import resolve
from semdoc.core.groups.segment import segment
from semdoc.core.groups.structure import structure
from semdoc.core.models import ContentEntity, ParsedContent, ParseOptions
from semdoc.core.parse import discover_files, load_document
from semdoc.core.sequence.attrs import AssetResolver
from semdoc.core.sequence.builder import build_sequence


logger = logging.getLogger(__name__)


def _options(options: Union[ParseOptions, Mapping, None]) -> ParseOptions:
    if options is None:
        return ParseOptions()
    if isinstance(options, ParseOptions):
        return options
    return ParseOptions.model_validate(dict(options))


def parse_content(
    doc: Any,
    options: Union[ParseOptions, Mapping, None] = None,
    resolve_asset: Optional[AssetResolver] = None,
    ) -> ParsedContent:
    """Parse a document tree into its flat sequence and semantic content entity.

    Raises InvalidDocumentError when doc is not a document mapping.
    """
    sequence = build_sequence(doc, _options(options), resolve_asset)
    groups = [structure(run) for run in segment(sequence)]
    entity = resolve(groups)
    logger.debug("Parsed %d sequence elements into %d groups", len(sequence), len(groups))

    fields = {name: getattr(entity, name) for name in ContentEntity.model_fields}
    return ParsedContent(raw=doc, sequence=sequence, **fields)


def run_parse(
    path: str,
    output_dir: Path,
    options: Optional[ParseOptions] = None,
    parser_config: str = 'gfm-like',
    indent: int = 2,
    include_raw: bool = True,
    include_sequence: bool = True,
    ) -> list[tuple[Path, Path]]:
    """Parse every input under path and write one JSON file each. Returns (source, output) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(Path(path)):
        try:
            loaded = load_document(p, parser_config)
            parsed = parse_content(loaded.tree, options)
            out_file = write_parsed(
                parsed, output_dir / f"{loaded.slug}.json",
                indent=indent, include_raw=include_raw, include_sequence=include_sequence,
            )
            results.append((p, out_file))
        except Exception as e:
            raise RuntimeError(f"Failed to parse {p}: {e}") from e
    return results
