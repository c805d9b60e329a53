"""Serialization of parse results to JSON"""

import json
from pathlib import Path
from typing import Any

from semdoc.core.models import ParsedContent


def to_json_dict(parsed: ParsedContent, include_raw: bool = True, include_sequence: bool = True) -> dict[str, Any]:
    """Return a JSON-ready dict of the parse result, optionally without raw/sequence."""
    exclude = set()
    if not include_raw:
        exclude.add('raw')
    if not include_sequence:
        exclude.add('sequence')
    return parsed.model_dump(mode='json', by_alias=True, exclude=exclude)


def dumps(parsed: ParsedContent, indent: int = 2, **kwargs) -> str:
    return json.dumps(to_json_dict(parsed, **kwargs), indent=indent or None, ensure_ascii=False)


def write_parsed(parsed: ParsedContent, dest: Path, indent: int = 2, **kwargs) -> Path:
    """Write the parse result to dest as JSON, creating parent directories."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(dumps(parsed, indent=indent, **kwargs), encoding='utf-8')
    return dest
