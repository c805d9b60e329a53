"""Input discovery and loading: JSON/YAML trees and markdown via the reader"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from semdoc.core.reader.markdown import make_parser, read_markdown


MD_EXTENSIONS = {'.md', '.mdx'}
TREE_EXTENSIONS = {'.json', '.yaml', '.yml'}
INPUT_EXTENSIONS = MD_EXTENSIONS | TREE_EXTENSIONS
SLUG_RE = re.compile(r'[^a-z0-9]+')


@dataclass
class LoadedDoc:
    """A document tree read from disk; not part of the parse result."""
    path:        Path
    slug:        str
    frontmatter: dict[str, Any]
    tree:        Any


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug ('doc' if empty)."""
    return SLUG_RE.sub('-', text.strip().lower()).strip('-') or 'doc'


def _fence(line: str) -> bool:
    return line.rstrip() == '---'


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with a leading --- fenced YAML header removed."""
    lines = text.splitlines(keepends=True)
    if not lines or not _fence(lines[0]):
        return {}, text
    end = next((i for i in range(1, len(lines)) if _fence(lines[i])), None)
    if end is None:
        return {}, text

    try:
        fm = yaml.safe_load(''.join(lines[1:end])) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, ''.join(lines[end + 1:])


def _is_input(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in INPUT_EXTENSIONS


def discover_files(path: Path) -> list[Path]:
    """Return sorted input files under path, or [path] if a single supported file."""
    if path.is_file():
        return [path] if _is_input(path) else []
    return sorted(p for p in path.rglob('*') if _is_input(p))


def load_document(path: Path, parser_config: str = 'gfm-like') -> LoadedDoc:
    """Read a JSON/YAML document tree, or convert a markdown file into one."""
    raw = path.read_text(encoding='utf-8')
    frontmatter: dict[str, Any] = {}

    suffix = path.suffix.lower()
    if suffix in MD_EXTENSIONS:
        frontmatter, body = strip_frontmatter(raw)
        tree = read_markdown(body, make_parser(parser_config))
    elif suffix == '.json':
        try:
            tree = json.loads(raw)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            tree = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    slug = str(frontmatter.get('slug') or '') or slugify(path.stem)
    return LoadedDoc(path=path, slug=slug, frontmatter=frontmatter, tree=tree)
