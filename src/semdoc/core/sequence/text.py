"""Inline run rendering: marked text nodes to a single HTML string"""

from collections.abc import Mapping
from typing import Any, Optional


# Link targets with these extensions get a download attribute.
FILE_EXTENSIONS = frozenset({
    'pdf', 'doc', 'docx', 'xls', 'xlsx', 'ppt', 'pptx',
    'jpg', 'jpeg', 'png', 'webp', 'gif', 'svg',
    'mp4', 'mp3', 'wav', 'mov', 'zip',
})


def find_mark(item: Mapping, mark_type: str) -> Optional[Mapping]:
    """Return the first mark of mark_type on an inline item, else None."""
    marks = item.get('marks') or []
    if not isinstance(marks, list):
        return None
    for mark in marks:
        if isinstance(mark, Mapping) and mark.get('type') == mark_type:
            return mark
    return None


def mark_attrs(mark: Optional[Mapping]) -> Mapping:
    """Return a mark's attrs mapping, or an empty one when absent or malformed."""
    attrs = mark.get('attrs') if mark else None
    return attrs if isinstance(attrs, Mapping) else {}


def as_str(value: Any, default: Optional[str] = '') -> Optional[str]:
    """Text of a scalar attribute value; None, booleans and containers give default."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def is_file_link(href: str) -> bool:
    """True when the last dot-separated part of href is a known document/media extension."""
    return href.split('.')[-1].lower() in FILE_EXTENSIONS


def _span(text: str, attrs: Mapping) -> str:
    parts = []
    if attrs.get('class'):
        parts.append(f'class="{attrs["class"]}"')
    if attrs.get('id'):
        parts.append(f'id="{attrs["id"]}"')
    parts.extend(
        f'{key}="{value}"' for key, value in attrs.items()
        if key not in ('class', 'id') and value is not None
    )
    attr_string = f" {' '.join(parts)}" if parts else ''
    return f'<span{attr_string}>{text}</span>'


def render_run(item: Mapping) -> str:
    """Render one text node, nesting marks color → highlight → span → bold → italic → link."""
    styled = as_str(item.get('text'))

    color = mark_attrs(find_mark(item, 'textStyle')).get('color')
    if color:
        styled = f'<span style="color: var(--{color})">{styled}</span>'

    if find_mark(item, 'highlight'):
        styled = f'<span style="background-color: var(--highlight)">{styled}</span>'

    span = find_mark(item, 'span')
    if span is not None:
        styled = _span(styled, mark_attrs(span))

    if find_mark(item, 'bold'):
        styled = f'<strong>{styled}</strong>'

    if find_mark(item, 'italic'):
        styled = f'<em>{styled}</em>'

    link = find_mark(item, 'link')
    if link is not None and isinstance(link.get('attrs'), Mapping):
        attrs = link['attrs']
        href = as_str(attrs.get('href'))
        target = as_str(attrs.get('target')) or '_self'
        download = ' download' if is_file_link(href) else ''
        styled = f'<a href="{href}" target="{target}"{download}>{styled}</a>'

    return styled


def render_text(content: Any) -> str:
    """Render an ordered list of inline items to HTML, trimmed.

    Text nodes render through their marks, hard breaks become <br>, and any
    other inline type is skipped.
    """
    if not isinstance(content, list):
        return ''

    parts = []
    for item in content:
        if not isinstance(item, Mapping):
            continue
        if item.get('type') == 'text':
            parts.append(render_run(item))
        elif item.get('type') == 'hardBreak':
            parts.append('<br>')
    return ''.join(parts).strip()
