"""Lift inline icons and linked text runs into standalone inline records"""

from collections.abc import Mapping
from typing import Any

from semdoc.core.sequence.attrs import normalize_icon
from semdoc.core.sequence.text import as_str, find_mark, mark_attrs


def extract_inline(content: Any) -> list[Any]:
    """Return inline child records for an inline content list.

    Icons become {'type': 'icon'} records and link-marked text runs become
    {'type': 'link'} records; plain text and hard breaks are dropped, and any
    other inline type (e.g. math-inline) passes through unchanged.
    """
    if not isinstance(content, list):
        return []

    items: list[Any] = []
    for item in content:
        if not isinstance(item, Mapping):
            continue
        item_type = item.get('type')
        if item_type == 'UniwebIcon':
            items.append({'type': 'icon', 'attrs': normalize_icon(item.get('attrs'))})
        elif item_type == 'text':
            link = find_mark(item, 'link')
            if link is not None:
                items.append({
                    'type': 'link',
                    'attrs': {'href': as_str(mark_attrs(link).get('href'), None), 'label': as_str(item.get('text'))},
                })
        elif item_type != 'hardBreak':
            items.append(item)
    return items
