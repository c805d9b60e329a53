"""Link-pattern classification for paragraphs and headings.

Three heuristics are tried in order, and only the first match applies:

1. single link   - one significant link-marked run, possibly framed by icons;
                   emitted as one LinkElement with iconBefore/iconAfter.
2. link burst    - a paragraph of two or more runs that are all links;
                   emitted as one LinkElement per run, icons dropped.
3. styled link   - every non-icon run carries the same link, each styled
                   differently; emitted as a paragraph wrapped in one <a>.
"""

from collections.abc import Mapping
from typing import Any, Optional

from semdoc.core.models import LinkElement, ParagraphElement, SequenceElement
from semdoc.core.sequence.attrs import normalize_icon
from semdoc.core.sequence.inline import extract_inline
from semdoc.core.sequence.text import as_str, find_mark, mark_attrs, render_text


LINKABLE_TYPES = ('paragraph', 'heading')


def _content(node: Mapping) -> list:
    content = node.get('content')
    return [c for c in content if isinstance(c, Mapping)] if isinstance(content, list) else []


def _is_icon(item: Mapping) -> bool:
    return item.get('type') == 'UniwebIcon'


def _is_blank_text(item: Mapping) -> bool:
    return item.get('type') == 'text' and not as_str(item.get('text')).strip()


def _significant(content: list) -> list:
    """Drop icons and whitespace-only text runs."""
    return [c for c in content if not _is_icon(c) and not _is_blank_text(c)]


def _text_link(item: Mapping) -> Optional[Mapping]:
    """Return the link mark of a text run, else None."""
    if item.get('type') != 'text':
        return None
    return find_mark(item, 'link')


def match_single_link(node: Mapping) -> Optional[LinkElement]:
    if node.get('type') not in LINKABLE_TYPES:
        return None

    content = _content(node)
    significant = _significant(content)
    if len(significant) != 1:
        return None

    run = significant[0]
    link = _text_link(run)
    if link is None:
        return None

    position = next(i for i, c in enumerate(content) if c is run)
    icon_before = icon_after = None
    for i, item in enumerate(content):
        if not _is_icon(item):
            continue
        if i < position:
            icon_before = normalize_icon(item.get('attrs'))
        elif icon_after is None:
            icon_after = normalize_icon(item.get('attrs'))

    return LinkElement(
        href=as_str(mark_attrs(link).get('href'), None),
        label=as_str(run.get('text')),
        icon_before=icon_before,
        icon_after=icon_after,
        inline_children=extract_inline(content),
    )


def match_link_burst(node: Mapping) -> Optional[list[LinkElement]]:
    if node.get('type') != 'paragraph':
        return None

    significant = _significant(_content(node))
    if len(significant) < 2:
        return None

    links = [_text_link(c) for c in significant]
    if any(link is None for link in links):
        return None

    return [
        LinkElement(href=as_str(mark_attrs(link).get('href'), None), label=as_str(run.get('text')))
        for run, link in zip(significant, links)
    ]


def match_styled_link(node: Mapping) -> Optional[ParagraphElement]:
    if node.get('type') not in LINKABLE_TYPES:
        return None

    runs = [c for c in _content(node) if not _is_icon(c)]
    if not runs:
        return None

    targets = set()
    for run in runs:
        link = find_mark(run, 'link')
        if link is None or not isinstance(link.get('attrs'), Mapping):
            return None
        targets.add((as_str(link['attrs'].get('href')), as_str(link['attrs'].get('target'))))
    if len(targets) != 1:
        return None
    href, target = targets.pop()

    unlinked = [
        {**run, 'marks': [m for m in run.get('marks') or [] if not (isinstance(m, Mapping) and m.get('type') == 'link')]}
        for run in runs
    ]
    text = render_text(unlinked)
    if not text:
        return None

    attrs = node.get('attrs')
    return ParagraphElement(
        text=f'<a target="{target or "_self"}" href="{href}">{text}</a>',
        inline_children=extract_inline(node.get('content')),
        attrs=dict(attrs) if isinstance(attrs, Mapping) else None,
    )


def classify_links(node: Any) -> Optional[list[SequenceElement]]:
    """Return the elements for the first link pattern node matches, else None."""
    if not isinstance(node, Mapping):
        return None

    single = match_single_link(node)
    if single is not None:
        return [single]

    burst = match_link_burst(node)
    if burst is not None:
        return burst

    styled = match_styled_link(node)
    if styled is not None:
        return [styled]

    return None
