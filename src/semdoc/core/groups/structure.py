"""Group structuring: one element run to a header/body/metadata record"""

from dataclasses import dataclass, field
from typing import Any, Optional

from semdoc.core.groups.segment import heading_level
from semdoc.core.models import (
    BlockquoteElement,
    Body,
    ButtonElement,
    CardGroupElement,
    CodeBlockElement,
    DataBlockElement,
    DocumentGroupElement,
    FormElement,
    Group,
    GroupMetadata,
    Header,
    HeadingElement,
    IconElement,
    ImageElement,
    LinkElement,
    ListElement,
    ParagraphElement,
    SequenceElement,
    VideoElement,
)
from semdoc.core.sequence.attrs import as_mapping
from semdoc.core.sequence.text import as_str


HEADER_SLOTS = ('title', 'subtitle', 'subtitle2')


@dataclass
class _GroupBuilder:
    """Mutable accumulator local to one structure() call."""
    header: dict[str, str] = field(default_factory=lambda: {'pretitle': '', 'title': '', 'subtitle': '', 'subtitle2': ''})
    paragraphs: list[str] = field(default_factory=list)
    links: list[dict[str, Any]] = field(default_factory=list)
    imgs: list[Any] = field(default_factory=list)
    videos: list[Any] = field(default_factory=list)
    icons: list[Any] = field(default_factory=list)
    lists: list[list[Body]] = field(default_factory=list)
    quotes: list[Body] = field(default_factory=list)
    headings: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)
    level: Optional[int] = None
    pretitle_set: bool = False
    content_types: list[str] = field(default_factory=list)
    _accumulated: set = field(default_factory=set)

    def put_data(self, key: str, value: Any) -> None:
        """Store value under key; a repeated key turns the slot into an ordered array."""
        if key not in self.data:
            self.data[key] = value
        elif key in self._accumulated:
            self.data[key].append(value)
        else:
            self.data[key] = [self.data[key], value]
            self._accumulated.add(key)

    def append_data(self, key: str, value: Any) -> None:
        """Append value to the array under key, creating it on first use."""
        if key not in self.data:
            self.data[key] = []
            self._accumulated.add(key)
        self.put_data(key, value)

    def lift_inline(self, children: list) -> None:
        for item in children:
            if not isinstance(item, dict):
                continue
            if item.get('type') == 'icon':
                self.icons.append(item.get('attrs'))
            elif item.get('type') == 'link':
                self.links.append(as_mapping(item.get('attrs')))

    def add_heading(self, element: HeadingElement) -> None:
        self.lift_inline(element.inline_children)
        if self.level is None:
            self.level = element.level
        for slot in HEADER_SLOTS:
            if not self.header[slot]:
                self.header[slot] = element.text
                return
        self.headings.append(element.text)

    def body(self) -> Body:
        return Body(
            paragraphs=self.paragraphs,
            links=self.links,
            imgs=self.imgs,
            videos=self.videos,
            icons=self.icons,
            lists=self.lists,
            quotes=self.quotes,
            headings=self.headings,
            data=self.data,
        )

    def finalize(self) -> Group:
        return Group(
            header=Header(**self.header),
            body=self.body(),
            metadata=GroupMetadata(level=self.level, content_types=self.content_types),
        )


def is_pretitle(elements: list[SequenceElement], i: int) -> bool:
    """A heading directly followed by a more important (numerically smaller) heading."""
    return (
        i + 1 < len(elements)
        and isinstance(elements[i], HeadingElement)
        and isinstance(elements[i + 1], HeadingElement)
        and heading_level(elements[i]) > heading_level(elements[i + 1])
    )


def _button_link(element: ButtonElement) -> dict[str, Any]:
    attrs = element.attrs or {}
    variant = attrs.get('variant')
    return {
        'href': attrs.get('href') or '',
        'label': element.text or '',
        'role': f'button-{variant}' if variant else 'button',
        'variant': variant or 'primary',
        'size': attrs.get('size'),
        'icon': attrs.get('icon'),
        'target': attrs.get('target'),
        'class': attrs.get('class'),
    }


def _document_link(doc: dict[str, Any]) -> dict[str, Any]:
    return {
        'href': doc.get('href') or doc.get('downloadUrl') or '',
        'label': doc.get('title') or '',
        'role': 'document',
        'download': True,
        'preview': doc.get('coverImg'),
        'fileType': doc.get('fileType'),
    }


def _add_element(builder: _GroupBuilder, element: SequenceElement) -> None:
    if isinstance(element, ParagraphElement):
        builder.lift_inline(element.inline_children)
        if element.text:
            builder.paragraphs.append(element.text)
    elif isinstance(element, ImageElement):
        builder.imgs.append(dict(element.attrs))
    elif isinstance(element, VideoElement):
        builder.videos.append(dict(element.attrs))
    elif isinstance(element, IconElement):
        builder.icons.append(element.attrs)
    elif isinstance(element, LinkElement):
        builder.lift_inline(element.inline_children)
        builder.links.append({
            'href': element.href,
            'label': element.label,
            'iconBefore': element.icon_before,
            'iconAfter': element.icon_after,
        })
    elif isinstance(element, ButtonElement):
        builder.links.append(_button_link(element))
    elif isinstance(element, BlockquoteElement):
        builder.quotes.append(structure_body(element.children))
    elif isinstance(element, ListElement):
        builder.lists.append([structure_body(item) for item in element.children])
    elif isinstance(element, DataBlockElement):
        if element.tag:
            builder.put_data(element.tag, element.data)
    elif isinstance(element, CodeBlockElement):
        tag = as_str((element.attrs or {}).get('tag'))
        if tag:
            builder.put_data(tag, element.text)
    elif isinstance(element, FormElement):
        builder.data['form'] = element.data if element.data is not None else element.attrs
    elif isinstance(element, CardGroupElement):
        for card in element.cards:
            record = dict(card)
            card_type = as_str(record.pop('cardType', None)) or 'card'
            builder.append_data(card_type, record)
    elif isinstance(element, DocumentGroupElement):
        builder.links.extend(_document_link(doc) for doc in element.documents)


def _build(elements: list[SequenceElement]) -> _GroupBuilder:
    builder = _GroupBuilder()
    i = 0
    while i < len(elements):
        if not builder.pretitle_set and is_pretitle(elements, i):
            builder.header['pretitle'] = elements[i].text
            builder.pretitle_set = True
            i += 1

        element = elements[i]
        if element.type not in builder.content_types:
            builder.content_types.append(element.type)

        if isinstance(element, HeadingElement):
            builder.add_heading(element)
        else:
            _add_element(builder, element)
        i += 1
    return builder


def structure(elements: Optional[list[SequenceElement]]) -> Group:
    """Assign headings to header slots and consolidate the rest into a body."""
    return _build(elements or []).finalize()


def structure_body(elements: Optional[list[SequenceElement]]) -> Body:
    """Body of a nested list item or quote; its headings still fill (discarded) header slots."""
    return _build(elements or []).body()
