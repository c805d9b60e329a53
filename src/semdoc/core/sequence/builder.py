"""Document tree to flat, order-preserving sequence of semantic elements"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from semdoc.core.models import (
    BlockquoteElement,
    ButtonElement,
    CardGroupElement,
    CodeBlockElement,
    DataBlockElement,
    DividerElement,
    DocumentGroupElement,
    FormElement,
    GenericElement,
    HeadingElement,
    IconElement,
    ImageElement,
    InvalidDocumentError,
    ListElement,
    ParagraphElement,
    ParseOptions,
    SequenceElement,
    VideoElement,
)
from semdoc.core.sequence.attrs import (
    AssetResolver,
    as_mapping,
    icon_svg,
    normalize_icon,
    normalize_image,
    normalize_video,
    null_resolver,
    parse_card,
    parse_document,
)
from semdoc.core.sequence.data import code_block_data
from semdoc.core.sequence.inline import extract_inline
from semdoc.core.sequence.links import classify_links
from semdoc.core.sequence.text import as_str, render_text


logger = logging.getLogger(__name__)

Built = Union[SequenceElement, list[SequenceElement], None]


def _children(node: Mapping) -> list[Mapping]:
    """Mapping children of node; anything else in content is skipped."""
    content = node.get('content')
    if not isinstance(content, list):
        return []
    children = []
    for child in content:
        if isinstance(child, Mapping):
            children.append(child)
        else:
            logger.debug("Skipping non-node child of %r: %r", node.get('type'), child)
    return children


def _attrs(node: Mapping) -> Optional[dict[str, Any]]:
    attrs = node.get('attrs')
    return as_mapping(attrs) if isinstance(attrs, Mapping) else None


def _level(attrs: Optional[Mapping]) -> Optional[int]:
    try:
        return int((attrs or {}).get('level'))
    except (TypeError, ValueError, OverflowError):
        return None


def _decode_form(data: Any) -> Any:
    if not isinstance(data, str):
        return data
    try:
        return json.loads(data)
    except ValueError:
        logger.debug("Form data is not valid JSON; keeping string")
        return data


class SequenceBuilder:
    """Walks a document tree and emits sequence elements in document order."""

    def __init__(self, options: Optional[ParseOptions] = None, resolve_asset: Optional[AssetResolver] = None):
        self.options = options or ParseOptions()
        self.resolve_asset = resolve_asset or null_resolver
        self._handlers = {
            'heading':        self._heading,
            'paragraph':      self._paragraph,
            'blockquote':     self._blockquote,
            'dataBlock':      self._data_block,
            'codeBlock':      self._code_block,
            'ImageBlock':     self._image_block,
            'image':          self._image,
            'Video':          self._video,
            'bulletList':     self._list,
            'orderedList':    self._list,
            'DividerBlock':   self._divider,
            'horizontalRule': self._divider,
            'card-group':     self._card_group,
            'document-group': self._document_group,
            'FormBlock':      self._form,
            'button':         self._button,
            'UniwebIcon':     self._uniweb_icon,
            'Icon':           self._icon,
        }

    def build(self, node: Mapping) -> list[SequenceElement]:
        """Return the sequence for the immediate children of a container node."""
        sequence: list[SequenceElement] = []
        for child in _children(node):
            result = self.element(child)
            if isinstance(result, list):
                sequence.extend(result)
            elif result is not None:
                sequence.append(result)
        return sequence

    def element(self, node: Mapping) -> Built:
        """Map one node to zero, one or several sequence elements."""
        links = classify_links(node)
        if links is not None:
            return links

        node_type = node.get('type')
        handler = self._handlers.get(node_type) if isinstance(node_type, str) else None
        if handler is None:
            logger.debug("Unrecognized node type %r; emitting generic element", node_type)
            return GenericElement(type=str(node_type or ''), content=render_text(node.get('content')))
        return handler(node)

    def _heading(self, node: Mapping) -> HeadingElement:
        attrs = _attrs(node)
        return HeadingElement(
            level=_level(attrs),
            text=render_text(node.get('content')),
            inline_children=extract_inline(node.get('content')),
            attrs=attrs,
        )

    def _paragraph(self, node: Mapping) -> ParagraphElement:
        return ParagraphElement(
            text=render_text(node.get('content')),
            inline_children=extract_inline(node.get('content')),
            attrs=_attrs(node),
        )

    def _blockquote(self, node: Mapping) -> BlockquoteElement:
        return BlockquoteElement(children=self.build(node), attrs=_attrs(node))

    def _data_block(self, node: Mapping) -> DataBlockElement:
        attrs = as_mapping(node.get('attrs'))
        return DataBlockElement(tag=as_str(attrs.get('tag'), None), data=attrs.get('data'))

    def _code_block(self, node: Mapping) -> CodeBlockElement:
        attrs = _attrs(node)
        text = render_text(node.get('content'))
        return CodeBlockElement(
            text=code_block_data(text, attrs, self.options.parse_code_as_json),
            attrs=attrs,
        )

    def _image_block(self, node: Mapping) -> ImageElement:
        return ImageElement(attrs=normalize_image(node.get('attrs'), self.resolve_asset))

    def _image(self, node: Mapping) -> ImageElement:
        return ImageElement(attrs=as_mapping(node.get('attrs')))

    def _video(self, node: Mapping) -> VideoElement:
        return VideoElement(attrs=normalize_video(node.get('attrs'), self.resolve_asset))

    def _list(self, node: Mapping) -> ListElement:
        items = [
            child for child in _children(node)
            if child.get('type') == 'listItem' and child.get('content')
        ]
        return ListElement(
            style='bullet' if node.get('type') == 'bulletList' else 'ordered',
            children=[self.build(item) for item in items],
            attrs=_attrs(node),
        )

    def _divider(self, node: Mapping) -> DividerElement:
        return DividerElement()

    def _card_group(self, node: Mapping) -> CardGroupElement:
        cards = [
            parse_card(child.get('attrs'), self.resolve_asset)
            for child in _children(node)
            if child.get('type') == 'card' and not as_mapping(child.get('attrs')).get('hidden')
        ]
        return CardGroupElement(cards=cards)

    def _document_group(self, node: Mapping) -> DocumentGroupElement:
        documents = [
            parse_document(child.get('attrs'), self.resolve_asset)
            for child in _children(node)
            if child.get('type') == 'document'
        ]
        return DocumentGroupElement(documents=documents)

    def _form(self, node: Mapping) -> FormElement:
        attrs = _attrs(node)
        return FormElement(data=_decode_form((attrs or {}).get('data')), attrs=attrs)

    def _button(self, node: Mapping) -> Optional[ButtonElement]:
        text = render_text(node.get('content'))
        if not text:
            return None
        return ButtonElement(
            text=text,
            inline_children=extract_inline(node.get('content')),
            attrs=_attrs(node),
        )

    def _uniweb_icon(self, node: Mapping) -> IconElement:
        return IconElement(attrs=normalize_icon(node.get('attrs')))

    def _icon(self, node: Mapping) -> IconElement:
        return IconElement(attrs=icon_svg(node.get('attrs')))


def build_sequence(
    doc: Any,
    options: Optional[ParseOptions] = None,
    resolve_asset: Optional[AssetResolver] = None,
    ) -> list[SequenceElement]:
    """Validate the top-level document and return its flat sequence."""
    if not isinstance(doc, Mapping):
        raise InvalidDocumentError(f"Expected a document mapping, got {type(doc).__name__}")
    if doc.get('content') is not None and not isinstance(doc['content'], list):
        raise InvalidDocumentError(
            f"Document content must be a list, got {type(doc['content']).__name__}"
        )
    return SequenceBuilder(options, resolve_asset).build(doc)
