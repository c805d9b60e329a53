"""Data models for the sequence, group and content-entity stages"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InvalidDocumentError(ValueError):
    """The top-level input is not a document tree; parsing cannot proceed."""


class ParseOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    parse_code_as_json: bool = Field(
        default=False, alias="parseCodeAsJson",
        description="Try JSON on code blocks without a pre-parsed value",
    )


# --- stage 1: sequence elements ---

class Element(BaseModel):
    """Sequence element base; fields serialize as camelCase when dumped by alias."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HeadingElement(Element):
    type: Literal["heading"] = "heading"
    level: Optional[int] = None
    text: str = ""
    inline_children: list[Any] = []
    attrs: Optional[dict[str, Any]] = None


class ParagraphElement(Element):
    type: Literal["paragraph"] = "paragraph"
    text: str = ""
    inline_children: list[Any] = []
    attrs: Optional[dict[str, Any]] = None


class BlockquoteElement(Element):
    type: Literal["blockquote"] = "blockquote"
    children: list["SequenceElement"] = []
    attrs: Optional[dict[str, Any]] = None


class ListElement(Element):
    """One child sequence per list item."""
    type: Literal["list"] = "list"
    style: Literal["bullet", "ordered"] = "bullet"
    children: list[list["SequenceElement"]] = []
    attrs: Optional[dict[str, Any]] = None


class DividerElement(Element):
    type: Literal["divider"] = "divider"


class ImageElement(Element):
    type: Literal["image"] = "image"
    attrs: dict[str, Any] = {}


class VideoElement(Element):
    type: Literal["video"] = "video"
    attrs: dict[str, Any] = {}


class IconElement(Element):
    type: Literal["icon"] = "icon"
    attrs: Any = None               # normalized icon mapping, or a bare svg string


class LinkElement(Element):
    type: Literal["link"] = "link"
    href: Optional[str] = None
    label: str = ""
    icon_before: Optional[dict[str, Any]] = None
    icon_after: Optional[dict[str, Any]] = None
    inline_children: list[Any] = []


class ButtonElement(Element):
    type: Literal["button"] = "button"
    text: str = ""
    inline_children: list[Any] = []
    attrs: Optional[dict[str, Any]] = None


class FormElement(Element):
    type: Literal["form"] = "form"
    data: Any = None
    attrs: Optional[dict[str, Any]] = None


class DataBlockElement(Element):
    type: Literal["dataBlock"] = "dataBlock"
    tag: Optional[str] = None
    data: Any = None


class CodeBlockElement(Element):
    type: Literal["codeBlock"] = "codeBlock"
    text: Any = ""                  # raw text, or the deserialized value of a tagged block
    attrs: Optional[dict[str, Any]] = None


class CardGroupElement(Element):
    type: Literal["card-group"] = "card-group"
    cards: list[dict[str, Any]] = []


class DocumentGroupElement(Element):
    type: Literal["document-group"] = "document-group"
    documents: list[dict[str, Any]] = []


class GenericElement(Element):
    """Fallback for node types the builder does not recognize."""
    type: str
    content: str = ""


SequenceElement = Union[
    HeadingElement,
    ParagraphElement,
    BlockquoteElement,
    ListElement,
    DividerElement,
    ImageElement,
    VideoElement,
    IconElement,
    LinkElement,
    ButtonElement,
    FormElement,
    DataBlockElement,
    CodeBlockElement,
    CardGroupElement,
    DocumentGroupElement,
    GenericElement,
]

BlockquoteElement.model_rebuild()
ListElement.model_rebuild()


# --- stage 2: groups ---

class Header(BaseModel):
    pretitle: str = ""
    title: str = ""
    subtitle: str = ""
    subtitle2: str = ""


class Body(BaseModel):
    """Body-shaped record shared by entities, list entries and quote entries."""
    paragraphs: list[str] = []
    links: list[dict[str, Any]] = []
    imgs: list[Any] = []
    videos: list[Any] = []
    icons: list[Any] = []
    lists: list[list["Body"]] = []
    quotes: list["Body"] = []
    headings: list[str] = []
    data: dict[str, Any] = {}


class GroupMetadata(BaseModel):
    level: Optional[int] = None     # from the first heading in the group
    content_types: list[str] = []   # informational, first-occurrence order


class Group(BaseModel):
    header: Header = Field(default_factory=Header)
    body: Body = Field(default_factory=Body)
    metadata: GroupMetadata = Field(default_factory=GroupMetadata)


# --- stage 3: public content entity ---

class ContentEntity(Body):
    title: str = ""
    pretitle: str = ""
    subtitle: str = ""
    subtitle2: str = ""
    items: list["ContentEntity"] = []


class ParsedContent(ContentEntity):
    """Result of parse_content: the caller's input, the flat sequence, and the entity fields."""
    raw: Any = None
    sequence: list[SequenceElement] = []


Body.model_rebuild()
ContentEntity.model_rebuild()
