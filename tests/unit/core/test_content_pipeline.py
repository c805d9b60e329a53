"""Unit tests for parse_content in core/pipeline.py"""

import pytest

from semdoc.core.models import ContentEntity, InvalidDocumentError, ParseOptions
from semdoc.core.pipeline import parse_content


ENTITY_FIELDS = set(ContentEntity.model_fields)


def _text(value, *marks):
    node = {"type": "text", "text": value}
    if marks:
        node["marks"] = list(marks)
    return node


def _h(level, value):
    return {"type": "heading", "attrs": {"level": level}, "content": [_text(value)]}


def _p(value):
    return {"type": "paragraph", "content": [_text(value)]}


def _doc(*content):
    return {"type": "doc", "content": list(content)}


def test_empty_document_is_canonical_empty_entity():
    doc = _doc()
    result = parse_content(doc)
    assert result.raw is doc
    assert result.sequence == []
    assert result.model_dump(include=ENTITY_FIELDS) == ContentEntity().model_dump()
    assert result.title == ""
    assert result.items == []
    assert result.data == {}


def test_simple_document():
    result = parse_content(_doc(_h(1, "Main Title"), _p("Body")))
    assert [e.type for e in result.sequence] == ["heading", "paragraph"]
    assert result.title == "Main Title"
    assert result.paragraphs == ["Body"]
    assert result.items == []


def test_landing_page(landing_doc):
    result = parse_content(landing_doc)
    assert result.pretitle == "WELCOME"
    assert result.title == "Main Title"
    assert result.subtitle == "Subtitle"
    assert result.imgs == [{"src": "hero.jpg", "role": "banner"}]
    assert result.paragraphs == ["Intro <strong>text</strong>"]
    assert result.links[-1] == {"href": "/start", "label": "Get started", "iconBefore": None, "iconAfter": None}
    assert [item.title for item in result.items] == ["Feature One", "Feature Two"]
    assert result.items[0].paragraphs == ["First feature."]


def test_pretitle_detection():
    result = parse_content(_doc(_h(3, "PRETITLE"), _h(1, "Title")))
    assert result.pretitle == "PRETITLE"
    assert result.title == "Title"


def test_peer_sections_become_items():
    result = parse_content(_doc(_h(1, "First H1"), _p("a"), _h(1, "Second H1"), _p("b")))
    assert result.title == ""
    assert [item.title for item in result.items] == ["First H1", "Second H1"]


def test_resume_pattern():
    result = parse_content(_doc(
        _h(1, "Academic Experience"), _p("Summary."),
        _h(2, "Ph.D. in CS"), _h(3, "2014-2018"), _p("Thesis."),
        _h(2, "Masters in Data"), _p("Data work."),
    ))
    assert result.title == "Academic Experience"
    assert result.subtitle == ""
    assert [item.title for item in result.items] == ["Ph.D. in CS", "Masters in Data"]
    assert result.items[0].subtitle == "2014-2018"


def test_divider_groups():
    result = parse_content(_doc(
        _h(1, "Intro"), _p("x"), {"type": "horizontalRule"}, _p("a"), {"type": "DividerBlock"}, _p("b"),
    ))
    assert result.title == "Intro"
    assert [item.paragraphs for item in result.items] == [["a"], ["b"]]


def test_card_consolidation():
    result = parse_content(_doc({
        "type": "card-group",
        "content": [
            {"type": "card", "attrs": {"cardType": "person", "name": "Ada"}},
            {"type": "card", "attrs": {"cardType": "person", "name": "Grace"}},
            {"type": "card", "attrs": {"cardType": "event", "title": "Launch"}},
        ],
    }))
    assert list(result.data) == ["person", "event"]
    assert [p["name"] for p in result.data["person"]] == ["Ada", "Grace"]
    assert len(result.data["event"]) == 1
    assert all("cardType" not in card for cards in result.data.values() for card in cards)


def test_tagged_code_blocks_route_to_data():
    result = parse_content(_doc(
        _h(1, "Navigation"),
        {"type": "codeBlock", "attrs": {"language": "json", "tag": "nav-links"},
         "content": [_text('[{"label": "Home", "href": "/"}, {"label": "About", "href": "/about"}]')]},
        {"type": "codeBlock", "attrs": {"language": "yaml", "tag": "settings"},
         "content": [_text("theme: dark\nshowLogo: true")]},
        {"type": "codeBlock", "attrs": {"language": "js"}, "content": [_text("let x = 1;")]},
    ))
    assert result.data == {
        "nav-links": [{"label": "Home", "href": "/"}, {"label": "About", "href": "/about"}],
        "settings": {"theme": "dark", "showLogo": True},
    }
    assert result.sequence[-1].text == "let x = 1;"


def test_options_accept_mapping():
    doc = _doc({"type": "codeBlock", "content": [_text('{"a": 1}')]})
    assert parse_content(doc, {"parse_code_as_json": True}).sequence[0].text == {"a": 1}
    assert parse_content(doc, ParseOptions()).sequence[0].text == '{"a": 1}'


def test_asset_resolver_is_used():
    doc = _doc({"type": "ImageBlock", "attrs": {"info": {"identifier": "hero"}}})
    result = parse_content(doc, resolve_asset=lambda i: f"/assets/{i}.jpg")
    assert result.imgs[0]["url"] == "/assets/hero.jpg"


def test_multi_link_paragraph():
    link = lambda label, href: _text(label, {"type": "link", "attrs": {"href": href}})
    result = parse_content(_doc({"type": "paragraph", "content": [link("Home", "/"), link("About", "/about")]}))
    assert [(e.type, e.label) for e in result.sequence] == [("link", "Home"), ("link", "About")]
    assert [(l["label"], l["href"]) for l in result.links] == [("Home", "/"), ("About", "/about")]


def test_invalid_document_raises():
    with pytest.raises(InvalidDocumentError):
        parse_content(None)


def test_json_dump_has_flat_shape(landing_doc):
    dumped = parse_content(landing_doc).model_dump(mode="json")
    assert {"raw", "sequence", "title", "items"} <= set(dumped)
    assert dumped["sequence"][0] == {"type": "image", "attrs": {"src": "hero.jpg", "role": "banner"}}
    assert dumped["items"][0]["title"] == "Feature One"


def test_options_accept_camel_case_key():
    doc = _doc({"type": "codeBlock", "content": [_text('{"a": 1}')]})
    assert parse_content(doc, {"parseCodeAsJson": True}).sequence[0].text == {"a": 1}


def _linked(value, href):
    return {"type": "text", "text": value, "marks": [{"type": "link", "attrs": {"href": href}}]}


MALFORMED_NODES = {
    "numeric href": {"type": "paragraph", "content": [_linked("Home", 5)]},
    "numeric link text": {"type": "paragraph", "content": [_linked(7, "/a")]},
    "list href in styled link": {"type": "heading", "attrs": {"level": 2},
                                 "content": [_linked("a", ["/x"]), _linked("b", ["/x"])]},
    "numeric dataBlock tag": {"type": "dataBlock", "attrs": {"tag": 2024, "data": {"a": 1}}},
    "numeric codeBlock tag": {"type": "codeBlock", "attrs": {"tag": 2024, "language": "yaml"},
                              "content": [_text("a: 1")]},
    "non-string attr keys": {"type": "paragraph", "attrs": {1: "x"}, "content": [_text("p")]},
    "numeric cardType": {"type": "card-group", "content": [{"type": "card", "attrs": {"cardType": 3}}]},
    "inline link without attrs mapping": {"type": "paragraph",
                                          "content": [_text("p"), {"type": "link", "attrs": "oops"}]},
    "unhashable image direction": {"type": "ImageBlock", "attrs": {"direction": ["left"]}},
    "infinite heading level": {"type": "heading", "attrs": {"level": float("inf")}, "content": [_text("h")]},
}


@pytest.mark.parametrize("node", MALFORMED_NODES.values(), ids=MALFORMED_NODES.keys())
def test_malformed_attributes_do_not_raise(node):
    result = parse_content(_doc(node))
    assert result.model_dump(mode="json", by_alias=True)["raw"]["content"]


def test_malformed_values_are_coerced():
    result = parse_content(_doc(
        {"type": "paragraph", "content": [_linked("Home", 5)]},
        {"type": "paragraph", "content": [_linked(7, "/a")]},
        {"type": "paragraph", "attrs": {1: "x"}, "content": [_text("p")]},
        {"type": "dataBlock", "attrs": {"tag": 2024, "data": {"a": 1}}},
        {"type": "card-group", "content": [{"type": "card", "attrs": {"cardType": 3, "name": "n"}}]},
    ))
    home, seven, paragraph = result.sequence[:3]
    assert (home.href, home.label) == ("5", "Home")
    assert (seven.href, seven.label) == ("/a", "7")
    assert paragraph.attrs == {"1": "x"}
    assert result.data["2024"] == {"a": 1}
    assert result.data["3"][0]["name"] == "n"
