"""Unit tests for core/groups/segment.py"""

from semdoc.core.groups.segment import is_banner_image, read_heading_block, segment
from semdoc.core.models import DividerElement, HeadingElement, ImageElement, ParagraphElement


def H(level, text=""):
    return HeadingElement(level=level, text=text or f"h{level}")


def P(text="p"):
    return ParagraphElement(text=text)


def _texts(groups):
    return [[e.text if hasattr(e, "text") else e.type for e in g] for g in groups]


def test_divider_splits_and_is_consumed():
    groups = segment([P("a"), DividerElement(), P("b")])
    assert _texts(groups) == [["a"], ["b"]]


def test_leading_and_repeated_dividers_make_no_empty_groups():
    groups = segment([DividerElement(), DividerElement(), P("a"), DividerElement()])
    assert _texts(groups) == [["a"]]


def test_heading_starts_new_group():
    groups = segment([P("intro"), H(1, "Title"), P("body")])
    assert _texts(groups) == [["intro"], ["Title", "body"]]


def test_deeper_headings_join_the_block():
    assert len(read_heading_block([H(1), H(2), H(3), P()], 0)) == 3


def test_sibling_heading_ends_the_block():
    groups = segment([H(1, "A"), H(2, "B"), H(2, "C")])
    assert _texts(groups) == [["A", "B"], ["C"]]


def test_pretitle_promotion_as_second_heading():
    block = read_heading_block([H(3, "pre"), H(1, "title"), H(2, "sub")], 0)
    assert [h.text for h in block] == ["pre", "title", "sub"]


def test_pretitle_promotion_only_once():
    groups = segment([H(1, "A"), H(2, "B"), H(1, "C")])
    assert _texts(groups) == [["A", "B"], ["C"]]


def test_equal_levels_split():
    groups = segment([H(2, "Apple"), P(), H(2, "Banana"), P()])
    assert _texts(groups) == [["Apple", "p"], ["Banana", "p"]]


def test_banner_image_merges_with_heading():
    image = ImageElement(attrs={"src": "hero.jpg"})
    groups = segment([image, H(1, "Title"), P("body")])
    assert len(groups) == 1
    assert groups[0][0] is image


def test_banner_merge_only_at_start():
    image = ImageElement(attrs={"src": "hero.jpg", "role": "banner"})
    groups = segment([P("intro"), image, H(1, "Title")])
    assert _texts(groups) == [["intro", "image"], ["Title"]]


def test_image_followed_by_paragraph_is_not_merged():
    image = ImageElement(attrs={"src": "x.jpg"})
    groups = segment([image, P("caption"), H(1, "Title")])
    assert _texts(groups) == [["image", "caption"], ["Title"]]


def test_is_banner_image():
    assert is_banner_image([ImageElement(attrs={"role": "banner"}), P()], 0)
    assert is_banner_image([ImageElement(), H(1)], 0)
    assert not is_banner_image([ImageElement()], 0)
    assert not is_banner_image([P(), ImageElement(), H(1)], 1)


def test_order_is_preserved():
    elements = [P("a"), H(1, "b"), P("c"), DividerElement(), P("d"), H(2, "e")]
    flat = [e.text for g in segment(elements) for e in g]
    assert flat == ["a", "b", "c", "d", "e"]


def test_empty_sequence():
    assert segment([]) == []
