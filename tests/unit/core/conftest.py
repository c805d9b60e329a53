"""Shared fixtures for core unit tests"""

import pytest


def text(value, *marks):
    node = {"type": "text", "text": value}
    if marks:
        node["marks"] = list(marks)
    return node


def link(href, target=None):
    attrs = {"href": href}
    if target:
        attrs["target"] = target
    return {"type": "link", "attrs": attrs}


@pytest.fixture(name="landing_doc")
def landing_doc_fixture():
    """A banner image, a pretitle/title/subtitle block, body content and two items."""
    return {
        "type": "doc",
        "content": [
            {"type": "image", "attrs": {"src": "hero.jpg", "role": "banner"}},
            {"type": "heading", "attrs": {"level": 3}, "content": [text("WELCOME")]},
            {"type": "heading", "attrs": {"level": 1}, "content": [text("Main Title")]},
            {"type": "heading", "attrs": {"level": 2}, "content": [text("Subtitle")]},
            {"type": "paragraph", "content": [text("Intro "), text("text", {"type": "bold"})]},
            {"type": "paragraph", "content": [text("Get started", link("/start"))]},
            {"type": "heading", "attrs": {"level": 2}, "content": [text("Feature One")]},
            {"type": "paragraph", "content": [text("First feature.")]},
            {"type": "heading", "attrs": {"level": 2}, "content": [text("Feature Two")]},
            {"type": "paragraph", "content": [text("Second feature.")]},
        ],
    }
