"""Main/item resolution and flattening of groups into a content entity"""

from typing import Optional

from semdoc.core.models import Body, ContentEntity, Group


def identify_main(groups: list[Group]) -> bool:
    """True when the first group is the document's main content.

    A single group is always main. Otherwise the first group must have a
    level that is more important than the second group's (or the second
    has none).
    """
    if not groups:
        return False
    if len(groups) == 1:
        return True

    first = groups[0].metadata.level
    second = groups[1].metadata.level
    if not first:
        return False
    return not second or first < second


def flatten(group: Optional[Group]) -> ContentEntity:
    """Map a group's header and body onto a ContentEntity without items."""
    if group is None:
        return ContentEntity()
    body = {name: getattr(group.body, name) for name in Body.model_fields}
    return ContentEntity(**group.header.model_dump(), **body)


def resolve(groups: list[Group]) -> ContentEntity:
    """Flatten the main group (if any) with every remaining group as an item."""
    if identify_main(groups):
        main, rest = groups[0], groups[1:]
    else:
        main, rest = None, groups

    entity = flatten(main)
    entity.items = [flatten(group) for group in rest]
    return entity
