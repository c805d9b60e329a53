"""Sequence partitioning into groups by divider and heading boundaries"""

from semdoc.core.models import DividerElement, HeadingElement, ImageElement, SequenceElement


def heading_level(element: SequenceElement) -> int:
    """Numeric level of a heading for ordering; a missing level compares as 0."""
    return getattr(element, 'level', None) or 0


def is_banner_image(sequence: list[SequenceElement], i: int) -> bool:
    """True for a leading image that is a banner role or sits directly above a heading."""
    if i != 0 or i + 1 >= len(sequence) or not isinstance(sequence[i], ImageElement):
        return False
    return sequence[i].attrs.get('role') == 'banner' or isinstance(sequence[i + 1], HeadingElement)


def read_heading_block(sequence: list[SequenceElement], start: int) -> list[HeadingElement]:
    """Consume the heading at start plus any headings that nest under it.

    A following heading joins when it is strictly deeper than the last one
    absorbed, or, as the second heading only, when it is shallower (a
    pretitle above its title). Equal levels end the block.
    """
    block = [sequence[start]]
    for element in sequence[start + 1:]:
        if not isinstance(element, HeadingElement):
            break
        previous = block[-1]
        if heading_level(element) > heading_level(previous):
            block.append(element)
        elif len(block) == 1 and heading_level(element) < heading_level(previous):
            block.append(element)
        else:
            break
    return block


def segment(sequence: list[SequenceElement]) -> list[list[SequenceElement]]:
    """Split a sequence into ordered element runs; dividers are consumed."""
    groups: list[list[SequenceElement]] = []
    current: list[SequenceElement] = []

    i = 0
    while i < len(sequence):
        element = sequence[i]

        if isinstance(element, DividerElement):
            if current:
                groups.append(current)
                current = []
            i += 1
            continue

        if isinstance(element, HeadingElement):
            banner_merge = i == 1 and is_banner_image(sequence, 0)
            if current and not banner_merge:
                groups.append(current)
                current = []
            block = read_heading_block(sequence, i)
            current.extend(block)
            i += len(block)
            continue

        current.append(element)
        i += 1

    if current:
        groups.append(current)
    return groups
