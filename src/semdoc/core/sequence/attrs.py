"""Attribute normalization for icons, images, videos, cards and documents"""

import html
import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any, Optional


logger = logging.getLogger(__name__)

AssetResolver = Callable[[str], Optional[str]]

TAG_RE = re.compile(r'<[^>]*>')
IMAGE_SIZES = {'center': 'basic', 'wide': 'lg', 'fill': 'full'}
ICON_FIELDS = ('svg', 'url', 'size', 'color', 'preserveColors', 'href', 'target')


def null_resolver(identifier: str) -> Optional[str]:
    """Default asset resolver: no identifier maps to a URL."""
    return None


def as_mapping(value: Any) -> dict[str, Any]:
    """Return a shallow dict copy of value with string keys when it is a mapping, else an empty dict."""
    if not isinstance(value, Mapping):
        return {}
    return {str(key): item for key, item in value.items()}


def strip_tags(value: Any) -> str:
    """Remove HTML tags and decode entities; non-strings become ''."""
    if not value or not isinstance(value, str):
        return ''
    return html.unescape(TAG_RE.sub('', value))


def asset_url(info: Any, resolve_asset: AssetResolver) -> str:
    """Return the direct src/url of info, else the resolved identifier URL, else ''."""
    info = as_mapping(info)
    src = info.get('src') or info.get('url')
    if src:
        return src
    identifier = info.get('identifier')
    if identifier:
        return resolve_asset(identifier) or ''
    return ''


def normalize_icon(attrs: Any) -> dict[str, Any]:
    attrs = as_mapping(attrs)
    return {name: attrs.get(name) for name in ICON_FIELDS}


def icon_svg(attrs: Any) -> Any:
    return as_mapping(attrs).get('svg')


def normalize_image(attrs: Any, resolve_asset: AssetResolver) -> dict[str, Any]:
    """Flatten an ImageBlock's attrs into the public image record."""
    attrs = as_mapping(attrs)
    info = as_mapping(attrs.get('info'))
    identifier = info.get('identifier')
    direction = attrs.get('direction')
    caption = strip_tags(attrs.get('caption', ''))

    url = attrs.get('url')
    if identifier:
        url = asset_url(info, resolve_asset)

    return {
        'contentType': info.get('contentType'),
        'viewType': info.get('viewType'),
        'contentId': attrs.get('targetId') or info.get('contentId'),
        'url': url,
        'value': identifier or '',
        'alt': attrs.get('alt') or caption,
        'caption': caption,
        'direction': direction,
        'filter': attrs.get('filter'),
        'imgPos': direction if direction in ('left', 'right') else '',
        'size': IMAGE_SIZES.get(direction, 'basic') if isinstance(direction, str) else 'basic',
        'href': attrs.get('href', ''),
        'target': attrs.get('target', ''),
        'theme': attrs.get('theme'),
        'role': attrs.get('role'),
        'credit': attrs.get('credit', ''),
    }


def normalize_video(attrs: Any, resolve_asset: AssetResolver) -> dict[str, Any]:
    attrs = as_mapping(attrs)
    source = {'src': attrs.get('src'), **as_mapping(attrs.get('info'))}
    return {
        'src': asset_url(source, resolve_asset),
        'caption': attrs.get('caption', ''),
        'direction': attrs.get('direction'),
        'coverImg': asset_url(attrs.get('coverImg'), resolve_asset),
        'alt': attrs.get('alt'),
        'href': attrs.get('href', ''),
        'target': attrs.get('target', ''),
    }


def _decode_address(address: Any) -> Any:
    if not address:
        return None
    if not isinstance(address, str):
        return address
    try:
        return json.loads(address)
    except ValueError:
        logger.debug("Card address is not valid JSON: %r", address)
        return None


def parse_card(attrs: Any, resolve_asset: AssetResolver) -> dict[str, Any]:
    """Card attrs with a decoded address, normalized icon and resolved cover image."""
    card = as_mapping(attrs)
    address = card.pop('address', None)
    if card.get('icon'):
        card['icon'] = normalize_icon(card['icon'])
    card['address'] = _decode_address(address)
    card['coverImg'] = asset_url(card.get('coverImg'), resolve_asset)
    return card


def parse_document(attrs: Any, resolve_asset: AssetResolver) -> dict[str, Any]:
    """Document attrs with href from src, or a downloadUrl resolved from info.identifier."""
    doc = as_mapping(attrs)
    src = doc.pop('src', None)
    info = as_mapping(doc.pop('info', None))
    doc['coverImg'] = asset_url(doc.get('coverImg'), resolve_asset)

    if src:
        doc['href'] = src
    elif info.get('identifier'):
        doc['downloadUrl'] = resolve_asset(info['identifier'])
    return doc
