"""Structured-data deserialization for tagged code blocks"""

import json
import logging
from collections.abc import Mapping
from typing import Any

import yaml

from semdoc.core.sequence.text import as_str


logger = logging.getLogger(__name__)

YAML_LANGUAGES = ('yaml', 'yml')


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        logger.debug("Code block is not valid JSON; keeping raw text")
        return text


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        logger.debug("Code block is not valid YAML; keeping raw text")
        return text


def deserialize(text: str, language: Any = None, prefer_json: bool = False) -> Any:
    """Parse text by language tag (json, yaml/yml); failures and unknown languages return text.

    With prefer_json, a language other than yaml/yml is tried as JSON.
    """
    lang = language.lower() if isinstance(language, str) else ''
    if lang in YAML_LANGUAGES:
        return _load_yaml(text)
    if lang == 'json' or prefer_json:
        return _load_json(text)
    return text


def code_block_data(text: str, attrs: Any, parse_code_as_json: bool = False) -> Any:
    """Return the value a code block carries.

    Tagged blocks prefer the pre-parsed attrs['data'] value, then runtime
    parsing by language. Untagged blocks stay raw text unless
    parse_code_as_json asks for a JSON attempt.
    """
    attrs = attrs if isinstance(attrs, Mapping) else {}
    if not as_str(attrs.get('tag')):
        return _load_json(text) if parse_code_as_json else text
    if attrs.get('data') is not None:
        return attrs['data']
    return deserialize(text, attrs.get('language'), prefer_json=parse_code_as_json)
