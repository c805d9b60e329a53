"""Markdown to document-tree conversion using markdown-it tokens"""

from typing import Any, Optional

from markdown_it import MarkdownIt


BLOCK_NODE_MAP: dict[str, str] = {
    'paragraph_open':    'paragraph',
    'bullet_list_open':  'bulletList',
    'ordered_list_open': 'orderedList',
    'list_item_open':    'listItem',
    'blockquote_open':   'blockquote',
}

INLINE_MARK_MAP: dict[str, str] = {
    'strong': 'bold',
    'em':     'italic',
    'link':   'link',
}


def heading_level(token) -> Optional[int]:
    """Return the level (1-6) of a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag[:1] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _fence_attrs(info: str) -> dict[str, Any]:
    """Split a fence info string 'lang:tag' into codeBlock attrs."""
    word = info.split()[0] if info.strip() else ''
    language, _, tag = word.partition(':')
    attrs: dict[str, Any] = {'language': language or None}
    if tag:
        attrs['tag'] = tag
    return attrs


def _text(text: str, marks: list[dict]) -> dict[str, Any]:
    node: dict[str, Any] = {'type': 'text', 'text': text}
    if marks:
        node['marks'] = [dict(m) for m in marks]
    return node


def _close_mark(marks: list[dict], mark_type: str) -> None:
    for i in range(len(marks) - 1, -1, -1):
        if marks[i]['type'] == mark_type:
            del marks[i]
            return


def inline_to_nodes(children: list) -> list[dict[str, Any]]:
    """Convert inline tokens to text runs with marks, hard breaks and images."""
    nodes: list[dict[str, Any]] = []
    marks: list[dict] = []

    for tok in children:
        name, _, edge = tok.type.rpartition('_')
        if name in INLINE_MARK_MAP and edge == 'open':
            mark: dict[str, Any] = {'type': INLINE_MARK_MAP[name]}
            if name == 'link':
                mark['attrs'] = {'href': tok.attrGet('href'), 'target': None}
            marks.append(mark)
        elif name in INLINE_MARK_MAP and edge == 'close':
            _close_mark(marks, INLINE_MARK_MAP[name])
        elif tok.type in ('text', 'code_inline', 'html_inline') and tok.content:
            nodes.append(_text(tok.content, marks))
        elif tok.type == 'softbreak':
            nodes.append(_text('\n', marks))
        elif tok.type == 'hardbreak':
            nodes.append({'type': 'hardBreak'})
        elif tok.type == 'image':
            nodes.append({
                'type': 'image',
                'attrs': {'src': tok.attrGet('src'), 'alt': tok.content, 'title': tok.attrGet('title')},
            })
    return nodes


def _open_node(tok) -> dict[str, Any]:
    level = heading_level(tok)
    if level is not None:
        return {'type': 'heading', 'attrs': {'level': level}, 'content': []}
    node_type = BLOCK_NODE_MAP.get(tok.type, tok.type.removesuffix('_open'))
    node: dict[str, Any] = {'type': node_type, 'content': []}
    if tok.type == 'ordered_list_open' and tok.attrGet('start') is not None:
        node['attrs'] = {'start': int(tok.attrGet('start'))}
    return node


def _close_node(node: dict[str, Any]) -> dict[str, Any]:
    """A paragraph holding only an image (and whitespace) becomes that image node."""
    if node['type'] == 'paragraph':
        solid = [c for c in node['content'] if not (c['type'] == 'text' and not c['text'].strip())]
        if len(solid) == 1 and solid[0]['type'] == 'image':
            return solid[0]
    return node


def tokens_to_tree(tokens: list) -> dict[str, Any]:
    """Nest a markdown-it block token stream into a document tree."""
    root: dict[str, Any] = {'type': 'doc', 'content': []}
    stack = [root]

    for tok in tokens:
        if tok.nesting == 1:
            node = _open_node(tok)
            stack[-1]['content'].append(node)
            stack.append(node)
        elif tok.nesting == -1:
            node = stack.pop()
            stack[-1]['content'][-1] = _close_node(node)
        elif tok.type == 'inline':
            stack[-1]['content'].extend(inline_to_nodes(tok.children or []))
        elif tok.type in ('fence', 'code_block'):
            text = tok.content.rstrip('\n')
            stack[-1]['content'].append({
                'type': 'codeBlock',
                'attrs': _fence_attrs(tok.info) if tok.type == 'fence' else {'language': None},
                'content': [{'type': 'text', 'text': text}] if text else [],
            })
        elif tok.type == 'hr':
            stack[-1]['content'].append({'type': 'horizontalRule'})
        elif tok.type == 'html_block':
            stack[-1]['content'].append({'type': 'html', 'content': [{'type': 'text', 'text': tok.content}]})

    return root


def read_markdown(text: str, parser: Optional[MarkdownIt] = None) -> dict[str, Any]:
    """Parse markdown text (without frontmatter) into a document tree."""
    return tokens_to_tree((parser or make_parser()).parse(text))
