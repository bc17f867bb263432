"""Whitespace tagging.

Inspects raw text nodes from the parser and lifts their whitespace out into
``Whitespace`` marker siblings:

- whitespace without a line break becomes ``SPACE``
- a single line break becomes ``NEWLINE``
- two or more line breaks become ``NEWLINE, NEWLINE`` (a paragraph break)

Everything after this stage only looks at markers, never at raw whitespace.
"""

import re
from dataclasses import replace
from typing import Iterable, List

from .errors import StructuralInvariantError
from .nodes import (
    BEFORE_CHILD,
    BEFORE_CLOSING_TAG,
    BEFORE_WHITESPACE,
    NEWLINE,
    SPACE,
    Block,
    Element,
    Node,
    Text,
    is_newline,
    is_verbatim_tag,
    is_whitespace,
)

# HTML whitespace; other Unicode spaces such as U+00A0 are content
HTML_WHITESPACE = " \t\n\r\f"

# Any run of whitespace that contains a line break
_LINE_BREAK = re.compile(r"[ \t\n\r\f]*\n[ \t\n\r\f]*")


def classify(whitespace: str) -> List[Node]:
    """Marker(s) standing for a run of pure whitespace."""
    newlines = whitespace.count("\n")
    if newlines == 0:
        return [SPACE]
    if newlines == 1:
        return [NEWLINE]
    return [NEWLINE, NEWLINE]


def tag_text(text: Text) -> List[Node]:
    value = text.value
    if not value:
        return []

    trimmed = value.strip(HTML_WHITESPACE)
    if not trimmed:
        return classify(value)

    tagged: List[Node] = []

    leading = value[: len(value) - len(value.lstrip(HTML_WHITESPACE))]
    if leading:
        tagged.extend(classify(leading))

    position = 0
    for match in _LINE_BREAK.finditer(trimmed):
        tagged.append(Text(trimmed[position : match.start()]))
        tagged.extend(classify(match.group()))
        position = match.end()
    tagged.append(Text(trimmed[position:]))

    trailing = value[len(value.rstrip(HTML_WHITESPACE)) :]
    if trailing:
        tagged.extend(classify(trailing))

    return tagged


def tag(node: Node) -> List[Node]:
    """Tag a single node, returning the nodes that replace it."""
    if isinstance(node, Text):
        return tag_text(node)

    if isinstance(node, Element):
        if is_verbatim_tag(node.tag):
            return [node]
        return [replace(node, children=tuple(tag_children(node.children)))]

    if isinstance(node, Block):
        return [_tag_block(node)]

    # Expressions and comments are opaque to this stage
    return [node]


def tag_children(children: Iterable[Node]) -> List[Node]:
    tagged = [tagged_node for child in children for tagged_node in tag(child)]

    # No empty line right after an opening tag or right before a closing tag
    if len(tagged) >= 2 and is_newline(tagged[0]) and is_newline(tagged[1]):
        tagged = tagged[1:]
    if len(tagged) >= 2 and is_newline(tagged[-1]) and is_newline(tagged[-2]):
        tagged = tagged[:-1]

    return tagged


def _tag_block(block: Block) -> Block:
    if not block.has_sub_blocks:
        return replace(block, children=tuple(tag_children(block.children)))

    sub_blocks = []
    for child in block.children:
        if isinstance(child, Block):
            sub_blocks.append(_tag_block(child))
        elif isinstance(child, Text) and not child.value.strip(HTML_WHITESPACE):
            # Sub-blocks own the whitespace around their contents
            continue
        else:
            raise StructuralInvariantError(
                "tagger", f"block '{block.name}' mixes sub-blocks with {type(child).__name__} nodes"
            )
    return replace(block, children=tuple(sub_blocks))


def tag_document(nodes: Iterable[Node]) -> List[Node]:
    """Tag a whole template, trimming whitespace around it."""
    tagged = [tagged_node for node in nodes for tagged_node in tag(node)]

    start = 0
    while start < len(tagged) and is_whitespace(tagged[start]):
        start += 1
    end = len(tagged)
    while end > start and is_whitespace(tagged[end - 1]):
        end -= 1

    return tagged[start:end]


def contextualize(nodes: List[Node]) -> List[Node]:
    """Replace coarse newlines with markers describing what follows them.

    - ``BEFORE_WHITESPACE``: another newline follows (an empty line)
    - ``BEFORE_CLOSING_TAG``: last node of its child list
    - ``BEFORE_CHILD``: a sibling follows
    """
    result: List[Node] = []
    for index, node in enumerate(nodes):
        if is_newline(node):
            following = nodes[index + 1] if index + 1 < len(nodes) else None
            if following is None:
                result.append(BEFORE_CLOSING_TAG)
            elif is_newline(following):
                result.append(BEFORE_WHITESPACE)
            else:
                result.append(BEFORE_CHILD)
        elif isinstance(node, Element) and not is_verbatim_tag(node.tag):
            result.append(replace(node, children=tuple(contextualize(list(node.children)))))
        elif isinstance(node, Block):
            result.append(replace(node, children=tuple(contextualize(list(node.children)))))
        else:
            result.append(node)
    return result
