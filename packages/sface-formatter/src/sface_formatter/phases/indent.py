from dataclasses import replace
from typing import List

from ..nodes import (
    INDENT,
    INDENT_ONE_LESS,
    NEWLINE,
    Block,
    Element,
    Node,
    is_newline,
    is_verbatim_tag,
)
from .base import Phase


def add_indentation(nodes: List[Node]) -> List[Node]:
    """Follow every newline in one child list with an indentation marker.

    The renderer knows how deep each list is; this only decides whether the
    next line is a child (``INDENT``) or the parent's closing tag
    (``INDENT_ONE_LESS``).
    """
    indented: List[Node] = []
    index = 0
    while index < len(nodes):
        node = nodes[index]
        if not is_newline(node):
            indented.append(node)
            index += 1
        elif index + 1 < len(nodes) and is_newline(nodes[index + 1]):
            # Empty line; the indentation goes on the line after it
            indented.extend([NEWLINE, NEWLINE, INDENT])
            index += 2
        elif index == len(nodes) - 1:
            indented.extend([NEWLINE, INDENT_ONE_LESS])
            index += 1
        else:
            indented.extend([NEWLINE, INDENT])
            index += 1
    return indented


class Indent(Phase):
    """Turn newlines into indentation instructions. Runs last among the layout phases.

    Relies on CollapseNewlines, which leaves at most 2 newlines in a row.
    """

    @property
    def phase_id(self) -> str: return "L007"
    @property
    def name(self) -> str: return "indent"

    def run(self, nodes: List[Node]) -> List[Node]:
        # Indent the first line of the template
        return self.indent([INDENT, *nodes])

    def indent(self, nodes: List[Node]) -> List[Node]:
        result = []
        for node in add_indentation(nodes):
            if isinstance(node, Element) and not is_verbatim_tag(node.tag):
                node = replace(node, children=tuple(self.indent(list(node.children))))
            elif isinstance(node, Block):
                node = self.indent_block(node)
            result.append(node)
        return result

    def indent_block(self, block: Block) -> Block:
        if block.has_sub_blocks and block.name == "case":
            return self.indent_case_block(block)
        if block.has_sub_blocks:
            # if/else, for/else: sub-blocks line up with the parent block
            return replace(block, children=tuple(self.indent_block(sub) for sub in block.children))
        return replace(block, children=tuple(self.indent(list(block.children))))

    def indent_case_block(self, block: Block) -> Block:
        """``case`` nests its ``match`` arms one level deeper than ``if`` nests ``else``.

        The dedent that closes the last arm is moved up to the ``case`` block
        so that ``{/case}`` lines up with ``{#case}`` instead of the arms.
        """
        arms = [self.indent_block(arm) for arm in block.children]
        closing: List[Node] = []
        if arms and arms[-1].children and arms[-1].children[-1] == INDENT_ONE_LESS:
            arms[-1] = replace(arms[-1], children=arms[-1].children[:-1])
            closing = [INDENT_ONE_LESS]
        return replace(block, children=(NEWLINE, INDENT, *arms, *closing))
