from typing import List

from ..nodes import NEWLINE, Node, is_element, is_newline, is_space
from .base import Phase, recurse_on_children


class RelocateSiblingsAfterLoneClosingTag(Phase):
    """Move a sibling that follows a lone closing tag onto its own line.

    Basically makes sure that this

        <p>
          Foo
        </p> <p>Hello</p>

    turns into this

        <p>
          Foo
        </p>
        <p>Hello</p>
    """

    @property
    def phase_id(self) -> str: return "L005"
    @property
    def name(self) -> str: return "relocate-siblings-after-lone-closing-tag"

    def run(self, nodes: List[Node]) -> List[Node]:
        # Children first, so the decision below sees their final layout
        nodes = recurse_on_children(nodes, self.run)
        for index in range(len(nodes) - 1):
            node = nodes[index]
            if (
                is_element(node)
                and is_space(nodes[index + 1])
                and any(is_newline(child) for child in node.children)
            ):
                nodes[index + 1] = NEWLINE
        return nodes
