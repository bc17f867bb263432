from typing import List

from ..nodes import NEWLINE, Element, Node, is_element, is_space
from .base import Phase, recurse_on_children


def has_element_children(element: Element) -> bool:
    return any(is_element(child) for child in element.children)


class EnsureNewlinesAroundElementChildren(Phase):
    """Elements that contain other elements are separated from siblings by newlines, not spaces."""

    @property
    def phase_id(self) -> str: return "L003"
    @property
    def name(self) -> str: return "ensure-newlines-around-element-children"

    def run(self, nodes: List[Node]) -> List[Node]:
        nodes = list(nodes)
        for index, node in enumerate(nodes):
            if not (is_element(node) and has_element_children(node)):
                continue
            # Matches `El, SPACE` and `SPACE, El, SPACE`; a space before the
            # element is only rewritten when one follows it as well
            if index + 1 < len(nodes) and is_space(nodes[index + 1]):
                nodes[index + 1] = NEWLINE
                if index > 0 and is_space(nodes[index - 1]):
                    nodes[index - 1] = NEWLINE
        return recurse_on_children(nodes, self.run)
