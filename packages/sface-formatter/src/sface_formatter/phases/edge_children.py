from typing import List

from ..nodes import NEWLINE, Node, is_element, is_space
from .base import Phase, recurse_on_children


class ConvertEdgeWhitespaceToNewlines(Phase):
    """A space between a tag and its first or last child element becomes a newline.

        <div> <p>Hello</p> </div>    ->    <div>
                                             <p>Hello</p>
                                           </div>
    """

    @property
    def phase_id(self) -> str: return "L004"
    @property
    def name(self) -> str: return "convert-edge-whitespace-to-newlines"

    def run(self, nodes: List[Node]) -> List[Node]:
        nodes = list(nodes)
        if len(nodes) >= 2 and is_space(nodes[0]) and is_element(nodes[1]):
            nodes[0] = NEWLINE
        if len(nodes) >= 2 and is_space(nodes[-1]) and is_element(nodes[-2]):
            nodes[-1] = NEWLINE
        return recurse_on_children(nodes, self.run)
