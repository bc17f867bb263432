from typing import List

from ..nodes import Node, is_newline
from .base import Phase, recurse_on_children


class TrimBlankLines(Phase):
    """No empty line directly inside an opening tag or directly before a closing tag."""

    @property
    def phase_id(self) -> str: return "L006"
    @property
    def name(self) -> str: return "trim-leading-trailing-blank-lines"

    def run(self, nodes: List[Node]) -> List[Node]:
        if len(nodes) >= 2 and is_newline(nodes[0]) and is_newline(nodes[1]):
            nodes = nodes[1:]
        if len(nodes) >= 2 and is_newline(nodes[-1]) and is_newline(nodes[-2]):
            nodes = nodes[:-1]
        return recurse_on_children(nodes, self.run)
