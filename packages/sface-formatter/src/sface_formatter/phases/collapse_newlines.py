from itertools import groupby
from typing import List

from ..nodes import Node, is_newline
from .base import Phase, recurse_on_children


class CollapseNewlines(Phase):
    """Prevent more than a single empty line in a row."""

    @property
    def phase_id(self) -> str: return "L001"
    @property
    def name(self) -> str: return "collapse-newlines"

    def run(self, nodes: List[Node]) -> List[Node]:
        collapsed: List[Node] = []
        for newlines, group in groupby(nodes, key=is_newline):
            group = list(group)
            collapsed.extend(group[:2] if newlines else group)
        return recurse_on_children(collapsed, self.run)
