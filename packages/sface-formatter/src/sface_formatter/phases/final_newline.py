from typing import List

from ..nodes import INDENT, NEWLINE, Node, WhitespaceKind
from .base import Phase


class FinalNewline(Phase):
    """Add a newline after all of the nodes if the source template ended with one."""

    accepted_kinds = frozenset(
        {
            WhitespaceKind.SPACE,
            WhitespaceKind.NEWLINE,
            WhitespaceKind.INDENT,
            WhitespaceKind.INDENT_ONE_LESS,
        }
    )

    def __init__(self, trailing_newline: bool = False):
        self.trailing_newline = trailing_newline

    @property
    def phase_id(self) -> str: return "L008"
    @property
    def name(self) -> str: return "final-newline"

    def run(self, nodes: List[Node]) -> List[Node]:
        # An empty template stays empty
        if nodes == [INDENT]:
            return []
        if self.trailing_newline:
            return nodes + [NEWLINE]
        return nodes
