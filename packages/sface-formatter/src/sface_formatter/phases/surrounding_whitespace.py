from typing import List

from ..nodes import NEWLINE, Node, is_element, is_newline, is_space
from .base import Phase, recurse_on_children


class NormalizeSurroundingWhitespace(Phase):
    """If an element has a line break before it, give it one after it too.

    Keeps an element that starts its own line from dangling onto the
    text that follows it:

        <p>Hello</p> world    ->    <p>Hello</p>
                                    world
    """

    @property
    def phase_id(self) -> str: return "L002"
    @property
    def name(self) -> str: return "normalize-surrounding-whitespace"

    def run(self, nodes: List[Node]) -> List[Node]:
        normalized: List[Node] = []
        for node in nodes:
            if (
                is_space(node)
                and len(normalized) >= 2
                and is_element(normalized[-1])
                and is_newline(normalized[-2])
            ):
                node = NEWLINE
            normalized.append(node)
        return recurse_on_children(normalized, self.run)
