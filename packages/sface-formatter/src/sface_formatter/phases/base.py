from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, FrozenSet, List, Sequence

from ..errors import StructuralInvariantError
from ..nodes import COARSE_KINDS, Block, Element, Node, WhitespaceKind, is_verbatim_tag
from ..walker import TreeWalker

NodeTransformer = Callable[[List[Node]], List[Node]]


class Phase(ABC):
    """A single layout rule applied to the whole tree between tagging and rendering.

    Phases are pure: ``run`` receives a list of sibling nodes and returns a new
    list, recursing into nested children itself.
    """

    # Marker kinds this phase knows how to handle
    accepted_kinds: FrozenSet[WhitespaceKind] = COARSE_KINDS

    @property
    @abstractmethod
    def phase_id(self) -> str:
        """Unique phase identifier (e.g., 'L001')."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable phase name (e.g., 'collapse-newlines')."""
        pass

    @property
    def description(self) -> str:
        """First line of the phase's docstring."""
        lines = (type(self).__doc__ or "").strip().splitlines()
        return lines[0] if lines else ""

    def apply(self, nodes: Sequence[Node]) -> List[Node]:
        """Check the tree only holds markers of this stage, then run the phase."""
        unexpected = TreeWalker.whitespace_kinds(nodes) - self.accepted_kinds
        if unexpected:
            kinds = ", ".join(sorted(kind.value for kind in unexpected))
            raise StructuralInvariantError(self.name, f"unexpected whitespace markers: {kinds}")
        return self.run(list(nodes))

    @abstractmethod
    def run(self, nodes: List[Node]) -> List[Node]:
        pass


def recurse_on_children(nodes: Sequence[Node], run: NodeTransformer) -> List[Node]:
    """Apply ``run`` to the children of every element and block in ``nodes``.

    Verbatim elements are left alone. A block with sub-blocks is descended
    through so that ``run`` sees each sub-block's own children.
    """
    result = []
    for node in nodes:
        if isinstance(node, Element) and not is_verbatim_tag(node.tag):
            node = replace(node, children=tuple(run(list(node.children))))
        elif isinstance(node, Block):
            node = transform_block(node, run)
        result.append(node)
    return result


def transform_block(block: Block, run: NodeTransformer) -> Block:
    if block.has_sub_blocks:
        return replace(block, children=tuple(recurse_on_children(block.children, run)))
    return replace(block, children=tuple(run(list(block.children))))
