from typing import Callable, Iterable, Sequence, Tuple

from .nodes import Block, Element, Node, Whitespace, is_verbatim_tag


class TreeWalker:
    """Utilities for traversing and searching a template tree"""

    @staticmethod
    def children_of(node: Node) -> Tuple[Node, ...]:
        """Direct children of an element or block, empty for leaf nodes"""
        if isinstance(node, (Element, Block)):
            return node.children
        return ()

    @staticmethod
    def walk(nodes: Iterable[Node], callback: Callable[[Node, int], None], depth: int = 0):
        """Perform a depth-first traversal, calling back with each node and its depth"""
        for node in nodes:
            callback(node, depth)
            TreeWalker.walk(TreeWalker.children_of(node), callback, depth + 1)

    @staticmethod
    def whitespace_kinds(nodes: Sequence[Node]) -> set:
        """Kinds of whitespace marker found anywhere outside verbatim elements"""
        kinds = set()

        def visit(items):
            for n in items:
                if isinstance(n, Whitespace):
                    kinds.add(n.kind)
                elif isinstance(n, Element) and is_verbatim_tag(n.tag):
                    continue
                else:
                    visit(TreeWalker.children_of(n))

        visit(nodes)
        return kinds
