from typing import List

from .base import Phase, recurse_on_children, transform_block
from .blank_lines import TrimBlankLines
from .collapse_newlines import CollapseNewlines
from .edge_children import ConvertEdgeWhitespaceToNewlines
from .element_children import EnsureNewlinesAroundElementChildren
from .final_newline import FinalNewline
from .indent import Indent, add_indentation
from .lone_closing_tag import RelocateSiblingsAfterLoneClosingTag
from .surrounding_whitespace import NormalizeSurroundingWhitespace


def default_phases() -> List[Phase]:
    """Structural phases in the order they must run (Indent always runs after them)."""
    return [
        CollapseNewlines(),
        NormalizeSurroundingWhitespace(),
        EnsureNewlinesAroundElementChildren(),
        ConvertEdgeWhitespaceToNewlines(),
        RelocateSiblingsAfterLoneClosingTag(),
        TrimBlankLines(),
    ]


__all__ = [
    "Phase",
    "recurse_on_children",
    "transform_block",
    "default_phases",
    "CollapseNewlines",
    "NormalizeSurroundingWhitespace",
    "EnsureNewlinesAroundElementChildren",
    "ConvertEdgeWhitespaceToNewlines",
    "RelocateSiblingsAfterLoneClosingTag",
    "TrimBlankLines",
    "Indent",
    "add_indentation",
    "FinalNewline",
]
