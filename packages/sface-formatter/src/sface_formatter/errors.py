"""Exceptions raised while formatting a template tree.

SfaceFormatterError (base)
├── ExpressionFormatError      # embedded code rejected by the expression formatter
└── StructuralInvariantError   # a phase received a tree it cannot handle (a bug)
"""

from typing import Optional


class SfaceFormatterError(Exception):
    """Base class for every error the formatter reports."""


class ExpressionFormatError(SfaceFormatterError):
    """Embedded code that the expression formatter could not format."""

    def __init__(self, fragment: str, location: str, reason: Optional[str] = None):
        self.fragment = fragment
        self.location = location
        self.reason = reason
        message = f"Cannot format expression in {location}: {fragment!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class StructuralInvariantError(SfaceFormatterError):
    """A phase met a node it does not expect at its stage of the pipeline."""

    def __init__(self, phase: str, detail: str):
        self.phase = phase
        self.detail = detail
        super().__init__(f"[{phase}] {detail}")
