"""Pretty-printer for component templates."""

from .engine import FormatterEngine
from .errors import ExpressionFormatError, SfaceFormatterError, StructuralInvariantError
from .models import FormatResult, FormatResults, FormatterConfig

__all__ = [
    "FormatterEngine",
    "FormatterConfig",
    "FormatResult",
    "FormatResults",
    "SfaceFormatterError",
    "ExpressionFormatError",
    "StructuralInvariantError",
]
