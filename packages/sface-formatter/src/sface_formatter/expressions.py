"""Formatting of code embedded in templates.

The renderer never looks inside an expression itself. It asks an
``ExpressionFormatter`` to canonicalize the code, to recognise literal values
that can drop their interpolation brackets, and to say whether an attribute
expression uses "invisible brackets", that is sugar like ``{{ "a", "b" }}`` or
``{{ key: value }}`` whose outer list/mapping is implied.

``PythonExpressionFormatter`` implements this for Python expressions on top
of the standard ``ast`` module.
"""

import ast
import io
import textwrap
import tokenize
from typing import List, Optional, Protocol, Tuple, Union

LiteralValue = Union[str, bool, int]


class ExpressionFormatter(Protocol):
    def format(self, code: str, line_length: int) -> str:
        """Return canonical code, raising ``SyntaxError`` when ``code`` is invalid."""
        ...

    def parse_literal(self, code: str) -> Optional[LiteralValue]:
        """Return the value when ``code`` is a single string, boolean or integer literal."""
        ...

    def invisible_brackets(self, code: str) -> Optional[Tuple[str, str]]:
        """Return the implied bracket pair when ``code`` only parses once wrapped."""
        ...


def _has_comment(code: str) -> bool:
    tokens = tokenize.generate_tokens(io.StringIO(code).readline)
    return any(token.type == tokenize.COMMENT for token in tokens)


def group_digits(value: int) -> str:
    """Integers of six digits or more get ``_`` separators.

    >>> group_digits(12345), group_digits(1000000000)
    ('12345', '1_000_000_000')
    """
    digits = str(value)
    if len(digits.lstrip("-")) > 5:
        return f"{value:_}"
    return digits


def dedent_continuation(code: str) -> str:
    """Strip the indentation shared by every line after the first.

    Code kept as written is re-indented by the renderer, so the indentation
    it picked up from an earlier run must not accumulate.

    >>> dedent_continuation("foo(  # note\\n      a)")
    'foo(  # note\\na)'
    """
    first, _, rest = code.strip().partition("\n")
    if not rest:
        return first
    return f"{first}\n{textwrap.dedent(rest)}"


class PythonExpressionFormatter:
    """Formats Python expressions with ``ast.unparse``.

    Expressions that stay longer than ``line_length`` after unparsing and are
    a list, tuple, set, dict or call get one element per line.
    """

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def _parse(self, code: str) -> ast.Expression:
        return ast.parse(code.strip(), mode="eval")

    def format(self, code: str, line_length: int) -> str:
        tree = self._parse(code)
        if _has_comment(code):
            # ast drops comments; keep the author's code instead of losing them
            return dedent_continuation(code)

        body = tree.body
        if isinstance(body, ast.Constant) and type(body.value) is int:
            return group_digits(body.value)

        one_line = ast.unparse(body)
        if len(one_line) <= line_length:
            return one_line
        return self._explode(body) or one_line

    def parse_literal(self, code: str) -> Optional[LiteralValue]:
        try:
            body = self._parse(code).body
        except (SyntaxError, ValueError):
            return None
        if isinstance(body, ast.Constant) and isinstance(body.value, (str, bool, int)):
            return body.value
        return None

    def invisible_brackets(self, code: str) -> Optional[Tuple[str, str]]:
        code = code.strip()
        try:
            wrapped = ast.parse(f"[{code}]", mode="eval").body
        except (SyntaxError, ValueError):
            wrapped = None

        if wrapped is not None:
            # `"a", "b"` is a list without its brackets; `[1, 2]` or `"a"` is not
            if isinstance(wrapped, ast.List) and len(wrapped.elts) > 1:
                return ("[", "]")
            return None

        # `key: value, other: value` is a mapping without its braces
        try:
            mapping = ast.parse(f"{{{code}}}", mode="eval").body
        except (SyntaxError, ValueError):
            return None
        if isinstance(mapping, ast.Dict):
            return ("{", "}")
        return None

    def _explode(self, body: ast.expr) -> Optional[str]:
        items: List[str]
        if isinstance(body, ast.List):
            opening, closing = "[", "]"
            items = [ast.unparse(element) for element in body.elts]
        elif isinstance(body, ast.Tuple) and len(body.elts) > 1:
            opening, closing = "(", ")"
            items = [ast.unparse(element) for element in body.elts]
        elif isinstance(body, ast.Set):
            opening, closing = "{", "}"
            items = [ast.unparse(element) for element in body.elts]
        elif isinstance(body, ast.Dict):
            opening, closing = "{", "}"
            items = [
                f"{ast.unparse(key)}: {ast.unparse(value)}" if key is not None else f"**{ast.unparse(value)}"
                for key, value in zip(body.keys, body.values)
            ]
        elif isinstance(body, ast.Call):
            opening, closing = f"{ast.unparse(body.func)}(", ")"
            items = [ast.unparse(arg) for arg in body.args]
            items += [
                f"{keyword.arg}={ast.unparse(keyword.value)}" if keyword.arg else f"**{ast.unparse(keyword.value)}"
                for keyword in body.keywords
            ]
        else:
            return None

        if not items:
            return None
        lines = ",\n".join(f"{self.indent}{item}" for item in items)
        return f"{opening}\n{lines}\n{closing}"
