"""Turn a laid-out node tree into template text.

By the time a tree reaches the renderer every layout decision has been made
by the phases; the renderer only maps markers to strings, pads them with the
indentation of the current depth and delegates embedded code to the
expression formatter.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .errors import ExpressionFormatError, StructuralInvariantError
from .expressions import ExpressionFormatter
from .models import FormatterConfig
from .nodes import (
    DEFAULT_BLOCK,
    PRIMARY_BLOCKS,
    ROOT_ATTRIBUTE,
    SLOT_TEMPLATE,
    SPREAD_ATTRIBUTES,
    Attribute,
    AttrValue,
    Block,
    BoolLiteral,
    Comment,
    Element,
    Expression,
    IntLiteral,
    Mixed,
    Node,
    StringLiteral,
    Text,
    Visibility,
    Whitespace,
    WhitespaceKind,
    is_verbatim_tag,
    is_void_element,
)

_LINE_COMMENT = re.compile(r"\s*#([^\n]*)\s*")

# Strings that can be written as a plain quoted attribute without changing meaning
_QUOTABLE_STRING = re.compile(r'[^"{}\n\\]*')


@dataclass(frozen=True)
class RenderContext:
    depth: int = 0
    parent_tag: Optional[str] = None

    def nested(self, levels: int = 1, parent_tag: Optional[str] = None) -> "RenderContext":
        return RenderContext(self.depth + levels, parent_tag or self.parent_tag)


@dataclass(frozen=True)
class RenderedAttribute:
    text: str
    # String literals keep their newlines exactly as written
    indent_newlines: bool = True


def interpolate(code: str) -> str:
    """Wrap formatted code in interpolation brackets.

    >>> interpolate("foo"), interpolate("[\\n  a\\n]")
    ('{{ foo }}', '{{[\\n  a\\n]}}')
    """
    if "\n" in code:
        return f"{{{{{code}}}}}"
    return f"{{{{ {code} }}}}"


def literal_value(value: object) -> Optional[AttrValue]:
    if isinstance(value, bool):
        return BoolLiteral(value)
    if isinstance(value, int):
        return IntLiteral(value)
    if isinstance(value, str) and _QUOTABLE_STRING.fullmatch(value):
        return StringLiteral(value)
    return None


class Renderer:
    """Render nodes produced by the Indent and FinalNewline phases."""

    def __init__(self, config: FormatterConfig, expressions: ExpressionFormatter):
        self.config = config
        self.expressions = expressions

    def render(self, nodes: Sequence[Node]) -> str:
        return self.render_nodes(nodes, RenderContext(depth=self.config.indent))

    def render_nodes(self, nodes: Sequence[Node], context: RenderContext) -> str:
        return "".join(self.render_node(node, context) for node in nodes)

    def render_node(self, node: Node, context: RenderContext) -> str:
        if isinstance(node, Whitespace):
            return self.render_whitespace(node, context)
        if isinstance(node, Text):
            return node.value
        if isinstance(node, Expression):
            return self.render_expression(node, context)
        if isinstance(node, Comment):
            return self.render_comment(node)
        if isinstance(node, Element):
            return self.render_element(node, context)
        if isinstance(node, Block):
            return self.render_block(node, context)
        raise StructuralInvariantError("render", f"cannot render {type(node).__name__}")

    def indentation(self, depth: int) -> str:
        return self.config.tab * max(depth, 0)

    def render_whitespace(self, node: Whitespace, context: RenderContext) -> str:
        kind = node.kind
        if kind is WhitespaceKind.SPACE:
            return " "
        if kind in (WhitespaceKind.NEWLINE, WhitespaceKind.BEFORE_WHITESPACE):
            return "\n"
        if kind is WhitespaceKind.INDENT:
            return self.indentation(context.depth)
        if kind is WhitespaceKind.INDENT_ONE_LESS:
            return self.indentation(context.depth - 1)
        if kind is WhitespaceKind.BEFORE_CHILD:
            return "\n" + self.indentation(context.depth)
        return "\n" + self.indentation(context.depth - 1)

    # Embedded code

    def format_code(self, code: str, location: str) -> str:
        code = code.strip()
        try:
            return self.expressions.format(code, self.config.line_length)
        except SyntaxError as e:
            raise ExpressionFormatError(code, location, e.msg) from e
        except ValueError as e:
            # e.g. null bytes in the source
            raise ExpressionFormatError(code, location, str(e)) from e

    def format_attribute_expression(self, code: str, location: str) -> str:
        """Format attribute-style code, keeping implied brackets implied."""
        code = code.strip()
        brackets = self.expressions.invisible_brackets(code)
        if brackets is None:
            return self.format_code(code, location)
        opening, closing = brackets
        formatted = self.format_code(f"{opening}{code}{closing}", location)
        return formatted[len(opening):-len(closing)]

    def render_expression(self, expression: Expression, context: RenderContext) -> str:
        comment = _LINE_COMMENT.fullmatch(expression.code)
        if comment:
            return self.render_comment(Comment(comment.group(1), Visibility.PRIVATE))

        if context.parent_tag:
            location = f"interpolation inside <{context.parent_tag}>"
        else:
            location = "top-level interpolation"
        formatted = self.format_code(expression.code, location)
        formatted = formatted.replace("\n", "\n" + self.indentation(context.depth))
        return interpolate(formatted)

    def render_comment(self, comment: Comment) -> str:
        if "\n" in comment.text:
            return comment.text

        if comment.visibility is Visibility.PUBLIC:
            opening, closing = "<!--", "-->"
        else:
            opening, closing = "{!--", "--}"
        contents = comment.text.strip()
        if contents.startswith(opening):
            contents = contents[len(opening):]
        if contents.endswith(closing):
            contents = contents[: -len(closing)]
        contents = contents.strip()
        if not contents:
            return f"{opening} {closing}"
        return f"{opening} {contents} {closing}"

    # Attributes

    def render_attribute(self, attribute: Attribute, tag: str) -> RenderedAttribute:
        name, value = attribute.name, attribute.value
        location = f"attribute '{name}' of <{tag}>"

        if isinstance(value, StringLiteral):
            return RenderedAttribute(f'{name}="{value.value.strip()}"', indent_newlines=False)
        if isinstance(value, BoolLiteral):
            return RenderedAttribute(name if value.value else f"{name}=false")
        if isinstance(value, IntLiteral):
            return RenderedAttribute(f"{name}={self.format_code(str(value.value), location)}")
        if isinstance(value, Mixed):
            return RenderedAttribute(
                f'{name}="{self.render_mixed(value, location)}"', indent_newlines=False
            )
        if isinstance(value, Expression):
            if value.tagged:
                return RenderedAttribute(f"{{=@{name}}}")
            if name == ROOT_ATTRIBUTE or name in SPREAD_ATTRIBUTES:
                return RenderedAttribute(self.render_bare_expression(name, value.code, location))
            literal = literal_value(self.expressions.parse_literal(value.code))
            if literal is not None:
                return self.render_attribute(Attribute(name, literal), tag)
            formatted = self.format_attribute_expression(value.code, location)
            return RenderedAttribute(f"{name}={interpolate(formatted)}")
        raise StructuralInvariantError("render", f"unknown attribute value {type(value).__name__}")

    def render_bare_expression(self, name: str, code: str, location: str) -> str:
        """``{expr}`` for the root attribute, ``{...expr}`` for spreads."""
        code = code.strip()
        spread = name in SPREAD_ATTRIBUTES
        if name == ROOT_ATTRIBUTE and code.startswith("..."):
            code, spread = code[3:], True
        formatted = self.format_attribute_expression(code, location)
        if spread:
            return f"{{...{formatted}}}"
        return f"{{{formatted}}}"

    def render_mixed(self, value: Mixed, location: str) -> str:
        parts = []
        for segment in value.segments:
            if isinstance(segment, StringLiteral):
                parts.append(segment.value)
            else:
                parts.append(interpolate(self.format_code(segment.code, location)))
        return "".join(parts)

    # Elements and blocks

    def render_element(self, element: Element, context: RenderContext) -> str:
        tag, attributes = element.tag, element.attributes
        if (
            tag == SLOT_TEMPLATE
            and attributes
            and attributes[0].name == "slot"
            and isinstance(attributes[0].value, StringLiteral)
        ):
            tag = ":" + attributes[0].value.value.strip()
            attributes = attributes[1:]

        self_closing = not element.children
        closing_slash = self_closing and not is_void_element(tag)
        rendered = [self.render_attribute(attribute, element.tag) for attribute in attributes]
        opening = self.render_opening_tag(tag, rendered, closing_slash, context.depth)

        if self_closing:
            return opening
        return f"{opening}{self.render_children(element, tag, context)}</{tag}>"

    def render_opening_tag(
        self, tag: str, attributes: List[RenderedAttribute], closing_slash: bool, depth: int
    ) -> str:
        end = " />" if closing_slash else ">"
        one_line = f"<{tag}" + "".join(f" {a.text}" for a in attributes) + end
        multi_line = any("\n" in a.text for a in attributes)

        if len(attributes) > 1 and (multi_line or len(one_line) > self.config.line_length):
            attribute_indentation = self.indentation(depth + 1)
            lines = [f"<{tag}"]
            for attribute in attributes:
                text = attribute.text
                if attribute.indent_newlines:
                    text = text.replace("\n", "\n" + attribute_indentation)
                lines.append(attribute_indentation + text)
            lines.append(self.indentation(depth) + ("/>" if closing_slash else ">"))
            return "\n".join(lines)

        if not multi_line:
            return one_line
        indentation = self.indentation(depth)
        texts = [
            a.text.replace("\n", "\n" + indentation) if a.indent_newlines else a.text
            for a in attributes
        ]
        return f"<{tag}" + "".join(f" {text}" for text in texts) + end

    def render_children(self, element: Element, tag: str, context: RenderContext) -> str:
        if is_verbatim_tag(element.tag):
            verbatim = RenderContext(0, tag)
            return "".join(
                child.value if isinstance(child, Text) else self.render_node(child, verbatim)
                for child in element.children
            )
        return self.render_nodes(element.children, context.nested(parent_tag=tag))

    def render_block(self, block: Block, context: RenderContext) -> str:
        if block.name == DEFAULT_BLOCK and block.expression is None:
            return self.render_nodes(block.children, context.nested())

        opening = "{#" + block.name
        if block.expression is not None:
            expression = self.format_attribute_expression(
                block.expression.code, f"{{#{block.name}}} block"
            )
            opening += " " + expression.strip().replace("\n", "\n" + self.indentation(context.depth + 1))
        opening += "}"

        levels = 0 if block.children and isinstance(block.children[0], Block) else 1
        children = self.render_nodes(block.children, context.nested(levels))
        closing = f"{{/{block.name}}}" if block.name in PRIMARY_BLOCKS else ""
        return opening + children + closing
