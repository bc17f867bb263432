"""Node types shared by every stage of the formatter.

A tree arrives from the parser made of ``Text``, ``Expression``, ``Comment``,
``Element`` and ``Block`` nodes. The tagger lifts whitespace out of text into
``Whitespace`` marker siblings, and the layout phases rewrite those markers
until the renderer can turn the tree into a string.

All nodes are frozen; phases build new trees instead of mutating old ones.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class WhitespaceKind(str, Enum):
    """Kinds of whitespace marker, grouped by the stage that produces them."""

    # Tagger and layout phases
    SPACE = "space"
    NEWLINE = "newline"
    # Indent phase
    INDENT = "indent"
    INDENT_ONE_LESS = "indent_one_less"
    # Contextualized view of newlines (see tagger.contextualize)
    BEFORE_CHILD = "before_child"
    BEFORE_CLOSING_TAG = "before_closing_tag"
    BEFORE_WHITESPACE = "before_whitespace"


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Expression:
    """Embedded code. A tagged attribute expression was written as ``{=@name}``."""

    code: str
    tagged: bool = False


@dataclass(frozen=True)
class Comment:
    text: str
    visibility: Visibility = Visibility.PUBLIC


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class BoolLiteral:
    value: bool


@dataclass(frozen=True)
class IntLiteral:
    value: int


@dataclass(frozen=True)
class Mixed:
    """Quoted attribute value combining literal text and interpolations."""

    segments: Tuple[Union[StringLiteral, Expression], ...]


AttrValue = Union[StringLiteral, BoolLiteral, IntLiteral, Expression, Mixed]


@dataclass(frozen=True)
class Attribute:
    name: str
    value: AttrValue


@dataclass(frozen=True)
class Element:
    """An HTML tag, a component or a macro component (``#Name``)."""

    tag: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class Block:
    """A control construct such as ``{#if}``, ``{#for}`` or ``{#case}``.

    When ``has_sub_blocks`` is set, ``children`` holds only sub-blocks
    (``default``/``else``/``elseif`` for conditionals, ``match`` arms for
    ``case``), each of which owns its own child nodes.
    """

    name: str
    expression: Optional[Expression] = None
    children: Tuple["Node", ...] = ()
    has_sub_blocks: bool = False


@dataclass(frozen=True)
class Whitespace:
    kind: WhitespaceKind


Node = Union[Text, Expression, Comment, Element, Block, Whitespace]

SPACE = Whitespace(WhitespaceKind.SPACE)
NEWLINE = Whitespace(WhitespaceKind.NEWLINE)
INDENT = Whitespace(WhitespaceKind.INDENT)
INDENT_ONE_LESS = Whitespace(WhitespaceKind.INDENT_ONE_LESS)
BEFORE_CHILD = Whitespace(WhitespaceKind.BEFORE_CHILD)
BEFORE_CLOSING_TAG = Whitespace(WhitespaceKind.BEFORE_CLOSING_TAG)
BEFORE_WHITESPACE = Whitespace(WhitespaceKind.BEFORE_WHITESPACE)

COARSE_KINDS = frozenset({WhitespaceKind.SPACE, WhitespaceKind.NEWLINE})

VOID_ELEMENTS = frozenset(
    "area base br col command embed hr img input keygen link meta param source track wbr".split()
)

PRIMARY_BLOCKS = frozenset({"if", "unless", "for", "case"})

DEFAULT_BLOCK = "default"

SLOT_TEMPLATE = "#template"

# Attribute name under which a parser stores a bare `{expr}` in an opening tag
ROOT_ATTRIBUTE = ":root"

# Attributes that always render as a spread `{...expr}`
SPREAD_ATTRIBUTES = frozenset({":attrs", ":props"})


def is_element(node: object) -> bool:
    return isinstance(node, Element)


def is_newline(node: object) -> bool:
    return node == NEWLINE


def is_space(node: object) -> bool:
    return node == SPACE


def is_whitespace(node: object) -> bool:
    return isinstance(node, Whitespace)


def is_verbatim_tag(tag: str) -> bool:
    """Macro components, ``<pre>`` and ``<code>`` keep their contents untouched.

    >>> is_verbatim_tag("#Markdown"), is_verbatim_tag("pre"), is_verbatim_tag("div")
    (True, True, False)
    """
    if tag == SLOT_TEMPLATE:
        return False
    return tag.startswith("#") or tag in ("pre", "code")


def is_void_element(tag: str) -> bool:
    return tag in VOID_ELEMENTS
