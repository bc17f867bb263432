"""JSON interchange format for parsed template trees.

The formatter does not parse markup. A parser (or an editor plugin) hands it a
``TreeDocument``: the parsed nodes, whether the source ended with a newline,
and optionally the file the formatted template should be written to.

    {
      "target": "card.sface",
      "trailing_newline": true,
      "nodes": [
        {"type": "element", "tag": "div",
         "attributes": [{"name": "class", "value": {"type": "string", "value": "card"}}],
         "children": [{"type": "text", "value": "\\nHello\\n"}]}
      ]
    }
"""

from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .nodes import (
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
)


class StringValueModel(BaseModel):
    type: Literal["string"] = "string"
    value: str

    def to_value(self) -> AttrValue:
        return StringLiteral(self.value)


class BoolValueModel(BaseModel):
    type: Literal["bool"] = "bool"
    value: bool

    def to_value(self) -> AttrValue:
        return BoolLiteral(self.value)


class IntValueModel(BaseModel):
    type: Literal["int"] = "int"
    value: int

    def to_value(self) -> AttrValue:
        return IntLiteral(self.value)


class ExpressionValueModel(BaseModel):
    type: Literal["expression"] = "expression"
    code: str
    # Written as `{=@name}` in the template
    tagged: bool = False

    def to_value(self) -> AttrValue:
        return Expression(self.code, self.tagged)


class MixedValueModel(BaseModel):
    """A quoted value such as ``"btn {{ size }}"``."""

    type: Literal["mixed"] = "mixed"
    segments: List[
        Annotated[Union[StringValueModel, ExpressionValueModel], Field(discriminator="type")]
    ]

    def to_value(self) -> AttrValue:
        return Mixed(tuple(segment.to_value() for segment in self.segments))


AttrValueModel = Annotated[
    Union[StringValueModel, BoolValueModel, IntValueModel, ExpressionValueModel, MixedValueModel],
    Field(discriminator="type"),
]


class AttributeModel(BaseModel):
    name: str
    value: AttrValueModel

    def to_attribute(self) -> Attribute:
        return Attribute(self.name, self.value.to_value())


class TextModel(BaseModel):
    type: Literal["text"] = "text"
    value: str

    def to_node(self) -> Node:
        return Text(self.value)


class ExpressionModel(BaseModel):
    type: Literal["expression"] = "expression"
    code: str

    def to_node(self) -> Node:
        return Expression(self.code)


class CommentModel(BaseModel):
    type: Literal["comment"] = "comment"
    text: str
    visibility: Visibility = Visibility.PUBLIC

    def to_node(self) -> Node:
        return Comment(self.text, self.visibility)


class ElementModel(BaseModel):
    type: Literal["element"] = "element"
    tag: str
    attributes: List[AttributeModel] = []
    children: List["NodeModel"] = []

    def to_node(self) -> Node:
        return Element(
            self.tag,
            tuple(attribute.to_attribute() for attribute in self.attributes),
            tuple(child.to_node() for child in self.children),
        )


class BlockModel(BaseModel):
    type: Literal["block"] = "block"
    name: str
    expression: Optional[str] = None
    children: List["NodeModel"] = []
    has_sub_blocks: bool = False

    def to_node(self) -> Node:
        return Block(
            self.name,
            Expression(self.expression) if self.expression is not None else None,
            tuple(child.to_node() for child in self.children),
            self.has_sub_blocks,
        )


NodeModel = Annotated[
    Union[TextModel, ExpressionModel, CommentModel, ElementModel, BlockModel],
    Field(discriminator="type"),
]


class TreeDocument(BaseModel):
    target: Optional[str] = None
    trailing_newline: bool = True
    nodes: List[NodeModel] = []

    def to_nodes(self) -> List[Node]:
        return [node.to_node() for node in self.nodes]


# Enable forward references for the recursive models
ElementModel.model_rebuild()
BlockModel.model_rebuild()
TreeDocument.model_rebuild()


def load_document(path: Path) -> TreeDocument:
    """Read a tree document; raises ``OSError`` or pydantic's ``ValidationError``."""
    return TreeDocument.model_validate_json(Path(path).read_text(encoding="utf-8"))
