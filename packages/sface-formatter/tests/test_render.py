import pytest
from sface_formatter.errors import ExpressionFormatError
from sface_formatter.expressions import PythonExpressionFormatter
from sface_formatter.models import FormatterConfig
from sface_formatter.nodes import (
    BEFORE_CHILD,
    BEFORE_CLOSING_TAG,
    INDENT,
    INDENT_ONE_LESS,
    NEWLINE,
    Attribute,
    Block,
    BoolLiteral,
    Comment,
    Element,
    Expression,
    IntLiteral,
    Mixed,
    StringLiteral,
    Text,
    Visibility,
)
from sface_formatter.render import RenderContext, Renderer


def attr(renderer, value, name="attr"):
    return renderer.render_attribute(Attribute(name, value), "div").text


def test_markers(renderer):
    context = RenderContext(depth=2)
    assert renderer.render_node(INDENT, context) == "    "
    assert renderer.render_node(INDENT_ONE_LESS, context) == "  "
    assert renderer.render_node(BEFORE_CHILD, context) == "\n    "
    assert renderer.render_node(BEFORE_CLOSING_TAG, context) == "\n  "
    assert renderer.render_node(INDENT_ONE_LESS, RenderContext(depth=0)) == ""


def test_string_attribute_is_trimmed(renderer):
    assert attr(renderer, StringLiteral("  card  "), "class") == 'class="card"'


def test_boolean_attributes(renderer):
    assert attr(renderer, BoolLiteral(True), "disabled") == "disabled"
    assert attr(renderer, BoolLiteral(False), "disabled") == "disabled=false"


def test_integer_attribute_groups_digits(renderer):
    assert attr(renderer, IntLiteral(42), "count") == "count=42"
    assert attr(renderer, IntLiteral(1000000), "count") == "count=1_000_000"


def test_literal_expressions_lose_their_brackets(renderer):
    assert attr(renderer, Expression(" True "), "disabled") == "disabled"
    assert attr(renderer, Expression("False"), "disabled") == "disabled=false"
    assert attr(renderer, Expression('"x"'), "title") == 'title="x"'
    assert attr(renderer, Expression("123"), "count") == "count=123"


def test_strings_that_need_escaping_stay_expressions(renderer):
    assert attr(renderer, Expression('"say \\"hi\\""'), "title") == "title={{ 'say \"hi\"' }}"


def test_expression_attribute(renderer):
    assert attr(renderer, Expression("  user.name  "), "value") == "value={{ user.name }}"


def test_keyword_sugar_attribute(renderer):
    assert attr(renderer, Expression(" foo:   bar "), "class") == "class={{ foo: bar }}"


def test_list_sugar_attribute(renderer):
    assert attr(renderer, Expression('"a",   "b"'), "class") == "class={{ 'a', 'b' }}"


def test_mixed_attribute(renderer):
    value = Mixed((StringLiteral("btn btn-"), Expression("  size ")))
    assert attr(renderer, value, "class") == 'class="btn btn-{{ size }}"'


def test_invalid_attribute_expression(renderer):
    with pytest.raises(ExpressionFormatError) as excinfo:
        attr(renderer, Expression("foo("), "value")
    assert excinfo.value.fragment == "foo("
    assert excinfo.value.location == "attribute 'value' of <div>"


def test_self_closing_element(renderer):
    element = Element("Card", (Attribute("title", StringLiteral("Hi")),))
    assert renderer.render([element]) == '<Card title="Hi" />'


def test_void_element(renderer):
    element = Element("input", (Attribute("type", StringLiteral("text")), Attribute("disabled", BoolLiteral(True))))
    assert renderer.render([element]) == '<input type="text" disabled>'


def test_long_opening_tag_wraps_attributes(renderer):
    element = Element(
        "div",
        (
            Attribute("class", StringLiteral("a" * 60)),
            Attribute("id", StringLiteral("b" * 40)),
        ),
        (Text("x"),),
    )
    assert renderer.render([element]) == (
        '<div\n  class="' + "a" * 60 + '"\n  id="' + "b" * 40 + '"\n>x</div>'
    )


def test_long_self_closing_tag_wraps_attributes(renderer):
    element = Element(
        "Card",
        (
            Attribute("title", StringLiteral("a" * 60)),
            Attribute("subtitle", StringLiteral("b" * 40)),
        ),
    )
    assert renderer.render([element]).endswith('"\n/>')


def test_single_long_attribute_never_wraps(renderer):
    element = Element("div", (Attribute("class", StringLiteral("a" * 120)),))
    assert renderer.render([element]) == '<div class="' + "a" * 120 + '" />'


def test_multi_line_attribute_forces_wrap():
    items = ", ".join(f"'item_{i:02}'" for i in range(10))
    element = Element(
        "List",
        (
            Attribute("items", Expression(f"[{items}]")),
            Attribute("id", StringLiteral("list")),
        ),
    )
    renderer = Renderer(FormatterConfig(line_length=40), PythonExpressionFormatter())
    rendered = renderer.render([element])
    assert rendered.startswith("<List\n  items={{[\n    'item_00',\n")
    assert rendered.endswith("    'item_09'\n  ]}}\n  id=\"list\"\n/>")


def test_verbatim_element(renderer):
    pre = Element("pre", children=(Text("  keep\n\n   this  "),))
    assert renderer.render([pre]) == "<pre>  keep\n\n   this  </pre>"


def test_slot_template(renderer):
    template = Element(
        "#template",
        (Attribute("slot", StringLiteral("header")), Attribute("class", StringLiteral("x"))),
        (Text("Title"),),
    )
    assert renderer.render([template]) == '<:header class="x">Title</:header>'


def test_comments(renderer):
    assert renderer.render([Comment("<!--   hi  -->")]) == "<!-- hi -->"
    assert renderer.render([Comment("{!--hi--}", Visibility.PRIVATE)]) == "{!-- hi --}"
    multi_line = "<!--\n  keep\n    me\n-->"
    assert renderer.render([Comment(multi_line)]) == multi_line


def test_interpolation(renderer):
    assert renderer.render([Expression("  foo(  1,2 ) ")]) == "{{ foo(1, 2) }}"


def test_line_comment_interpolation_becomes_private_comment(renderer):
    assert renderer.render([Expression("  # todo: remove  ")]) == "{!-- todo: remove --}"


def test_multi_line_interpolation_is_reindented():
    renderer = Renderer(FormatterConfig(line_length=20), PythonExpressionFormatter())
    element = Element(
        "p",
        children=(NEWLINE, INDENT, Expression("call(first_value, second_value)"), NEWLINE, INDENT_ONE_LESS),
    )
    assert renderer.render([element]) == (
        "<p>\n  {{call(\n    first_value,\n    second_value\n  )}}\n</p>"
    )


def test_invalid_interpolation_location(renderer):
    with pytest.raises(ExpressionFormatError) as excinfo:
        renderer.render([Element("p", children=(Expression("1 +"),))])
    assert excinfo.value.location == "interpolation inside <p>"


def test_if_else_block(renderer):
    block = Block(
        "if",
        Expression(" show "),
        (
            Block("default", None, (NEWLINE, INDENT, Text("yes"), NEWLINE, INDENT_ONE_LESS)),
            Block("else", None, (NEWLINE, INDENT, Text("no"), NEWLINE, INDENT_ONE_LESS)),
        ),
        has_sub_blocks=True,
    )
    assert renderer.render([block]) == "{#if show}\n  yes\n{#else}\n  no\n{/if}"


def test_for_block(renderer):
    block = Block(
        "for",
        Expression("item   in items"),
        (NEWLINE, INDENT, Expression("item"), NEWLINE, INDENT_ONE_LESS),
    )
    assert renderer.render([block]) == "{#for item in items}\n  {{ item }}\n{/for}"


def test_starting_indent():
    renderer = Renderer(FormatterConfig(indent=1), PythonExpressionFormatter())
    element = Element("p", children=(NEWLINE, INDENT, Text("a"), NEWLINE, INDENT_ONE_LESS))
    assert renderer.render([INDENT, element]) == "  <p>\n    a\n  </p>"


def test_root_attribute(renderer):
    assert attr(renderer, Expression("  foo  "), ":root") == "{foo}"
    assert attr(renderer, Expression("True"), ":root") == "{True}"
    assert attr(renderer, Expression("...props"), ":root") == "{...props}"
    assert attr(renderer, Expression("... props"), ":root") == "{...props}"


def test_spread_attributes(renderer):
    assert attr(renderer, Expression(" extra_attrs "), ":attrs") == "{...extra_attrs}"
    assert attr(renderer, Expression("card_props"), ":props") == "{...card_props}"


def test_tagged_attribute(renderer):
    assert attr(renderer, Expression("@title", tagged=True), "title") == "{=@title}"


def test_element_with_root_and_spread(renderer):
    element = Element(
        "Card",
        (
            Attribute(":root", Expression("...props")),
            Attribute("title", Expression("@title", tagged=True)),
            Attribute(":attrs", Expression("extra")),
        ),
    )
    assert renderer.render([element]) == "<Card {...props} {=@title} {...extra} />"


def test_null_byte_in_attribute(renderer):
    with pytest.raises(ExpressionFormatError) as excinfo:
        attr(renderer, Expression("a\x00b"), "value")
    assert excinfo.value.location == "attribute 'value' of <div>"
