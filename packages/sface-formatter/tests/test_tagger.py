import pytest
from sface_formatter.errors import StructuralInvariantError
from sface_formatter.nodes import (
    BEFORE_CHILD,
    BEFORE_CLOSING_TAG,
    BEFORE_WHITESPACE,
    NEWLINE,
    SPACE,
    Block,
    Comment,
    Element,
    Expression,
    Text,
)
from sface_formatter.tagger import classify, contextualize, tag, tag_document, tag_text


def test_classify_whitespace_runs():
    assert classify("   ") == [SPACE]
    assert classify(" \n\t") == [NEWLINE]
    assert classify("\n  \n") == [NEWLINE, NEWLINE]
    assert classify("\n\n\n\n") == [NEWLINE, NEWLINE]


def test_tag_text_splits_on_line_breaks():
    assert tag_text(Text("  Hello\nworld  ")) == [
        SPACE,
        Text("Hello"),
        NEWLINE,
        Text("world"),
        SPACE,
    ]


def test_tag_text_keeps_inline_spaces():
    assert tag_text(Text("Hello   world")) == [Text("Hello   world")]


def test_tag_text_paragraph_break():
    assert tag_text(Text("a\n\n\nb")) == [Text("a"), NEWLINE, NEWLINE, Text("b")]


def test_tag_text_empty():
    assert tag_text(Text("")) == []


def test_tag_element_children():
    div = Element("div", children=(Text("\n"), Element("p", children=(Text("Hi"),)), Text(" ")))
    assert tag(div) == [Element("div", children=(NEWLINE, Element("p", children=(Text("Hi"),)), SPACE))]


def test_no_blank_line_right_inside_tags():
    div = Element("div", children=(Text("\n\n"), Text("x"), Text("\n\n")))
    assert tag(div)[0].children == (NEWLINE, Text("x"), NEWLINE)


def test_verbatim_element_is_untouched():
    pre = Element("pre", children=(Text("  keep\n\n   this  "),))
    assert tag(pre) == [pre]


def test_expressions_and_comments_are_opaque():
    expression = Expression("  foo  ")
    comment = Comment("<!--  x  -->")
    assert tag(expression) == [expression]
    assert tag(comment) == [comment]


def test_block_children_are_tagged():
    block = Block("if", Expression("x"), (Text("\n  yes\n"),))
    assert tag(block)[0].children == (NEWLINE, Text("yes"), NEWLINE)


def test_sub_block_parent_drops_whitespace_text():
    block = Block(
        "case",
        Expression("x"),
        (Text("\n  "), Block("match", Expression("1"), (Text("\n one\n"),))),
        has_sub_blocks=True,
    )
    tagged = tag(block)[0]
    assert tagged.children == (Block("match", Expression("1"), (NEWLINE, Text("one"), NEWLINE)),)


def test_sub_block_parent_rejects_other_children():
    block = Block("if", Expression("x"), (Text("stray"), Block("default")), has_sub_blocks=True)
    with pytest.raises(StructuralInvariantError):
        tag(block)


def test_tag_document_trims_edges():
    p = Element("p", children=(Text("a"),))
    assert tag_document([Text("\n\n  "), p, Text("\n")]) == [p]


def test_contextualize_newlines():
    div = Element("div", children=(NEWLINE, Element("p"), NEWLINE, NEWLINE, Text("x"), NEWLINE))
    assert contextualize([div])[0].children == (
        BEFORE_CHILD,
        Element("p"),
        BEFORE_WHITESPACE,
        BEFORE_CHILD,
        Text("x"),
        BEFORE_CLOSING_TAG,
    )


def test_non_breaking_space_is_not_whitespace():
    assert tag_text(Text("\xa0Hi\xa0")) == [Text("\xa0Hi\xa0")]
    assert tag_text(Text(" \xa0Hi\n\xa0")) == [SPACE, Text("\xa0Hi"), NEWLINE, Text("\xa0")]
    assert tag_text(Text("\xa0")) == [Text("\xa0")]
