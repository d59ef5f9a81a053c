"""Tests for the HTML renderer: element writing, autobreak and nesting bounds."""

import logging

import pytest

from sideways import DeferredParse, Element, ParseContext, ParseKind, Sideways


@pytest.fixture
def engine() -> Sideways:
    return Sideways()


def _write(engine: Sideways, *elements: Element | None) -> str:
    return engine._elements(list(elements), ParseContext())


class TestWriteElement:
    """Single element output."""

    def test_self_closing_without_content(self, engine: Sideways) -> None:
        assert engine._element(Element(name="hr"), ParseContext()) == "<hr />"

    def test_text_escaped_quotes_kept(self, engine: Sideways) -> None:
        element = Element(name="p", text='a "q" <b> & c')
        assert engine._element(element, ParseContext()) == '<p>a "q" &lt;b&gt; &amp; c</p>'

    def test_attribute_values_escaped(self, engine: Sideways) -> None:
        element = Element(name="a", attributes={"title": 'x"y<z'}, text="t")
        assert engine._element(element, ParseContext()) == '<a title="x&quot;y&lt;z">t</a>'

    def test_none_attribute_skipped(self, engine: Sideways) -> None:
        element = Element(name="a", attributes={"href": "/", "title": None}, text="t")
        assert engine._element(element, ParseContext()) == '<a href="/">t</a>'

    def test_empty_text_is_content(self, engine: Sideways) -> None:
        assert engine._element(Element(name="code", text=""), ParseContext()) == "<code></code>"

    def test_raw_html_verbatim(self, engine: Sideways) -> None:
        element = Element(name="span", raw_html="<b>x</b>")
        assert engine._element(element, ParseContext()) == "<span><b>x</b></span>"

    def test_raw_html_escaped_in_safe_mode(self) -> None:
        element = Element(raw_html="<b>x</b>")
        assert Sideways(safe_mode=True)._element(element, ParseContext()) == "&lt;b&gt;x&lt;/b&gt;"

    def test_trusted_raw_html_in_safe_mode(self) -> None:
        element = Element(raw_html="<b>x</b>", allow_raw_html_in_safe_mode=True)
        assert Sideways(safe_mode=True)._element(element, ParseContext()) == "<b>x</b>"

    def test_nameless_element_writes_content_only(self, engine: Sideways) -> None:
        assert engine._element(Element(text="plain"), ParseContext()) == "plain"

    def test_single_child(self, engine: Sideways) -> None:
        element = Element(name="pre", child=Element(name="code", text="x"))
        assert engine._element(element, ParseContext()) == "<pre><code>x</code></pre>"

    def test_children_take_priority(self, engine: Sideways) -> None:
        element = Element(name="div", text="ignored", children=[Element(text="used")])
        assert engine._element(element, ParseContext()) == "<div>used</div>"


class TestAutobreak:
    """Newlines between sibling elements."""

    def test_named_siblings(self, engine: Sideways) -> None:
        html = _write(engine, Element(name="p", text="a"), Element(name="p", text="b"))
        assert html == "\n<p>a</p>\n<p>b</p>\n"

    def test_nameless_sibling_suppresses_break(self, engine: Sideways) -> None:
        html = _write(engine, Element(name="p", text="a"), Element(text="x"))
        assert html == "\n<p>a</p>x"

    def test_explicit_false(self, engine: Sideways) -> None:
        html = _write(engine, Element(name="b", text="1", autobreak=False), Element(name="i", text="2"))
        assert html == "<b>1</b><i>2</i>\n"

    def test_explicit_true_on_nameless(self, engine: Sideways) -> None:
        html = _write(engine, Element(raw_html="<x>", autobreak=True))
        assert html == "\n<x>\n"

    def test_hidden_elements_skipped(self, engine: Sideways) -> None:
        html = _write(engine, None, Element(name="p", text="a"), None)
        assert html == "\n<p>a</p>\n"

    def test_empty_list(self, engine: Sideways) -> None:
        assert _write(engine) == "\n"


class TestDeferredParses:
    """Handlers resolved at render time."""

    def test_inline_handler(self, engine: Sideways) -> None:
        element = Element(name="p", handler=DeferredParse(ParseKind.INLINE, "*a*"))
        assert engine._element(element, ParseContext()) == "<p><em>a</em></p>"

    def test_lines_handler(self, engine: Sideways) -> None:
        element = Element(name="div", handler=DeferredParse(ParseKind.LINES, ["# a", "", "b"]))
        assert engine._element(element, ParseContext()) == "<div>\n<h1>a</h1>\n<p>b</p>\n</div>"

    def test_list_item_handler_tight(self, engine: Sideways) -> None:
        element = Element(name="li", handler=DeferredParse(ParseKind.LIST_ITEM, ["a"]))
        assert engine._element(element, ParseContext()) == "<li>a</li>"

    def test_list_item_handler_loose(self, engine: Sideways) -> None:
        element = Element(name="li", handler=DeferredParse(ParseKind.LIST_ITEM, ["a", ""]))
        assert engine._element(element, ParseContext()) == "<li>\n<p>a</p>\n</li>"

    def test_handler_cleared_after_render(self, engine: Sideways) -> None:
        element = Element(name="p", handler=DeferredParse(ParseKind.INLINE, "a"))
        engine._element(element, ParseContext())
        assert element.handler is None
        assert element.children is not None

    def test_depth_restored(self, engine: Sideways) -> None:
        ctx = ParseContext()
        engine._element(Element(name="p", handler=DeferredParse(ParseKind.INLINE, "*a*")), ctx)
        assert ctx.depth == 0


class TestNestingBound:
    """max_nesting_depth turns deep content into text."""

    def test_deep_quotes(self, caplog: pytest.LogCaptureFixture) -> None:
        engine = Sideways(max_nesting_depth=1)
        with caplog.at_level(logging.WARNING, logger="sideways"):
            html = engine.render("> > x")
        assert html == "<blockquote>\n<blockquote>x</blockquote>\n</blockquote>"
        assert any("Nesting depth 1 reached" in record.getMessage() for record in caplog.records)

    def test_flattened_content_escaped(self) -> None:
        engine = Sideways(max_nesting_depth=1)
        assert engine.render("> > <b>") == "<blockquote>\n<blockquote>&lt;b&gt;</blockquote>\n</blockquote>"

    def test_deep_emphasis(self) -> None:
        engine = Sideways(max_nesting_depth=1)
        assert engine.render("*a **b** c*") == "<p><em>a **b** c</em></p>"

    def test_pathological_nesting_does_not_recurse_forever(self) -> None:
        html = Sideways().render(">" * 500 + " deep")
        assert html.count("<blockquote>") == 33
        assert html.endswith("</blockquote>")

    def test_deep_brackets(self) -> None:
        source = "[" * 200 + "x" + "](/u)" * 200
        html = Sideways().render(source)
        assert html.startswith("<p>")

    def test_no_warning_for_shallow_documents(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="sideways"):
            Sideways().render("> - *a*")
        assert caplog.records == []


class TestFootnoteList:
    """The appended footnote list."""

    def test_structure(self) -> None:
        html = Sideways(extra=True).render("a[^x]\n\n[^x]: b")
        footnotes = html.split("\n", 1)[1]
        assert footnotes == (
            '<div class="footnotes">\n<hr />\n<ol>\n<li id="fn:x">\n'
            '<p>b&#160;<a href="#fnref1:x" rev="footnote" class="footnote-backref">&#8617;</a></p>\n'
            "</li>\n</ol>\n</div>"
        )

    def test_definition_lists_merged_in_fragments(self) -> None:
        engine = Sideways(extra=True)
        assert engine._render_fragment("A\n: a\n\nB\n: b", ParseContext()).count("<dl>") == 1
