"""Tests for extra mode: footnotes, definition lists, abbreviations,
attribute blocks and Markdown inside raw HTML."""

from textwrap import dedent

import pytest

from sideways import Sideways


@pytest.fixture
def extra() -> Sideways:
    return Sideways(extra=True)


def _backref(label: str, number: int = 1) -> str:
    return (
        f'<a href="#fnref{number}:{label}" rev="footnote" class="footnote-backref">&#8617;</a>'
    )


def _marker(label: str, number: int, count: int = 1) -> str:
    return (
        f'<sup id="fnref{count}:{label}">'
        f'<a href="#fn:{label}" class="footnote-ref">{number}</a></sup>'
    )


class TestFootnotes:
    """``[^label]`` markers and ``[^label]: text`` definitions."""

    def test_single_footnote(self, extra: Sideways) -> None:
        html = extra.render("Text[^1]\n\n[^1]: Note")
        assert html == (
            f"<p>Text{_marker('1', 1)}</p>\n"
            '<div class="footnotes">\n<hr />\n<ol>\n'
            f'<li id="fn:1">\n<p>Note&#160;{_backref("1")}</p>\n</li>\n'
            "</ol>\n</div>"
        )

    def test_numbered_by_first_use(self, extra: Sideways) -> None:
        html = extra.render("A[^b] B[^a]\n\n[^a]: Note A\n[^b]: Note B")
        assert _marker("b", 1) in html
        assert _marker("a", 2) in html
        assert html.index('<li id="fn:b">') < html.index('<li id="fn:a">')

    def test_repeated_reference(self, extra: Sideways) -> None:
        html = extra.render("x[^1] y[^1]\n\n[^1]: N")
        assert _marker("1", 1, count=1) in html
        assert _marker("1", 1, count=2) in html
        assert f"<p>N&#160;{_backref('1', 1)} {_backref('1', 2)}</p>" in html

    def test_footnote_referenced_only_from_another_footnote(self, extra: Sideways) -> None:
        html = extra.render("a[^a]\n\n[^a]: see[^b]\n\n[^b]: B")
        assert html == (
            f"<p>a{_marker('a', 1)}</p>\n"
            '<div class="footnotes">\n<hr />\n<ol>\n'
            f'<li id="fn:a">\n<p>see{_marker("b", 2)}&#160;{_backref("a")}</p>\n</li>\n'
            f'<li id="fn:b">\n<p>B&#160;{_backref("b")}</p>\n</li>\n'
            "</ol>\n</div>"
        )

    def test_unreferenced_footnote_omitted(self, extra: Sideways) -> None:
        assert extra.render("Text\n\n[^1]: Note") == "<p>Text</p>"

    def test_undefined_marker_is_text(self, extra: Sideways) -> None:
        assert extra.render("x[^nope]") == "<p>x[^nope]</p>"

    def test_definition_before_use(self, extra: Sideways) -> None:
        html = extra.render("[^n]: Early\n\nLater[^n]")
        assert html.startswith(f"<p>Later{_marker('n', 1)}</p>")

    def test_multiline_footnote(self, extra: Sideways) -> None:
        html = extra.render("x[^1]\n\n[^1]: first line\nsecond line")
        assert f"<p>first line\nsecond line&#160;{_backref('1')}</p>" in html

    def test_indented_paragraph_continues_footnote(self, extra: Sideways) -> None:
        html = extra.render("x[^1]\n\n[^1]: one\n\n    two\n\nafter")
        assert f'<li id="fn:1">\n<p>one</p>\n<p>two&#160;{_backref("1")}</p>\n</li>' in html
        assert "<p>after</p>" in html

    def test_unindented_paragraph_ends_footnote(self, extra: Sideways) -> None:
        html = extra.render("x[^1]\n\n[^1]: one\n\ntwo")
        assert html.startswith(f"<p>x{_marker('1', 1)}</p>\n<p>two</p>\n")

    def test_body_not_ending_in_paragraph(self, extra: Sideways) -> None:
        html = extra.render("x[^1]\n\n[^1]: ```\n")
        assert (
            f'<li id="fn:1">\n<pre><code></code></pre>\n<p>{_backref("1")}</p>\n</li>' in html
        )

    def test_markdown_in_footnote(self, extra: Sideways) -> None:
        html = extra.render("x[^1]\n\n[^1]: *em*")
        assert f"<p><em>em</em>&#160;{_backref('1')}</p>" in html

    def test_plain_mode_reads_definition_as_reference(self) -> None:
        """Without extra mode ``[^1]: Note`` is an ordinary link reference."""
        assert Sideways().render("x[^1]\n\n[^1]: Note") == '<p>x<a href="Note">^1</a></p>'


class TestDefinitionLists:
    """Term lines followed by ``: definition`` lines."""

    def test_basic(self, extra: Sideways) -> None:
        assert extra.render("Term\n: Definition") == (
            "<dl>\n<dt>Term</dt>\n<dd>Definition</dd>\n</dl>"
        )

    def test_several_terms_and_definitions(self, extra: Sideways) -> None:
        assert extra.render("A\nB\n: One\n: Two") == (
            "<dl>\n<dt>A</dt>\n<dt>B</dt>\n<dd>One</dd>\n<dd>Two</dd>\n</dl>"
        )

    def test_lazy_definition_line(self, extra: Sideways) -> None:
        assert extra.render("Term\n: one\ntwo") == (
            "<dl>\n<dt>Term</dt>\n<dd>one\ntwo</dd>\n</dl>"
        )

    def test_adjacent_lists_merge(self, extra: Sideways) -> None:
        assert extra.render("A\n: a\n\nB\n: b") == (
            "<dl>\n<dt>A</dt>\n<dd>a</dd>\n<dt>B</dt>\n<dd>b</dd>\n</dl>"
        )

    def test_indented_block_content(self, extra: Sideways) -> None:
        assert extra.render("Term\n: First\n\n    Second para") == (
            "<dl>\n<dt>Term</dt>\n<dd>\n<p>First</p>\n<p>Second para</p>\n</dd>\n</dl>"
        )

    def test_blank_line_before_definition(self, extra: Sideways) -> None:
        assert extra.render("Term\n\n: Definition") == (
            "<dl>\n<dt>Term</dt>\n<dd>\n<p>Definition</p>\n</dd>\n</dl>"
        )

    def test_inline_markup_in_term(self, extra: Sideways) -> None:
        assert "<dt><em>Term</em></dt>" in extra.render("*Term*\n: d")

    def test_colon_without_paragraph_is_text(self, extra: Sideways) -> None:
        assert extra.render(": alone") == "<p>: alone</p>"

    def test_not_recognized_without_extra(self) -> None:
        assert Sideways().render("Term\n: Definition") == "<p>Term\n: Definition</p>"


class TestAbbreviations:
    """``*[TERM]: meaning`` definitions."""

    def test_basic(self, extra: Sideways) -> None:
        html = extra.render("*[HTML]: Hyper Text Markup Language\n\nThe HTML spec")
        assert html == '<p>The <abbr title="Hyper Text Markup Language">HTML</abbr> spec</p>'

    def test_whole_words_only(self, extra: Sideways) -> None:
        html = extra.render("*[CSS]: Cascading Style Sheets\n\nCSS3 and CSS")
        assert html == '<p>CSS3 and <abbr title="Cascading Style Sheets">CSS</abbr></p>'

    def test_every_occurrence(self, extra: Sideways) -> None:
        html = extra.render("*[W3C]: World Wide Web Consortium\n\nW3C, W3C")
        assert html.count("<abbr") == 2

    def test_definition_after_use(self, extra: Sideways) -> None:
        html = extra.render("Use HTML\n\n*[HTML]: Markup")
        assert html == '<p>Use <abbr title="Markup">HTML</abbr></p>'

    def test_not_inside_code(self, extra: Sideways) -> None:
        html = extra.render("*[HTML]: Markup\n\n`HTML`")
        assert html == "<p><code>HTML</code></p>"

    def test_inside_emphasis(self, extra: Sideways) -> None:
        html = extra.render("*[HTML]: Markup\n\n*HTML*")
        assert html == '<p><em><abbr title="Markup">HTML</abbr></em></p>'

    def test_title_escaped(self, extra: Sideways) -> None:
        html = extra.render('*[A]: say "hi"\n\nA')
        assert html == '<p><abbr title="say &quot;hi&quot;">A</abbr></p>'

    def test_several_abbreviations(self, extra: Sideways) -> None:
        html = extra.render("*[A]: alpha\n*[B]: beta\n\nA B")
        assert html == '<p><abbr title="alpha">A</abbr> <abbr title="beta">B</abbr></p>'


class TestAttributeBlocks:
    """``{#id .class}`` after headers and links."""

    def test_atx_header(self, extra: Sideways) -> None:
        assert extra.render("# Title {#main .big}") == '<h1 id="main" class="big">Title</h1>'

    def test_atx_header_with_closing_hashes(self, extra: Sideways) -> None:
        assert extra.render("## Title ## {#t}") == '<h2 id="t">Title</h2>'

    def test_setext_header(self, extra: Sideways) -> None:
        assert extra.render("Title {#t}\n===") == '<h1 id="t">Title</h1>'

    def test_several_classes(self, extra: Sideways) -> None:
        assert extra.render("# T {.a .b}") == '<h1 class="a b">T</h1>'

    def test_link(self, extra: Sideways) -> None:
        assert extra.render("[a](u){.ext #l}") == '<p><a href="u" id="l" class="ext">a</a></p>'

    def test_ignored_without_extra(self) -> None:
        assert Sideways().render("# Title {#main}") == "<h1>Title {#main}</h1>"


class TestMarkdownInHtml:
    """``markdown="1"`` blocks and raw HTML in extra mode."""

    def test_markdown_attribute(self, extra: Sideways) -> None:
        html = extra.render('<div markdown="1">\n*emphasis*\n</div>')
        assert html == "<div>\n<p><em>emphasis</em></p>\n</div>"

    def test_other_attributes_kept(self, extra: Sideways) -> None:
        html = extra.render('<div class="note" markdown="1">\n# Hi\n</div>')
        assert html == '<div class="note">\n<h1>Hi</h1>\n</div>'

    def test_without_attribute_left_alone(self, extra: Sideways) -> None:
        assert extra.render("<div>\n*x*\n</div>") == "<div>\n*x*\n</div>"

    def test_nested_markdown_block(self, extra: Sideways) -> None:
        html = extra.render('<div>\n<div markdown="1">\n*x*\n</div>\n</div>')
        assert html == "<div>\n<div>\n<p><em>x</em></p>\n</div>\n</div>"

    def test_blank_lines_inside_block(self, extra: Sideways) -> None:
        html = extra.render('<div markdown="1">\n\na\n\nb\n\n</div>')
        assert html == "<div>\n<p>a</p>\n<p>b</p>\n</div>"

    def test_references_resolved_inside(self, extra: Sideways) -> None:
        html = extra.render('<div markdown="1">\n[a]\n</div>\n\n[a]: /url')
        assert html == '<div>\n<p><a href="/url">a</a></p>\n</div>'

    def test_void_element(self, extra: Sideways) -> None:
        assert extra.render("<hr />") == "<hr />"

    def test_single_line_element(self, extra: Sideways) -> None:
        assert extra.render("<div>x</div>") == "<div>x</div>"

    def test_text_level_tag_is_paragraph(self, extra: Sideways) -> None:
        assert extra.render("<em>x</em>") == "<p><em>x</em></p>"

    def test_markup_escaped_extra(self) -> None:
        engine = Sideways(extra=True, markup_escaped=True)
        source = dedent(
            """\
            <div>_content_</div>

            sparse:

            <div>
            <div class="inner">
            _content_
            </div>
            </div>

            paragraph

            <style type="text/css">
                p {
                    color: red;
                }
            </style>

            comment

            <!-- html comment -->
            """
        )
        expected = dedent(
            """\
            <p>&lt;div&gt;<em>content</em>&lt;/div&gt;</p>
            <p>sparse:</p>
            <p>&lt;div&gt;
            &lt;div class="inner"&gt;
            <em>content</em>
            &lt;/div&gt;
            &lt;/div&gt;</p>
            <p>paragraph</p>
            <p>&lt;style type="text/css"&gt;
            p {
            color: red;
            }
            &lt;/style&gt;</p>
            <p>comment</p>
            <p>&lt;!-- html comment --&gt;</p>"""
        )
        assert engine.render(source) == expected
