"""Tests for pipe tables."""

import pytest

from sideways import render


def _table(head: str, body: str) -> str:
    return f"<table>\n<thead>\n{head}\n</thead>\n<tbody>\n{body}\n</tbody>\n</table>"


class TestTables:
    """Header row, divider and body rows."""

    def test_basic(self) -> None:
        html = render("| a | b |\n|---|---|\n| 1 | 2 |")
        assert html == _table(
            "<tr>\n<th>a</th>\n<th>b</th>\n</tr>",
            "<tr>\n<td>1</td>\n<td>2</td>\n</tr>",
        )

    def test_without_outer_pipes(self) -> None:
        html = render("a | b\n--|--\n1 | 2")
        assert html == _table(
            "<tr>\n<th>a</th>\n<th>b</th>\n</tr>",
            "<tr>\n<td>1</td>\n<td>2</td>\n</tr>",
        )

    @pytest.mark.parametrize(
        ("divider", "style"),
        [
            (":--", ' style="text-align: left;"'),
            ("--:", ' style="text-align: right;"'),
            (":-:", ' style="text-align: center;"'),
            ("---", ""),
        ],
    )
    def test_alignment(self, divider: str, style: str) -> None:
        html = render(f"| h |\n|{divider}|\n| c |")
        assert html == _table(
            f"<tr>\n<th{style}>h</th>\n</tr>",
            f"<tr>\n<td{style}>c</td>\n</tr>",
        )

    def test_header_only(self) -> None:
        html = render("| a |\n|---|")
        assert html == "<table>\n<thead>\n<tr>\n<th>a</th>\n</tr>\n</thead>\n<tbody>\n</tbody>\n</table>"

    def test_inline_content_in_cells(self) -> None:
        html = render("| *a* |\n|---|\n| `b` |")
        assert "<th><em>a</em></th>" in html
        assert "<td><code>b</code></td>" in html

    def test_escaped_pipe_stays_in_cell(self) -> None:
        html = render("| a | b |\n|---|---|\n| x \\| y | z |")
        assert "<td>x | y</td>" in html
        assert "<td>z</td>" in html

    def test_several_escaped_pipes_in_one_row(self) -> None:
        html = render("| a | b |\n|---|---|\n| x \\| y \\| w | z |\n| 1 | 2 \\| 3 |")
        assert "<td>x | y | w</td>" in html
        assert "<td>2 | 3</td>" in html

    def test_pipe_inside_code_span(self) -> None:
        html = render("| a | b |\n|---|---|\n| `x|y` | z |")
        assert "<td><code>x|y</code></td>" in html

    def test_extra_cells_dropped(self) -> None:
        html = render("| a |\n|---|\n| 1 | 2 |")
        assert "<td>1</td>" in html
        assert "2" not in html

    def test_missing_cells_allowed(self) -> None:
        html = render("| a | b |\n|---|---|\n| 1 |")
        assert "<tr>\n<td>1</td>\n</tr>" in html

    def test_blank_line_ends_table(self) -> None:
        html = render("| a |\n|---|\n| 1 |\n\n| 2 |")
        assert html.endswith("</table>\n<p>| 2 |</p>")

    def test_row_without_pipe_ends_multi_column_table(self) -> None:
        html = render("| a | b |\n|---|---|\nplain")
        assert html.endswith("</table>\n<p>plain</p>")

    def test_column_count_mismatch_is_not_a_table(self) -> None:
        assert "<table>" not in render("| a | b |\n|---|")

    def test_multiline_paragraph_is_not_a_header(self) -> None:
        assert "<table>" not in render("a | b\nc | d\n--|--")

    def test_empty_divider_cell_is_not_a_table(self) -> None:
        assert "<table>" not in render("| a | b |\n|---||")
