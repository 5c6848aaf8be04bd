from __future__ import annotations

import pytest

from indutrans.core.models import SplitMode
from indutrans.segment.splitter import (
    SEPARATOR_MARKER,
    SEPARATOR_TOKEN,
    parse_quoted,
    segment,
    split_lines,
    split_paragraphs,
)


@pytest.mark.parametrize("raw", ["", "   ", "\n\n\t\n", None])
def test_blank_input_yields_no_units(raw) -> None:
    assert segment(raw) == []


def test_auto_plain_lines() -> None:
    assert segment("电机\n  减速机 \n") == ["电机", "减速机"]


def test_auto_blank_lines_split_paragraphs() -> None:
    raw = "安全第一\n请佩戴安全帽\n\n设备运行中\n禁止靠近"
    assert segment(raw) == ["安全第一\n请佩戴安全帽", "设备运行中\n禁止靠近"]


def test_whitespace_only_line_counts_as_blank() -> None:
    assert segment("甲\n   \n乙") == ["甲", "乙"]


def test_marker_wins_over_quotes_and_blank_lines() -> None:
    raw = f'第一格 "引号"\n\n{SEPARATOR_MARKER}\n\n第二格\n第二行'
    assert segment(raw) == ['第一格 "引号"', "第二格\n第二行"]


def test_separator_token_round_trips_cells_with_newlines() -> None:
    cells = ["A\nB", "C", "D\n\nE"]
    assert segment(SEPARATOR_TOKEN.join(cells)) == cells


def test_quoted_cell_keeps_embedded_newline() -> None:
    raw = '"多行\n单元格"\n普通行'
    assert segment(raw) == ["多行\n单元格", "普通行"]


def test_doubled_quote_is_literal() -> None:
    assert parse_quoted('"say ""hi"""') == ['say "hi"']


def test_unterminated_quote_still_yields_text() -> None:
    assert parse_quoted('"abc\ndef') == ["abc\ndef"]


def test_quote_detection_beats_blank_lines() -> None:
    # quote scan treats blank lines as empty rows, not paragraph breaks
    raw = '型号 "A1"\n第二行\n\n第三行'
    assert segment(raw) == ["型号 A1", "第二行", "第三行"]


def test_crlf_is_normalized() -> None:
    assert segment("a\r\nb\r\n") == ["a", "b"]
    assert segment("a\r\n\r\nb") == ["a", "b"]


def test_explicit_line_mode_ignores_blank_lines() -> None:
    assert segment("a\nb\n\nc", SplitMode.LINE) == ["a", "b", "c"]


def test_explicit_paragraph_mode_keeps_lines_together() -> None:
    assert segment("a\nb", "paragraph") == ["a\nb"]


def test_unknown_mode_rejected() -> None:
    with pytest.raises(ValueError):
        segment("a", "sentence")


@pytest.mark.parametrize(
    "raw",
    [
        " x \n y ",
        '"  padded  "\n  z',
        f"  a  {SEPARATOR_TOKEN}  {SEPARATOR_TOKEN} b ",
        "p1 \n\n  p2\n",
    ],
)
def test_units_are_trimmed_and_non_empty(raw) -> None:
    units = segment(raw)
    assert units
    assert all(u and u == u.strip() for u in units)


def test_helpers_drop_empty_parts() -> None:
    assert split_lines("\n a \n\n") == ["a"]
    assert split_paragraphs("\n\n a \n\n\n b") == ["a", "b"]


def test_quoted_spreadsheet_example() -> None:
    assert segment('A\n"B\nC"\nD') == ["A", "B\nC", "D"]


@pytest.mark.parametrize("raw", ["电机\n减速机\n轴承", " a \n\tb"])
def test_auto_equals_line_on_plain_lines(raw) -> None:
    assert segment(raw) == segment(raw, SplitMode.LINE)


def test_auto_equals_paragraph_with_blank_lines() -> None:
    raw = "a\nb\n\n\nc\n \nd"
    assert segment(raw) == segment(raw, SplitMode.PARAGRAPH) == ["a\nb", "c", "d"]
