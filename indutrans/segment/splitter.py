"""Split pasted text into translation units.

AUTO mode picks the first rule that applies:

1. the separator marker (inserted by the table-paste adapter) is present
2. a double quote is present: CSV-style quoted fields, so one spreadsheet
   cell with embedded newlines stays one unit
3. a blank line is present: paragraph mode
4. otherwise: line mode

Quote detection wins over blank lines even when both are present.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from indutrans.core.models import SplitMode

SEPARATOR_MARKER = "__________"
SEPARATOR_TOKEN = f"\n\n{SEPARATOR_MARKER}\n\n"

_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _clean(parts: Iterable[str]) -> List[str]:
    return [p.strip() for p in parts if p.strip()]


def split_lines(text: str) -> List[str]:
    return _clean(_normalize_newlines(text or "").split("\n"))


def split_paragraphs(text: str) -> List[str]:
    return _clean(_BLANK_LINE_RE.split(_normalize_newlines(text or "")))


def split_marker(text: str) -> List[str]:
    return _clean((text or "").split(SEPARATOR_MARKER))


def parse_quoted(text: str) -> List[str]:
    """Parse spreadsheet-style text where quoted fields may span lines.

    ``""`` inside a quoted field is a literal quote; boundary quotes are dropped.
    An unterminated field at the end still yields its text.
    """
    units: List[str] = []
    current: List[str] = []
    in_quotes = False
    s = _normalize_newlines(text or "")
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        if ch == '"':
            if in_quotes and i + 1 < n and s[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "\n" and not in_quotes:
            unit = "".join(current).strip()
            if unit:
                units.append(unit)
            current = []
        else:
            current.append(ch)
        i += 1

    unit = "".join(current).strip()
    if unit:
        units.append(unit)
    return units


def segment(raw_text: str, mode: "SplitMode | str" = SplitMode.AUTO) -> List[str]:
    """Turn raw pasted text into an ordered list of trimmed, non-empty units."""
    mode = SplitMode.parse(mode)
    text = raw_text or ""
    if not text.strip():
        return []

    if mode is SplitMode.LINE:
        return split_lines(text)
    if mode is SplitMode.PARAGRAPH:
        return split_paragraphs(text)

    if SEPARATOR_MARKER in text:
        return split_marker(text)
    if '"' in text:
        return parse_quoted(text)
    if _BLANK_LINE_RE.search(_normalize_newlines(text)):
        return split_paragraphs(text)
    return split_lines(text)


__all__ = [
    "SEPARATOR_MARKER",
    "SEPARATOR_TOKEN",
    "segment",
    "split_lines",
    "split_paragraphs",
    "split_marker",
    "parse_quoted",
]
