from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from indutrans.infra.logging import log_error, log_processing_step
from indutrans.segment.splitter import SEPARATOR_TOKEN

# ASCII whitespace only; U+3000 and U+00A0 are part of the cell text
_WS_RE = re.compile(r"[ \t\r\n\f]+")


def has_table_markup(html: Optional[str]) -> bool:
    if not html:
        return False
    low = html.lower()
    return "<table" in low or "<tr" in low


def _visible_text(cell: Tag) -> str:
    """Approximate the browser's rendered text: collapse whitespace, keep <br> as newline."""
    parts: List[str] = []
    for el in cell.descendants:
        if isinstance(el, Tag):
            if el.name == "br":
                parts.append("\n")
        elif isinstance(el, NavigableString) and not isinstance(el, Comment):
            parts.append(_WS_RE.sub(" ", str(el)))
    lines = [ln.strip() for ln in "".join(parts).split("\n")]
    return "\n".join(lines).strip()


def extract_first_column(html: str) -> List[str]:
    """Return the trimmed text of each row's first ``<td>``, skipping empty cells."""
    soup = BeautifulSoup(html, "html.parser")
    out: List[str] = []
    for row in soup.find_all("tr"):
        cell = row.find("td")
        if cell is None:
            continue
        text = _visible_text(cell)
        if text:
            out.append(text)
    return out


def _table_cells(html: Optional[str]) -> List[str]:
    if not has_table_markup(html):
        return []
    try:
        return extract_first_column(html or "")
    except Exception as e:
        log_error("segment", "clipboard", e, context="failed to parse table markup")
        return []


def adapt_clipboard(plain_text: str, html: Optional[str] = None) -> str:
    """Convert spreadsheet clipboard content into separator-delimited text.

    Cells are joined with the separator token rather than newlines so a cell
    containing line breaks stays one unit. Without table markup, or when the
    markup yields nothing usable, the plain text passes through unchanged.
    """
    cells = _table_cells(html)
    if not cells:
        return plain_text or ""
    log_processing_step("segment", "clipboard", "table paste detected", {"cells": len(cells)})
    return SEPARATOR_TOKEN.join(cells)


def merge_pasted(existing: str, pasted_text: str, html: Optional[str] = None) -> str:
    """Append a paste to text already entered.

    Table pastes are joined to the existing text with the separator token;
    plain pastes go on a new line.
    """
    cells = _table_cells(html)
    if cells:
        joined = SEPARATOR_TOKEN.join(cells)
        return existing + SEPARATOR_TOKEN + joined if existing else joined
    plain = pasted_text or ""
    if not existing:
        return plain
    if not plain:
        return existing
    return existing.rstrip("\n") + "\n" + plain


__all__ = ["has_table_markup", "extract_first_column", "adapt_clipboard", "merge_pasted"]
