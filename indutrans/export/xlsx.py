from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from indutrans.core.languages import display_name
from indutrans.core.models import TranslationRecord
from indutrans.infra.logging import unified_print

ORIGINAL_HEADER = "原文"


@dataclass
class SheetConfig:
    sheet_title: str = "Translations"
    column_width: int = 40
    bold_header: bool = True
    wrap_text: bool = True


class WorkbookWriter:
    """One row per record: original text, then one column per language."""

    def __init__(self, cfg: SheetConfig | None = None):
        self.cfg = cfg or SheetConfig()

    def header(self, languages: Sequence[str]) -> List[str]:
        return [ORIGINAL_HEADER] + [display_name(code) for code in languages]

    def build(self, records: Sequence[TranslationRecord], languages: Sequence[str]) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = self.cfg.sheet_title
        ws.append(self.header(languages))
        for rec in records:
            ws.append([rec.original] + [rec.translations.get(code, "") for code in languages])

        for col in ws.iter_cols(min_row=1, max_row=1):
            ws.column_dimensions[col[0].column_letter].width = self.cfg.column_width
            if self.cfg.bold_header:
                col[0].font = Font(bold=True)
        if self.cfg.wrap_text:
            for row in ws.iter_rows(min_row=2):
                for cell in row:
                    cell.alignment = Alignment(wrap_text=True, vertical="top")
        return wb

    def write(self, records: Sequence[TranslationRecord], languages: Sequence[str], output_path: str) -> str:
        p = Path(output_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        self.build(records, languages).save(str(p))
        unified_print(f"已导出 {len(records)} 条 -> {p}", "export", "xlsx", level="info")
        return str(p)
