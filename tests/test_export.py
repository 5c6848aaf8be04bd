from __future__ import annotations

import json
from pathlib import Path

import pytest
from openpyxl import load_workbook

from indutrans.core.models import TranslationRecord
from indutrans.services.exporting import default_export_name, export_records

RECORDS = [
    TranslationRecord("r-0", "电机", {"en": "Motor", "literal": "电的机器"}),
    TranslationRecord("r-1", "急停\n按钮", {"en": "Emergency stop\nbutton", "literal": ""}),
]


def test_xlsx_layout(tmp_path: Path) -> None:
    out = export_records(RECORDS, ["en", "literal"], {}, output=tmp_path / "sub" / "result.xlsx")
    assert out == tmp_path / "sub" / "result.xlsx"

    ws = load_workbook(out)["Translations"]
    rows = [[c.value for c in row] for row in ws.iter_rows()]
    assert rows[0] == ["原文", "英语 (English)", "直译繁体 (Literal)"]
    assert rows[1] == ["电机", "Motor", "电的机器"]
    assert rows[2][0] == "急停\n按钮"
    assert ws["A1"].font.bold
    assert ws.column_dimensions["A"].width == 40


def test_bare_name_goes_to_export_dir(tmp_path: Path) -> None:
    out = export_records(RECORDS, ["en"], {"export_dir": str(tmp_path / "exports")}, output=Path("x.xlsx"))
    assert out == tmp_path / "exports" / "x.xlsx"
    assert out.exists()


def test_default_name(tmp_path: Path) -> None:
    out = export_records(RECORDS, ["en"], {"export_dir": str(tmp_path)})
    assert out.name == default_export_name()
    assert out.name.startswith("InduTrans_Export_") and out.suffix == ".xlsx"


def test_unknown_suffix_becomes_xlsx(tmp_path: Path) -> None:
    out = export_records(RECORDS, ["en"], {}, output=tmp_path / "result.csv")
    assert out.suffix == ".xlsx"
    assert out.exists()


def test_json_payload(tmp_path: Path) -> None:
    out = export_records(RECORDS, ["en", "literal"], {}, output=tmp_path / "r.json", provider="gemini")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["metadata"] == {"languages": ["en", "literal"], "provider": "gemini", "count": 2}
    assert data["records"][0] == {"id": "r-0", "original": "电机", "translations": {"en": "Motor", "literal": "电的机器"}}


def test_empty_export_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        export_records([], ["en"], {}, output=tmp_path / "r.xlsx")
