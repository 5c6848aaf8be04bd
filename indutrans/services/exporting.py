from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from indutrans.core.models import TranslationRecord, records_to_dicts
from indutrans.core.utils import ensure_directory, safe_filename, today_iso
from indutrans.export.xlsx import SheetConfig, WorkbookWriter


def default_export_name() -> str:
    return f"InduTrans_Export_{today_iso()}.xlsx"


def export_dir(conf: Dict[str, Any]) -> Path:
    return ensure_directory(conf.get("export_dir") or Path.cwd())


def build_payload(
    records: Sequence[TranslationRecord], languages: Sequence[str], provider: str = ""
) -> Dict[str, Any]:
    return {
        "records": records_to_dicts(list(records)),
        "metadata": {"languages": list(languages), "provider": provider, "count": len(records)},
    }


def export_records(
    records: Sequence[TranslationRecord],
    languages: Sequence[str],
    conf: Dict[str, Any],
    *,
    output: Optional[Path] = None,
    provider: str = "",
) -> Path:
    """导出翻译结果：``.json`` 写 JSON，其余写 Excel。空结果不导出。"""
    if not records:
        raise ValueError("no records to export")
    if output is not None and output.parent != Path(""):
        out_path = output
    else:
        name = output.name if output is not None else default_export_name()
        out_path = export_dir(conf) / safe_filename(name)

    if out_path.suffix.lower() == ".json":
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(
            json.dumps(build_payload(records, languages, provider), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        return out_path

    if out_path.suffix.lower() != ".xlsx":
        out_path = out_path.with_suffix(".xlsx")
    writer = WorkbookWriter(SheetConfig(column_width=int(conf.get("export_column_width") or 40)))
    return Path(writer.write(records, languages, str(out_path)))
