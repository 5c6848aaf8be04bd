from __future__ import annotations

import os
import re
import time
from pathlib import Path
from typing import Union


def now_stamp() -> str:
    """返回 YYYYMMDD_HHMMSS 时间戳。"""
    return time.strftime("%Y%m%d_%H%M%S")


def now_ms() -> int:
    return int(time.time() * 1000)


def today_iso() -> str:
    """返回本地日期 YYYY-MM-DD。"""
    return time.strftime("%Y-%m-%d")


def strip_trailing_period(text: str) -> str:
    """Trim, then drop exactly one trailing ``.`` (spreadsheet cells carry no final period)."""
    if not text:
        return ""
    t = str(text).strip()
    if t.endswith("."):
        t = t[:-1]
    return t


def safe_filename(filename: str, max_length: int = 255) -> str:
    """清理文件名，移除不安全字符并限制长度。保留扩展名。"""
    if not filename:
        return f"untitled_{now_stamp()}"

    name, ext = os.path.splitext(filename.strip())
    name = re.sub(r"[\\/:*?\"<>|]", "_", name)
    name = re.sub(r"\s+", " ", name).strip().strip(".")
    ext = re.sub(r"\s+", "", ext)

    if not name:
        name = f"untitled_{now_stamp()}"

    total_len = len(name.encode("utf-8")) + len(ext.encode("utf-8"))
    if total_len > max_length:
        keep = max(1, max_length - len(ext))
        name = name[:keep]

    return f"{name}{ext}"


def ensure_directory(path: Union[str, Path]) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p
