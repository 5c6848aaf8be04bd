#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""InduTrans entry.

- `python index.py [args]` behaves like the `indutrans` console script.
- A minimal `config.yml` is created on first start when missing.
- Every step logs to root `log.txt` and console; old logs are cleared on start.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

from indutrans.infra.logging import init_logging, unified_print
from indutrans.infra.secure_config import secure_load_config

MINIMAL_CONFIG = (
    "provider: gemini\n"
    "split_mode: auto\n"
    "target_languages:\n"
    "  - en\n"
    "  - vi\n"
    "  - zh-TW\n"
    'gemini_api_key: ""\n'
    "gemini_model: gemini-2.0-flash\n"
    'tencent_secret_id: ""\n'
    'tencent_secret_key: ""\n'
    "tencent_region: ap-guangzhou\n"
    "export_dir: exports\n"
)


def load_app_config(config_path: str) -> Dict[str, Any]:
    """加载配置：缺失时创建最小默认配置，不修改已存在的配置文件。"""
    p = Path(config_path)
    if not p.exists():
        try:
            p.write_text(MINIMAL_CONFIG, encoding="utf-8")
            unified_print("已创建最小配置 config.yml", "ui", "config", level="info")
        except OSError as e:
            unified_print(f"创建最小配置失败：{e}", "ui", "config", level="error")
            raise
    data = secure_load_config(str(p))
    if not isinstance(data, dict):
        raise RuntimeError("Invalid config content")
    return data


def prepare_logging(log_file: str) -> None:
    """Initialize logging to console and file, clearing old logs."""
    Path(log_file).write_text("", encoding="utf-8")

    os.environ["INDUTRANS_LOG_LEVEL"] = os.environ.get("INDUTRANS_LOG_LEVEL", "INFO")
    init_logging(force=True)

    root = logging.getLogger("")
    if not any(isinstance(h, logging.FileHandler) for h in root.handlers):
        fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        fh.setFormatter(
            logging.Formatter("[%(asctime)s][%(levelname)s][%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
        )
        fh.setLevel(root.level)
        root.addHandler(fh)


if __name__ == "__main__":
    from indutrans.cli.main import main

    prepare_logging("log.txt")
    load_app_config("config.yml")
    main()
