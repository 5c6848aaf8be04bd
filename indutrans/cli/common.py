from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer

from indutrans.core.config import load_config_file, load_env, merge_config

DEFAULT_CONFIG = "config.yml"


def load_conf(config: Optional[Path], overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """配置优先级：命令行 > 环境变量 > 配置文件（缺省读取当前目录 config.yml）。"""
    path = config if config is not None else Path.cwd() / DEFAULT_CONFIG
    return merge_config(load_config_file(path), load_env(), overrides or {})


def read_input(path: Optional[Path]) -> str:
    """读取输入文本；未指定或为 ``-`` 时读取标准输入。"""
    if path is None or str(path) == "-":
        return typer.get_text_stream("stdin").read()
    return path.read_text(encoding="utf-8")
