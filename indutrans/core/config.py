from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Environment variable -> config key
_ENV_KEYS: Dict[str, str] = {
    "INDUTRANS_PROVIDER": "provider",
    "INDUTRANS_SPLIT_MODE": "split_mode",
    "INDUTRANS_TARGET_LANGUAGES": "target_languages",
    "INDUTRANS_EXPORT_DIR": "export_dir",
    "GEMINI_MODEL": "gemini_model",
    "TENCENTCLOUD_SECRET_ID": "tencent_secret_id",
    "TENCENTCLOUD_SECRET_KEY": "tencent_secret_key",
    "TENCENTCLOUD_REGION": "tencent_region",
    "TMT_RELAY_PREFIX": "tmt_relay_prefix",
}


def load_config_file(path: Optional[str | Path]) -> Dict[str, Any]:
    """加载 YAML/JSON 配置文件，返回字典。"""
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}

    with p.open("r", encoding="utf-8") as f:
        if p.suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f) or {}
    return data if isinstance(data, dict) else {}


def load_env() -> Dict[str, Any]:
    """读取环境变量中的配置项；逗号分隔的语言列表会被拆分。"""
    out: Dict[str, Any] = {}
    for env, key in _ENV_KEYS.items():
        v = os.getenv(env)
        if v is None or not v.strip():
            continue
        if key == "target_languages":
            out[key] = [x.strip() for x in v.split(",") if x.strip()]
        else:
            out[key] = v.strip()
    return out


def merge_config(*layers: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge config layers left to right; later non-None values win."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if not isinstance(layer, dict):
            continue
        for k, v in layer.items():
            if v is None:
                continue
            merged[k] = v
    return merged


__all__ = ["load_config_file", "load_env", "merge_config"]
