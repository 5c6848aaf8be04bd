from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from indutrans.core.config import load_config_file
from indutrans.core.models import DEFAULT_REGION, TencentCredentials


def secure_load_config(config_path: str) -> Dict[str, Any]:
    """加载配置文件并返回字典（只读，不修改文件）。"""
    cfg = load_config_file(Path(config_path))
    return cfg if isinstance(cfg, dict) else {}


def load_tencent_credentials(conf: Optional[Mapping[str, Any]]) -> Optional[TencentCredentials]:
    """Build Tencent credentials from merged config; ``None`` when id or key is blank."""
    conf = conf or {}
    sid = str(conf.get("tencent_secret_id") or "").strip()
    skey = str(conf.get("tencent_secret_key") or "").strip()
    if not sid or not skey:
        return None
    region = str(conf.get("tencent_region") or DEFAULT_REGION).strip() or DEFAULT_REGION
    return TencentCredentials(secret_id=sid, secret_key=skey, region=region)


def save_tencent_credentials(config_path: str | Path, creds: TencentCredentials) -> Path:
    """Write credentials into the YAML config, keeping every other key."""
    p = Path(config_path)
    data = load_config_file(p) if p.exists() else {}
    data["tencent_secret_id"] = creds.secret_id
    data["tencent_secret_key"] = creds.secret_key
    data["tencent_region"] = creds.region
    p.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8")
    return p


__all__ = ["secure_load_config", "load_tencent_credentials", "save_tencent_credentials"]
