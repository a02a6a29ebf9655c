"""
Settings Manager - Defaults cua CLI luu tai ~/.wordtally/settings.json.

    settings = load_app_settings()       # defaults cho lan chay nay
    save_app_settings(settings)          # wordtally --save-defaults ...

Keys la cua phien ban khac (khong phai AppSettings field) duoc giu nguyen
khi save.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

from config.app_settings import AppSettings
from config.paths import SETTINGS_FILE
from core.logging_config import log_debug, log_error


def _read_settings_dict(path: Path) -> Dict[str, Any]:
    """Doc JSON object tu file; file thieu, hong hoac khong phai object -> {}."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        log_debug(f"[Settings] Ignoring unreadable {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def load_app_settings() -> AppSettings:
    """
    Load defaults cho CLI.

    Returns:
        AppSettings tu file, field sai type hoac thieu dung gia tri mac dinh
    """
    return AppSettings.from_dict(_read_settings_dict(SETTINGS_FILE))


def save_app_settings(settings: AppSettings) -> bool:
    """
    Ghi settings xuong file, merge voi keys da co.

    Ghi vao file tam roi os.replace de file cu khong bi cat ngang
    neu process chet giua chung.

    Args:
        settings: Defaults moi

    Returns:
        True neu ghi thanh cong
    """
    merged = {**_read_settings_dict(SETTINGS_FILE), **settings.to_dict()}
    tmp_file = SETTINGS_FILE.with_name(SETTINGS_FILE.name + ".tmp")
    try:
        SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        tmp_file.write_text(json.dumps(merged, indent=2), encoding="utf-8")
        os.replace(tmp_file, SETTINGS_FILE)
    except OSError as e:
        log_error(f"[Settings] Cannot save {SETTINGS_FILE}", e)
        return False
    return True
