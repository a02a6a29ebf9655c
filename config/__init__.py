"""
Config Package - Chua cac constants va cau hinh cua ung dung

Bao gom:
- paths: Duong dan app dir, log dir, settings file
- app_settings: Typed settings dataclass
"""

from config.app_settings import AppSettings, VALID_SORT_MODES

__all__ = [
    "AppSettings",
    "VALID_SORT_MODES",
]
