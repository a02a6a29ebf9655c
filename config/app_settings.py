"""
AppSettings - Typed settings dataclass cho wordtally.

Thay the Dict[str, Any] bang dataclass co type hints, validation va default values.

Modules:
- AppSettings: Dataclass chua toan bo settings cua CLI
- from_dict(): Tao AppSettings tu dict (doc tu settings.json)
- to_dict(): Chuyen doi AppSettings thanh dict de luu xuong file

Su dung:
    settings = load_app_settings()
    table = aggregate(paths, min_length=settings.min_word_length)
"""

from dataclasses import dataclass, field
from typing import Any


# === Default values cho settings ===
_DEFAULT_EXCLUDED_PATTERNS = "__pycache__\n.pytest_cache\n*.pyc"

VALID_SORT_MODES = ("frequency", "alphabetical")


@dataclass
class AppSettings:
    """
    Typed settings cho wordtally.

    Moi field tuong ung voi mot key trong settings.json.
    Default values duoc su dung khi settings.json chua co key tuong ung.
    Command-line flags luon override cac gia tri nay.
    """

    # --- Tokenizer ---
    # So ky tu toi thieu de mot word duoc dem
    min_word_length: int = 2

    # --- Report ---
    # "frequency" hoac "alphabetical"
    sort_mode: str = "frequency"

    # --- Aggregation ---
    # Capacity cua channel; 0 = tu dong (bang so files)
    channel_capacity: int = 0
    # So worker threads; 0 = mot thread cho moi file
    max_workers: int = 0
    # Encoding dung de doc input files
    encoding: str = "utf-8"

    # --- Directory inputs ---
    # Pattern cac file/folder bi loai khi expand directory (separated by newline)
    excluded_patterns: str = field(default=_DEFAULT_EXCLUDED_PATTERNS)
    # Co dung default ignore patterns (VCS dirs, binary files) hay khong
    use_default_ignores: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppSettings":
        """
        Tao AppSettings tu dict, chi lay cac keys trung voi field names.

        Neu value co type khong khop voi field declaration, hoac gia tri
        nam ngoai mien hop le, se bo qua va dung default thay the.

        Args:
            data: Dict settings (thuong tu settings.json)

        Returns:
            AppSettings instance voi values tu dict, fallback ve defaults
        """
        field_types: dict[str, type] = {
            f.name: f.type for f in cls.__dataclass_fields__.values()
        }

        filtered: dict[str, Any] = {}
        for key, value in data.items():
            if key not in field_types:
                continue

            expected_type = field_types[key]

            # Type annotation co the la string (forward ref)
            if isinstance(expected_type, str):
                type_map = {"str": str, "bool": bool, "int": int, "float": float}
                expected_type = type_map.get(expected_type, str)

            # isinstance(True, int) == True, nhung bool khong phai int hop le
            if expected_type is int and isinstance(value, bool):
                continue

            if isinstance(value, expected_type):
                filtered[key] = value

        if filtered.get("sort_mode", "frequency") not in VALID_SORT_MODES:
            filtered.pop("sort_mode")
        for key in ("min_word_length", "channel_capacity", "max_workers"):
            if key in filtered and filtered[key] < 0:
                filtered.pop(key)

        return cls(**filtered)

    def to_dict(self) -> dict[str, Any]:
        """
        Chuyen doi AppSettings thanh dict de luu xuong file.

        Returns:
            Dict voi toan bo settings
        """
        return {
            "min_word_length": self.min_word_length,
            "sort_mode": self.sort_mode,
            "channel_capacity": self.channel_capacity,
            "max_workers": self.max_workers,
            "encoding": self.encoding,
            "excluded_patterns": self.excluded_patterns,
            "use_default_ignores": self.use_default_ignores,
        }

    def get_excluded_patterns_list(self) -> list[str]:
        """
        Parse excluded_patterns string thanh list cac patterns.

        Loai bo dong trong va comments (bat dau bang #).

        Returns:
            List patterns da normalize
        """
        return [
            line.strip()
            for line in self.excluded_patterns.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]
