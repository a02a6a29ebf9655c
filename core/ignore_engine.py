"""
Ignore Engine - Expand input paths thanh danh sach files can dem.

- File paths duoc giu nguyen (ke ca khi khong ton tai, de FileScanner log loi)
- Directories duoc walk de quy theo thu tu sorted, loai bo entries
  match voi gitignore-style patterns (pathspec)
- Path trung lap chi duoc dem mot lan

Cung cap:
- build_ignore_patterns(): Tap hop patterns tu VCS + default + user
- build_pathspec(): Tao pathspec.PathSpec tu patterns
- collect_input_files(): Expand list input paths
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

import pathspec

from core.logging_config import log_debug, log_warning

# === Cac VCS directories luon bi exclude ===
VCS_DIRS = [".git/", ".hg/", ".svn/"]

# Binary/archive files khong co nghia khi dem words
DEFAULT_IGNORE_PATTERNS = [
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.pdf",
    "*.zip",
    "*.gz",
    "*.tar",
    "*.so",
    "*.dll",
    "*.exe",
    "*.bin",
]


def build_ignore_patterns(
    *,
    use_default_ignores: bool = True,
    excluded_patterns: Optional[List[str]] = None,
) -> List[str]:
    """
    Tap hop tat ca ignore patterns.

    Thu tu: VCS > Default > User. User patterns co the dung "!" de override.

    Args:
        use_default_ignores: Co dung DEFAULT_IGNORE_PATTERNS khong
        excluded_patterns: Danh sach patterns tu user (gitignore format)

    Returns:
        List cac ignore patterns (gitignore format)
    """
    patterns: List[str] = list(VCS_DIRS)
    if use_default_ignores:
        patterns.extend(DEFAULT_IGNORE_PATTERNS)
    if excluded_patterns:
        patterns.extend(excluded_patterns)
    return patterns


def build_pathspec(
    *,
    use_default_ignores: bool = True,
    excluded_patterns: Optional[List[str]] = None,
) -> pathspec.PathSpec:
    """Wrapper: build_ignore_patterns() roi tao PathSpec."""
    patterns = build_ignore_patterns(
        use_default_ignores=use_default_ignores,
        excluded_patterns=excluded_patterns,
    )
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def _walk_directory(
    root: Path, spec: pathspec.PathSpec, current: Optional[Path] = None
) -> Iterator[Path]:
    """Walk de quy, sorted, bo qua entries bi ignore (match tuong doi voi root)."""
    current = current if current is not None else root
    try:
        entries = sorted(os.scandir(current), key=lambda e: e.name)
    except OSError as e:
        log_warning(f"[IgnoreEngine] Cannot list directory {current}: {e}")
        return

    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
        except OSError:
            continue

        # pathspec can trailing slash cho directories
        rel = path.relative_to(root).as_posix()
        if is_dir:
            rel += "/"

        if spec.match_file(rel):
            log_debug(f"[IgnoreEngine] Skipped {path}")
            continue

        if is_dir:
            yield from _walk_directory(root, spec, path)
        else:
            yield path


def collect_input_files(
    paths: Sequence[Union[str, Path]],
    *,
    excluded_patterns: Optional[List[str]] = None,
    use_default_ignores: bool = True,
) -> List[Path]:
    """
    Expand input paths thanh danh sach files (khong trung lap).

    Args:
        paths: Input paths tu command line (files hoac directories)
        excluded_patterns: Gitignore-style patterns ap dung trong directories
        use_default_ignores: Co loai VCS dirs va binary files mac dinh khong

    Returns:
        List Path theo thu tu input, directories duoc expand sorted
    """
    spec = build_pathspec(
        use_default_ignores=use_default_ignores,
        excluded_patterns=excluded_patterns,
    )

    seen = set()
    files: List[Path] = []
    for raw in paths:
        path = Path(raw)
        candidates = _walk_directory(path, spec) if path.is_dir() else [path]
        for candidate in candidates:
            key = os.path.normcase(os.path.abspath(candidate))
            if key in seen:
                continue
            seen.add(key)
            files.append(candidate)
    return files
