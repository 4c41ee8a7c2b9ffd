"""
Path utilities for naming and placing converted files.

This module contains helpers that format output file names, mirror an input
file's location under the output root and check that an output location can
be written to before ffmpeg is started.
"""
import os
from pathlib import Path

from presetconv.utils.constants import CONVERTED_FOLDER


def format_filename(stem: str, replace_underscores: bool = True) -> str:
    """Replace underscores with spaces in a file stem when enabled."""
    if replace_underscores:
        return stem.replace("_", " ")
    return stem


def mirror_output_dir(src: Path, src_root: Path, out_root: Path) -> Path:
    """Return the directory under ``out_root`` matching ``src``'s place under ``src_root``."""
    rel = Path(os.path.relpath(src, src_root))
    return out_root / rel.parent


def with_extension(path: Path, extension: str) -> Path:
    """Return ``path`` with its suffix replaced by ``extension`` (no leading dot)."""
    return path.parent / f"{path.stem}.{extension}"


def collapse_converted(path: Path) -> Path:
    """
    Collapse a repeated ``converted/converted`` segment into a single one.
    Guards against nesting the default output folder inside itself.
    """
    parts = list(path.parts)
    collapsed = []
    for part in parts:
        if part == CONVERTED_FOLDER and collapsed and collapsed[-1] == CONVERTED_FOLDER:
            continue
        collapsed.append(part)
    if len(collapsed) == len(parts):
        return path
    return Path(*collapsed)


def check_output_access(target: Path) -> str | None:
    """
    Check that ``target`` can be written.

    Returns None when the output directory exists and is writable and the
    target, if already present, is writable too; otherwise a message
    describing the problem.
    """
    out_dir = target.parent
    if not out_dir.is_dir():
        return f"Output directory '{out_dir}' does not exist."
    if not os.access(out_dir, os.W_OK):
        return f"Output directory '{out_dir}' is not writable."
    if target.exists() and not os.access(target, os.W_OK):
        return f"Output file '{target}' exists but is not writable."
    return None


def is_same_file(a: Path, b: Path) -> bool:
    """Return True when both paths name the same existing file."""
    try:
        return a.samefile(b)
    except OSError:
        return False
