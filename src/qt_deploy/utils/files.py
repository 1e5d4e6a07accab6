"""Filesystem helpers for populating the deployment tree."""

import filecmp
import shutil
from pathlib import Path


def files_identical(first: Path, second: Path) -> bool:
    """Byte-for-byte comparison of two files."""
    return filecmp.cmp(first, second, shallow=False)


def copy_if_different(src: Path, dest: Path) -> bool:
    """Copy ``src`` to ``dest`` unless ``dest`` already holds the same bytes.

    Returns:
        True if a copy was made
    """
    if dest.is_file() and files_identical(src, dest):
        return False

    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy(src, dest)
    return True


def copy_into(src: Path, dest_dir: Path) -> Path:
    """Copy a file into a directory, overwriting any file of the same name."""
    dest = dest_dir / src.name
    shutil.copy(src, dest)
    return dest
