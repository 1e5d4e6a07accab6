"""Shared-library dependency listing and copying.

Dependencies are whatever ``ldd`` resolves for a file; no graph walking is
done here. Each resolved library lands flat in ``<deploy_dir>/lib``.
"""

import re
from pathlib import Path
from typing import List, Union

import structlog

from qt_deploy.core.exceptions import DependencyListingError
from qt_deploy.utils.commands import run_tool
from qt_deploy.utils.files import copy_if_different

logger = structlog.get_logger()

DEFAULT_EXCLUDE_TOKEN = "incos"

STD_LIBRARY_PATTERNS = (
    re.compile(r"libstdc\+\+\.so.*"),
    re.compile(r"libc\.so.*"),
)


def parse_ldd_output(output: str) -> List[str]:
    """Extract the resolved path field from ``ldd`` output.

    Only lines mapping a soname (``=>``) are considered; the third
    whitespace-separated field is taken, which is ``not`` for unresolved
    entries and empty when the line is truncated.
    """
    paths = []
    for line in output.splitlines():
        if "=>" not in line:
            continue
        fields = line.split()
        paths.append(fields[2] if len(fields) > 2 else "")
    return paths


def is_std_library(path: Union[str, Path]) -> bool:
    """Whether a path names the standard C or C++ runtime library."""
    path = str(path)
    return any(pattern.search(path) for pattern in STD_LIBRARY_PATTERNS)


def list_dependencies(
    file_path: Path,
    ldd_command: str = "ldd",
    exclude_token: str = DEFAULT_EXCLUDE_TOKEN,
    timeout: float = 60.0,
) -> List[Path]:
    """List the resolved shared libraries of a file.

    Unresolved and virtual entries are dropped, as is any path containing
    ``exclude_token``.

    Raises:
        DependencyListingError: if the lister fails
    """
    output = run_tool(
        [ldd_command, str(file_path)],
        error_cls=DependencyListingError,
        timeout=timeout,
    )

    libraries = []
    for entry in parse_ldd_output(output):
        if not entry:
            continue
        if exclude_token and exclude_token in entry:
            continue
        if not Path(entry).is_file():
            continue
        libraries.append(Path(entry))
    return libraries


def copy_dependencies(
    file_path: Path,
    lib_dir: Path,
    exclude_std_libs: bool = False,
    ldd_command: str = "ldd",
    exclude_token: str = DEFAULT_EXCLUDE_TOKEN,
    timeout: float = 60.0,
) -> List[Path]:
    """Copy the dependencies of ``file_path`` into ``lib_dir``.

    A library is copied only when its destination is missing or differs.

    Args:
        file_path: Binary or shared object to inspect
        lib_dir: Flat destination directory
        exclude_std_libs: Skip the C and C++ runtime libraries
        ldd_command: Dependency lister executable
        exclude_token: Substring that drops a reported library
        timeout: Seconds allowed for the lister

    Returns:
        Destination paths that were written
    """
    logger.info("Copying dependencies", file=str(file_path))

    libraries = list_dependencies(
        file_path,
        ldd_command=ldd_command,
        exclude_token=exclude_token,
        timeout=timeout,
    )

    copied = []
    for library in libraries:
        if exclude_std_libs and is_std_library(library):
            logger.debug("Skipping standard library", library=str(library))
            continue

        target = lib_dir / library.name
        if copy_if_different(library, target):
            logger.info("Copied dependency library", library=str(library), lib_dir=str(lib_dir))
            copied.append(target)

    return copied
