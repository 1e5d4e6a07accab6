"""Qt installation path queries."""

from pathlib import Path
from typing import Union

import structlog

from qt_deploy.core.exceptions import QtPathsQueryError
from qt_deploy.utils.commands import run_tool

logger = structlog.get_logger()

PLUGINS_QUERY_KEY = "QT_INSTALL_PLUGINS"


def get_qt_plugins_dir(
    qtpaths_path: Union[str, Path],
    query_key: str = PLUGINS_QUERY_KEY,
    timeout: float = 60.0,
) -> str:
    """Ask qtpaths where the Qt plugins are installed.

    The answer is returned as-is (trailing newlines removed); an empty or
    bogus value surfaces later as missing plugin directories.
    """
    output = run_tool(
        [str(qtpaths_path), "-query", query_key],
        error_cls=QtPathsQueryError,
        timeout=timeout,
    )
    plugins_dir = output.rstrip("\n")
    logger.debug("Resolved Qt plugins directory", plugins_dir=plugins_dir)
    return plugins_dir
