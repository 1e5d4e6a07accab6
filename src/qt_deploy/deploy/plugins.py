"""Qt plugin deployment."""

from pathlib import Path
from typing import Callable, List, Union

import structlog

from qt_deploy.core.exceptions import PluginError, PluginSourceMissingError
from qt_deploy.core.models import DeploymentResult, PluginSpec, SelectionMode
from qt_deploy.utils.files import copy_into

logger = structlog.get_logger()

# Called with each copied plugin source file; returns the libraries it wrote
DependencyCopier = Callable[[Path], List[Path]]


def _plugin_files(src_dir: Path) -> List[Path]:
    """Regular, non-hidden files of a directory in name order."""
    return sorted(
        entry
        for entry in src_dir.iterdir()
        if not entry.name.startswith(".") and entry.is_file()
    )


def _record_error(result: DeploymentResult, error: PluginError, **fields) -> None:
    logger.error(str(error), code=error.code, **fields)
    result.errors.append(str(error))


def copy_all_files(
    src_dir: Path,
    dest_dir: Path,
    copy_dependencies: DependencyCopier,
) -> DeploymentResult:
    """Copy every file of ``src_dir`` into ``dest_dir`` along with its dependencies."""
    result = DeploymentResult()

    if not src_dir.is_dir():
        _record_error(
            result,
            PluginSourceMissingError(
                f"Directory {src_dir} does not exist", code="plugin_dir_missing"
            ),
            src_dir=str(src_dir),
        )
        return result

    logger.info("Copying all plugin files", src_dir=str(src_dir), dest_dir=str(dest_dir))
    for plugin_file in _plugin_files(src_dir):
        result.copied_plugins.append(copy_into(plugin_file, dest_dir))
        result.copied_libraries.extend(copy_dependencies(plugin_file))

    return result


def copy_named_files(
    src_dir: Path,
    dest_dir: Path,
    names: List[str],
    copy_dependencies: DependencyCopier,
) -> DeploymentResult:
    """Copy the named files of ``src_dir`` into ``dest_dir``, skipping missing ones."""
    result = DeploymentResult()

    for name in names:
        src_file = src_dir / name
        if not src_file.is_file():
            _record_error(
                result,
                PluginSourceMissingError(
                    f"File {src_file} does not exist", code="plugin_file_missing"
                ),
                src_file=str(src_file),
            )
            continue

        logger.info("Copying plugin file", src_file=str(src_file), dest_dir=str(dest_dir))
        result.copied_plugins.append(copy_into(src_file, dest_dir))
        result.copied_libraries.extend(copy_dependencies(src_file))

    return result


def deploy_plugin(
    plugin_root: Union[str, Path],
    spec: PluginSpec,
    plugins_dir: Path,
    copy_dependencies: DependencyCopier,
) -> DeploymentResult:
    """Deploy one plugin subdirectory.

    The destination directory is created before the mode is checked, so an
    invalid mode leaves it empty. Per-item problems are logged and recorded
    in the result; copy and dependency-listing failures propagate.

    Args:
        plugin_root: Qt plugin installation root
        spec: Subdirectory and selection mode
        plugins_dir: ``<deploy_dir>/plugins``
        copy_dependencies: Copies a plugin's shared-library dependencies

    Returns:
        What was copied and which items were skipped
    """
    src_dir = Path(f"{plugin_root}/{spec.subdir}")
    dest_dir = plugins_dir / spec.subdir
    dest_dir.mkdir(parents=True, exist_ok=True)

    try:
        selection = spec.selection()
    except PluginError as e:
        result = DeploymentResult()
        _record_error(result, e, spec=str(spec))
        return result

    if selection.mode == SelectionMode.ALL:
        return copy_all_files(src_dir, dest_dir, copy_dependencies)
    return copy_named_files(src_dir, dest_dir, selection.files, copy_dependencies)
