"""Deployment primitives: dependency copying, qtpaths queries and plugin deployment."""

from .dependencies import copy_dependencies, list_dependencies, parse_ldd_output
from .manager import QtDeployer
from .plugins import deploy_plugin
from .qtpaths import get_qt_plugins_dir

__all__ = [
    "QtDeployer",
    "copy_dependencies",
    "deploy_plugin",
    "get_qt_plugins_dir",
    "list_dependencies",
    "parse_ldd_output",
]
