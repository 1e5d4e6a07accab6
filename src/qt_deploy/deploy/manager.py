"""Deployment of a binary's shared libraries and Qt plugins."""

from pathlib import Path
from typing import Iterable, List, Optional

import structlog

from qt_deploy.core.config import Settings
from qt_deploy.core.models import (
    DEFAULT_PLUGIN_SPECS,
    DeploymentRequest,
    DeploymentResult,
    PluginSpec,
)
from qt_deploy.deploy.dependencies import copy_dependencies
from qt_deploy.deploy.plugins import deploy_plugin
from qt_deploy.deploy.qtpaths import get_qt_plugins_dir

logger = structlog.get_logger()


class QtDeployer:
    """Runs one deployment: binary libraries first, then the plugin table.

    The run is strictly sequential and stops at the first fatal error.
    Nothing already written is rolled back.
    """

    def __init__(
        self,
        request: DeploymentRequest,
        settings: Optional[Settings] = None,
        plugin_specs: Iterable[PluginSpec] = DEFAULT_PLUGIN_SPECS,
    ):
        self.request = request
        self.settings = settings or Settings()
        self.plugin_specs = tuple(plugin_specs)

    def create_directories(self) -> None:
        """Create ``lib`` and ``plugins`` under the deploy directory."""
        self.request.lib_dir.mkdir(parents=True, exist_ok=True)
        self.request.plugins_dir.mkdir(parents=True, exist_ok=True)

    def copy_dependencies(self, file_path: Path) -> List[Path]:
        """Copy a file's shared-library dependencies into ``lib``."""
        return copy_dependencies(
            file_path,
            self.request.lib_dir,
            exclude_std_libs=self.request.exclude_std_libs,
            ldd_command=self.settings.ldd_command,
            exclude_token=self.settings.exclude_token,
            timeout=self.settings.command_timeout_seconds,
        )

    def get_plugins_dir(self) -> str:
        return get_qt_plugins_dir(
            self.request.qtpaths_path,
            query_key=self.settings.plugins_query_key,
            timeout=self.settings.command_timeout_seconds,
        )

    def deploy(self) -> DeploymentResult:
        """Run the full deployment.

        Raises:
            ExternalCommandError: if ldd or qtpaths fails
            OSError: if a copy fails
        """
        logger.info(
            "Deploying Qt dependencies",
            binary=str(self.request.binary_path),
            deploy_dir=str(self.request.deploy_dir),
            qtpaths=str(self.request.qtpaths_path),
        )

        result = DeploymentResult()

        self.create_directories()
        result.copied_libraries.extend(self.copy_dependencies(self.request.binary_path))

        plugin_root = self.get_plugins_dir()
        logger.info("Deploying Qt plugins", plugin_root=plugin_root)

        for spec in self.plugin_specs:
            result.merge(
                deploy_plugin(
                    plugin_root,
                    spec,
                    self.request.plugins_dir,
                    self.copy_dependencies,
                )
            )

        logger.info(
            "Qt dependencies and plugins deployed successfully",
            libraries_copied=len(result.copied_libraries),
            plugins_copied=len(result.copied_plugins),
        )
        return result
