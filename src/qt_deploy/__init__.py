"""qt-deploy - copy a binary's shared libraries and Qt plugins into a standalone tree."""

__version__ = "0.1.0"

from qt_deploy.core.config import Settings
from qt_deploy.core.models import DeploymentRequest, DeploymentResult, PluginSpec
from qt_deploy.deploy.manager import QtDeployer

__all__ = ["Settings", "DeploymentRequest", "DeploymentResult", "PluginSpec", "QtDeployer", "__version__"]
