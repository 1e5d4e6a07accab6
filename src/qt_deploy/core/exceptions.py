"""Custom exceptions for qt-deploy."""

from typing import List, Optional


class QtDeployError(Exception):
    """Base exception for all deployment errors."""

    def __init__(self, message: str, code: Optional[str] = None, exit_code: int = 1):
        super().__init__(message)
        self.code = code
        self.exit_code = exit_code


class UsageError(QtDeployError):
    """Command-line usage error."""
    pass


class ExternalCommandError(QtDeployError):
    """An external tool exited with a failure."""

    def __init__(
        self,
        message: str,
        command: List[str],
        exit_code: int,
        stderr: str = "",
        code: Optional[str] = None,
    ):
        super().__init__(message, code=code, exit_code=exit_code)
        self.command = command
        self.stderr = stderr


class DependencyListingError(ExternalCommandError):
    """The dynamic dependency lister failed."""
    pass


class QtPathsQueryError(ExternalCommandError):
    """The qtpaths query failed."""
    pass


class PluginError(QtDeployError):
    """Plugin-related errors."""
    pass


class InvalidPluginModeError(PluginError):
    """Plugin spec carries an unsupported selection mode."""
    pass


class PluginSourceMissingError(PluginError):
    """Plugin source directory or named plugin file does not exist."""
    pass
