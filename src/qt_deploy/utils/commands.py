"""Running the external tools the deployment relies on."""

import subprocess
from typing import List, Type

import structlog

from qt_deploy.core.exceptions import ExternalCommandError

logger = structlog.get_logger()

# Shell conventions for a command that could not be run or was cut short
EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


def run_tool(
    cmd: List[str],
    error_cls: Type[ExternalCommandError] = ExternalCommandError,
    timeout: float = 60.0,
) -> str:
    """Run an external tool and return its stdout.

    Args:
        cmd: Command and arguments
        error_cls: Exception raised when the tool fails
        timeout: Seconds to wait before giving up

    Returns:
        Captured stdout text

    Raises:
        ExternalCommandError: (as ``error_cls``) on a missing executable,
            a timeout or a non-zero exit status
    """
    logger.debug("Running external command", command=" ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise error_cls(
            f"Command not found: {cmd[0]}",
            command=cmd,
            exit_code=EXIT_NOT_FOUND,
        )
    except subprocess.TimeoutExpired:
        raise error_cls(
            f"Command timed out after {timeout}s: {' '.join(cmd)}",
            command=cmd,
            exit_code=EXIT_TIMEOUT,
        )

    if result.returncode != 0:
        raise error_cls(
            f"Command failed with exit code {result.returncode}: {' '.join(cmd)}",
            command=cmd,
            exit_code=result.returncode,
            stderr=result.stderr[:500],
        )

    return result.stdout
