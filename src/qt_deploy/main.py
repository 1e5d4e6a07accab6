"""Main entry point for qt-deploy."""

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import structlog
from pydantic import ValidationError

from qt_deploy.core.config import Settings
from qt_deploy.core.exceptions import QtDeployError, UsageError
from qt_deploy.core.models import DeploymentRequest
from qt_deploy.deploy.manager import QtDeployer
from qt_deploy.utils.logging import bind_deploy_context, setup_logging

logger = structlog.get_logger()

PROG = "qt-deploy"
USAGE = f"Usage: {PROG} <binary_path> <deploy_dir> <qtpaths_path> <exclude_std_libs>"

TRUE_VALUE = "true"
FALSE_VALUE = "false"


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        print(USAGE)
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        add_help=False,
        usage=USAGE[len("Usage: "):],
        description="Deploy the shared libraries and Qt plugins of a binary",
    )
    parser.add_argument("binary_path", help="Binary to deploy the Qt dependencies for")
    parser.add_argument("deploy_dir", help="Directory to deploy to, e.g. the CMake install directory")
    parser.add_argument("qtpaths_path", help="Path to the qtpaths executable")
    parser.add_argument("exclude_std_libs", help="true to skip the standard C/C++ libraries")
    return parser


def parse_bool_flag(value: str) -> bool:
    """Parse a boolean CLI string; only "true" (any case) enables the flag."""
    normalized = value.lower()
    if normalized == TRUE_VALUE:
        return True
    if normalized != FALSE_VALUE:
        logger.warning("exclude_std_libs has unexpected value, treating as false", value=value)
    return False


def parse_request(argv: Optional[List[str]] = None) -> DeploymentRequest:
    """Turn command-line arguments into a deployment request.

    Raises:
        UsageError: if the arguments are malformed
    """
    args = build_parser().parse_args(argv)
    return DeploymentRequest(
        binary_path=Path(args.binary_path),
        deploy_dir=Path(args.deploy_dir),
        qtpaths_path=Path(args.qtpaths_path),
        exclude_std_libs=parse_bool_flag(args.exclude_std_libs),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run a deployment and return the process exit status."""
    try:
        settings = Settings()
    except ValidationError as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, settings.log_format)

    try:
        request = parse_request(argv)
    except UsageError:
        return 1

    bind_deploy_context(request.binary_path, request.deploy_dir)

    try:
        QtDeployer(request, settings).deploy()
    except QtDeployError as e:
        logger.error(
            "Deployment failed",
            error=str(e),
            code=e.code,
            exit_code=e.exit_code,
            stderr=getattr(e, "stderr", None) or None,
        )
        return e.exit_code
    except OSError as e:
        logger.error("Deployment failed", error=str(e), filename=e.filename)
        return 1

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
