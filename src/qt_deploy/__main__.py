"""CLI entrypoint for ``python -m qt_deploy``."""

from qt_deploy.main import run


if __name__ == "__main__":
    run()
