"""
Pytest configuration and fixtures for qt-deploy tests.
"""

import os
import subprocess
from pathlib import Path
from typing import Dict, List
from unittest.mock import patch

import pytest
from structlog.contextvars import clear_contextvars


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """
    Keep tests independent of the caller's environment.

    Drops any QT_DEPLOY_* settings, runs from an empty directory so no stray
    .env file is picked up, and clears bound log context.
    """
    for key in list(os.environ):
        if key.startswith("QT_DEPLOY_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    clear_contextvars()
    yield
    clear_contextvars()


class FakeToolchain:
    """
    Stands in for ``ldd`` and ``qtpaths``.

    Libraries and plugins are real files under a temporary root so copies and
    comparisons run against the filesystem; only the external commands are
    faked.
    """

    def __init__(self, root: Path):
        self.root = root
        self.lib_root = root / "sysroot" / "usr" / "lib"
        self.lib_root.mkdir(parents=True)
        self.plugins_dir = root / "qt" / "plugins"
        self.plugins_dir.mkdir(parents=True)
        self.qtpaths = root / "qt" / "bin" / "qtpaths"
        self.binary = root / "build" / "my-binary"
        self.binary.parent.mkdir(parents=True)
        self.binary.write_bytes(b"\x7fELF binary")

        self.deps: Dict[str, List[str]] = {}
        self.failures: Dict[str, int] = {}
        self.calls: List[List[str]] = []

    def library(self, name: str, content: bytes = None) -> Path:
        """Create a library file in the fake system library directory."""
        path = self.lib_root / name
        path.write_bytes(content if content is not None else f"lib:{name}".encode())
        return path

    def plugin(self, subdir: str, name: str, content: bytes = None) -> Path:
        """Create a plugin file under the fake Qt plugin root."""
        path = self.plugins_dir / subdir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content if content is not None else f"plugin:{name}".encode())
        return path

    def depends(self, file_path: Path, *entries) -> None:
        """Declare what ``ldd`` reports for a file (paths or raw resolved strings)."""
        self.deps[str(file_path)] = [str(entry) for entry in entries]

    def fail(self, target: Path, returncode: int) -> None:
        """Make the command acting on ``target`` exit with ``returncode``."""
        self.failures[str(target)] = returncode

    def ldd_output(self, file_path: str) -> str:
        lines = ["\tlinux-vdso.so.1 (0x00007ffd3a5f2000)"]
        for entry in self.deps.get(file_path, []):
            if entry == "not found":
                lines.append("\tlibmissing.so.1 => not found")
            else:
                lines.append(f"\t{Path(entry).name} => {entry} (0x00007f2c1a200000)")
        lines.append("\t/lib64/ld-linux-x86-64.so.2 (0x00007f2c1a4a0000)")
        return "\n".join(lines) + "\n"

    def run(self, cmd, capture_output=False, text=False, timeout=None, **kwargs):
        self.calls.append(list(cmd))

        if cmd[0] == "ldd":
            target = cmd[1]
            if target in self.failures:
                return subprocess.CompletedProcess(
                    cmd, self.failures[target], "", f"ldd: {target}: not a dynamic executable\n"
                )
            return subprocess.CompletedProcess(cmd, 0, self.ldd_output(target), "")

        if cmd[0] == str(self.qtpaths):
            if cmd[0] in self.failures:
                return subprocess.CompletedProcess(cmd, self.failures[cmd[0]], "", "qtpaths: error\n")
            assert cmd[1:] == ["-query", "QT_INSTALL_PLUGINS"]
            return subprocess.CompletedProcess(cmd, 0, f"{self.plugins_dir}\n", "")

        raise FileNotFoundError(cmd[0])

    def ldd_targets(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == "ldd"]


@pytest.fixture
def toolchain(tmp_path):
    """Fake ldd/qtpaths wired into subprocess.run."""
    fake = FakeToolchain(tmp_path / "fake")
    with patch("qt_deploy.utils.commands.subprocess.run", side_effect=fake.run):
        yield fake


@pytest.fixture
def deploy_dir(tmp_path):
    return tmp_path / "deploy"
