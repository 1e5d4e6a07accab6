"""Core data models for qt-deploy."""

import re
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from qt_deploy.core.exceptions import InvalidPluginModeError


BRACKETED_LIST_RE = re.compile(r"^\[.*\]$", re.DOTALL)


class DeploymentRequest(BaseModel):
    """The four inputs of a deployment run."""

    model_config = ConfigDict(frozen=True)

    binary_path: Path = Field(..., description="Binary whose dependencies are deployed")
    deploy_dir: Path = Field(..., description="Root of the deployment tree")
    qtpaths_path: Path = Field(..., description="Path to the qtpaths executable")
    exclude_std_libs: bool = Field(False, description="Skip the C and C++ runtime libraries")

    @property
    def lib_dir(self) -> Path:
        return self.deploy_dir / "lib"

    @property
    def plugins_dir(self) -> Path:
        return self.deploy_dir / "plugins"


class SelectionMode(str, Enum):
    """How files are picked from a plugin subdirectory."""

    ALL = "all"
    NAMED = "named"


class PluginSelection(BaseModel):
    """Parsed plugin mode."""

    mode: SelectionMode
    files: List[str] = Field(default_factory=list)


class PluginSpec(BaseModel):
    """A plugin subdirectory and the raw selection mode for it."""

    model_config = ConfigDict(frozen=True)

    subdir: str = Field(..., description="Subdirectory under the Qt plugin root")
    mode: str = Field(..., description="'all' or a bracketed, space-separated file list")

    @classmethod
    def parse(cls, entry: str) -> "PluginSpec":
        """Parse a ``subdir,mode`` table entry; the mode keeps any further commas."""
        subdir, _, mode = entry.partition(",")
        return cls(subdir=subdir, mode=mode)

    def selection(self) -> PluginSelection:
        """Interpret the mode string.

        Raises:
            InvalidPluginModeError: mode is neither ``all`` nor bracketed
        """
        if self.mode == SelectionMode.ALL.value:
            return PluginSelection(mode=SelectionMode.ALL)
        if BRACKETED_LIST_RE.match(self.mode):
            names = self.mode.replace("[", "").replace("]", "").split()
            return PluginSelection(mode=SelectionMode.NAMED, files=names)
        raise InvalidPluginModeError(
            f"Invalid mode specified for {self}", code="invalid_plugin_mode"
        )

    def __str__(self) -> str:
        return f"{self.subdir},{self.mode}"


DEFAULT_PLUGIN_SPECS: Tuple[PluginSpec, ...] = tuple(
    PluginSpec.parse(entry)
    for entry in (
        "imageformats,all",
        "platforminputcontexts,all",
        "platforms,[libqxcb.so]",
        "platformthemes,[libqxdgdesktopportal.so]",
        "xcbglintegrations,all",
    )
)


class DeploymentResult(BaseModel):
    """Files written by a run and the per-item errors that were skipped."""

    copied_libraries: List[Path] = Field(default_factory=list)
    copied_plugins: List[Path] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    def merge(self, other: "DeploymentResult") -> None:
        self.copied_libraries.extend(other.copied_libraries)
        self.copied_plugins.extend(other.copied_plugins)
        self.errors.extend(other.errors)
