"""
Install target models: what a run installs and from where.

A target is either a software update catalog entry (installed by
label, no checksum) or a downloaded artifact (package or disk image),
which must carry a checksum before it is handed to a privileged
installer.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator


class InstallMethod(str, Enum):
    """How a target reaches the system."""

    CATALOG = "catalog"          # softwareupdate -i <label>
    PACKAGE = "package"          # installer -pkg <file>
    DISK_IMAGE = "disk_image"    # hdiutil attach + installer -pkg


class InstallTarget(BaseModel):
    """A thing to install."""

    name: str
    source: str                  # download URL, or catalog label
    checksum: str | None = None  # "algo:hex"
    method: InstallMethod = InstallMethod.PACKAGE
    package_path: str = ""       # package inside a disk image

    @model_validator(mode="after")
    def _downloads_need_checksum(self) -> InstallTarget:
        if self.method != InstallMethod.CATALOG and not self.checksum:
            raise ValueError(
                f"Install target '{self.name}' is downloaded and needs a checksum"
            )
        if self.method == InstallMethod.DISK_IMAGE and not self.package_path:
            raise ValueError(
                f"Install target '{self.name}' is a disk image and needs package_path"
            )
        return self

    @property
    def file_name(self) -> str:
        """Last path segment of the source URL."""
        return self.source.rstrip("/").rsplit("/", 1)[-1]

    @property
    def base_url(self) -> str:
        """Source URL without the file name (keeps the trailing slash)."""
        return self.source[: len(self.source) - len(self.file_name)]


class CompilerTarget(BaseModel):
    """The gfortran build resolved for one macOS release."""

    version: str                 # "8.2"
    os_name: str                 # "Mojave"
    checksum: str                # hex digest
    algorithm: str = "md5"

    @property
    def label(self) -> str:
        return f"gfortran-{self.version}-{self.os_name}"

    @property
    def file_name(self) -> str:
        return f"{self.label}.dmg"

    @property
    def package_path(self) -> str:
        """Package path relative to the image mount point."""
        return f"{self.label}/gfortran.pkg"

    @property
    def checksum_spec(self) -> str:
        return f"{self.algorithm}:{self.checksum}"

    def base_url(self, root: str) -> str:
        """Release directory URL under ``root``."""
        return f"{root.rstrip('/')}/{self.version}/"

    def url(self, root: str) -> str:
        return self.base_url(root) + self.file_name

    def as_install_target(self, root: str) -> InstallTarget:
        return InstallTarget(
            name=f"gfortran {self.version}",
            source=self.url(root),
            checksum=self.checksum_spec,
            method=InstallMethod.DISK_IMAGE,
            package_path=self.package_path,
        )
