"""
L4 Execution: Privileged install actions.

Wraps ``installer``, ``hdiutil``, ``softwareupdate`` and
``xcode-select``. Every function either completes or raises
``PrivilegedOperationError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from macrtools.core.services.toolchain.data.constants import INSTALL_TARGET_VOLUME
from macrtools.core.services.toolchain.domain.errors import CleanupError, PrivilegedOperationError
from macrtools.core.services.toolchain.execution.subprocess_runner import run_privileged

logger = logging.getLogger(__name__)


def install_package(
    pkg_path: Path | str,
    *,
    sudo_password: str = "",
    timeout: int = 3600,
) -> None:
    """Run the macOS package installer against the root volume."""
    logger.info("Installing package %s", pkg_path)
    run_privileged(
        ["installer", "-pkg", str(pkg_path), "-target", INSTALL_TARGET_VOLUME],
        sudo_password=sudo_password,
        timeout=timeout,
    )


@contextmanager
def mounted_image(
    image_path: Path | str,
    mount_point: str,
    *,
    sudo_password: str = "",
    timeout: int = 120,
) -> Iterator[Path]:
    """Attach a disk image for the duration of the ``with`` block.

    The image is detached on every exit path. If the body raised, a
    detach failure is only logged so the body's error propagates.
    """
    logger.info("Mounting %s at %s", image_path, mount_point)
    run_privileged(
        ["hdiutil", "attach", str(image_path), "-mountpoint", mount_point, "-nobrowse"],
        sudo_password=sudo_password,
        timeout=timeout,
    )
    failed = False
    try:
        yield Path(mount_point)
    except BaseException:
        failed = True
        raise
    finally:
        try:
            run_privileged(
                ["hdiutil", "detach", mount_point],
                sudo_password=sudo_password,
                timeout=timeout,
            )
            logger.info("Unmounted %s", mount_point)
        except PrivilegedOperationError as e:
            if not failed:
                raise
            logger.error("Could not unmount %s after failed install: %s", mount_point, e)


def install_from_disk_image(
    image_path: Path,
    mount_point: str,
    package_relpath: str,
    *,
    sudo_password: str = "",
    command_timeout: int = 120,
    install_timeout: int = 3600,
) -> None:
    """Mount ``image_path``, install the package inside it, unmount, delete the image."""
    with mounted_image(
        image_path, mount_point, sudo_password=sudo_password, timeout=command_timeout,
    ) as mp:
        install_package(mp / package_relpath, sudo_password=sudo_password, timeout=install_timeout)
    remove_scratch(image_path)


def remove_scratch(path: Path) -> None:
    """Delete a scratch file if it is still there.

    Raises:
        CleanupError: If the file exists but cannot be deleted.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except OSError as e:
        raise CleanupError(f"Could not remove scratch file {path}: {e}") from e
    logger.info("Removed %s", path)


def reset_tool_selection(*, sudo_password: str = "", timeout: int = 120) -> None:
    """Reset the developer directory selection (``xcode-select --reset``)."""
    logger.info("Resetting developer tool selection")
    run_privileged(["xcode-select", "--reset"], sudo_password=sudo_password, timeout=timeout)


def install_catalog_update(
    label: str,
    *,
    sudo_password: str = "",
    timeout: int = 3600,
) -> None:
    """Install a software update catalog entry by label."""
    logger.info("Installing software update '%s'", label)
    run_privileged(
        ["softwareupdate", "-i", label, "--verbose"],
        sudo_password=sudo_password,
        timeout=timeout,
    )
