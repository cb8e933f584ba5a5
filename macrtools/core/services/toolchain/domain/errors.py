"""
L1 Domain: Install error taxonomy.

Every fatal condition of a run is one of these exceptions. The CLI
maps ``exit_code`` to the process exit status.
"""

from __future__ import annotations


class InstallError(Exception):
    """Base class for fatal install errors."""

    exit_code = 1


class UnsupportedEnvironmentError(InstallError):
    """The OS version is unknown, unparseable, or not supported."""

    exit_code = 2


class IntegrityError(InstallError):
    """A downloaded artifact does not match its expected checksum."""

    exit_code = 3

    def __init__(self, path: str, expected: str, actual: str):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum mismatch for {path}\n"
            f"Expected: {expected}\n"
            f"Got:      {actual}\n"
            f"The download may be corrupted or tampered with."
        )


class TransportError(InstallError):
    """An artifact download failed."""

    exit_code = 4


class PrivilegedOperationError(InstallError):
    """A privileged command (installer, hdiutil, softwareupdate...) failed."""

    exit_code = 5

    def __init__(self, message: str, command: list[str] | None = None, stderr: str = ""):
        self.command = command or []
        self.stderr = stderr
        detail = f"\n{stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{message}{detail}")


class CleanupError(PrivilegedOperationError):
    """A config file could not be backed up or removed."""


class RunLockedError(InstallError):
    """Another install run holds the lock."""

    exit_code = 6
