"""
Domain models: Pydantic types for the installer.

All models are re-exported here for convenient access:

    from macrtools.core.models import InstallerConfig, InstallTarget, RunRecord
"""

from macrtools.core.models.config import InstallerConfig, Timeouts
from macrtools.core.models.run import InstallStage, RunRecord
from macrtools.core.models.target import CompilerTarget, InstallMethod, InstallTarget

__all__ = [
    # target.py
    "CompilerTarget",
    "InstallMethod",
    "InstallTarget",
    # run.py
    "InstallStage",
    "RunRecord",
    # config.py
    "InstallerConfig",
    "Timeouts",
]
