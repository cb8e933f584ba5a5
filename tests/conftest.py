"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest
import yaml

from macrtools.core.models.config import InstallerConfig


@pytest.fixture
def installer_config(tmp_path: Path) -> InstallerConfig:
    """An InstallerConfig with every touchpoint inside ``tmp_path``."""
    home = tmp_path / "home"
    home.mkdir()
    return InstallerConfig(
        toolchain_dir=str(tmp_path / "Library" / "Developer" / "CommandLineTools"),
        sentinel_path=str(tmp_path / "tmp" / "clt.installondemand.in-progress"),
        home_dir=str(home),
        compiler_base_url="https://downloads.example.org/gfortran/",
        mount_point=str(tmp_path / "Volumes" / "gfortran"),
        work_dir=str(tmp_path / "scratch"),
        state_dir=str(tmp_path / "state"),
    )


@pytest.fixture
def config_file(tmp_path: Path, installer_config: InstallerConfig) -> Path:
    """``installer_config`` written out as a YAML override file."""
    path = tmp_path / "macrtools.yml"
    path.write_text(yaml.safe_dump(installer_config.model_dump(mode="json")))
    return path


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's MACRTOOLS_* environment out of the tests."""
    for var in ("MACRTOOLS_CONFIG", "MACRTOOLS_LOG_LEVEL", "MACRTOOLS_LOG_FILE", "MACRTOOLS_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
