"""
Config check use case: validate installer overrides and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from macrtools.core.config.loader import ConfigError, find_config_file, load_config
from macrtools.core.models.config import InstallerConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: InstallerConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump(mode="json") if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate installer configuration and report issues."""
    result = ConfigCheckResult()
    result.config_path = find_config_file(config_path)

    try:
        config = load_config(result.config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    if not config.compiler_base_url.startswith("https://"):
        result.warnings.append(
            f"compiler_base_url is not https: {config.compiler_base_url}"
        )
    if not config.compiler_base_url.endswith("/"):
        result.warnings.append("compiler_base_url should end with '/'")

    if not config.home.is_dir():
        result.warnings.append(f"Home directory does not exist: {config.home}")

    for name in ("toolchain_dir", "sentinel_path", "mount_point"):
        value = getattr(config, name)
        if not Path(value).is_absolute():
            result.errors.append(f"{name} must be an absolute path: {value}")

    for rel in config.config_files:
        if Path(rel).is_absolute():
            result.warnings.append(f"config_files entry is absolute, home_dir ignored: {rel}")

    result.valid = not result.errors
    return result
