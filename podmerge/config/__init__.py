"""
Podmerge Configuration - TOML-based settings.

Settings live in the `[podmerge]` table of a TOML file (default
`podmerge.toml`). A missing file means all defaults.

Example usage:
    from podmerge.config import load_settings

    settings = load_settings(Path("podmerge.toml"))
    print(settings.hook_name)  # "post_install"
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from podmerge.config.schema import ConfigField, ValidationError, validate_settings
from podmerge.config.toml_handler import (
    TOMLError,
    generate_toml_from_schema,
    read_toml,
    write_toml_text,
)

DEFAULT_CONFIG_FILE = Path("podmerge.toml")
SECTION = "podmerge"

SCHEMA: dict[str, ConfigField] = {
    "hook_name": ConfigField(str, "post_install", "Podfile hook aggregated across plugins", min=1),
    "hook_parameter": ConfigField(str, "installer", "Block parameter of the hook aggregate", min=1),
    "platform_name": ConfigField(str, "ios", "Platform of `platform :<name>` rows", choices=["ios"]),
    "podfile_name": ConfigField(str, "Podfile", "File name of project and plugin Podfiles", min=1),
    "native_dir_name": ConfigField(str, "iOS", "Platform folder inside plugins and app resources", min=1),
    "use_pod_sandbox": ConfigField(bool, False, "Run `sandbox-pod` instead of `pod`"),
    "pod_install_timeout": ConfigField(int, 600, "Timeout of `pod install` in seconds", min=1),
}


class ConfigError(Exception):
    """Base exception for config API errors."""

    pass


@dataclass(frozen=True)
class Settings:
    hook_name: str
    hook_parameter: str
    platform_name: str
    podfile_name: str
    native_dir_name: str
    use_pod_sandbox: bool
    pod_install_timeout: int


def default_settings() -> Settings:
    return Settings(**validate_settings({}, SCHEMA))


def load_settings(config_file: Path | None = None) -> Settings:
    """
    Load settings from a TOML file.

    Args:
        config_file: Settings file (default: podmerge.toml)

    Returns:
        Settings

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    config_file = config_file or DEFAULT_CONFIG_FILE
    if not config_file.exists():
        return default_settings()

    try:
        data = read_toml(config_file)
        section: Any = data.get(SECTION, {})
        if not isinstance(section, dict):
            raise ValidationError(f"'{SECTION}' must be a table")
        return Settings(**validate_settings(section, SCHEMA))
    except (TOMLError, ValidationError) as e:
        raise ConfigError(f"Invalid settings file {config_file}: {e}") from e


def write_default_settings(config_file: Path | None = None) -> Path:
    """
    Write a commented settings file holding the defaults.

    Raises:
        ConfigError: If the file already exists or cannot be written
    """
    config_file = config_file or DEFAULT_CONFIG_FILE
    if config_file.exists():
        raise ConfigError(f"Settings file already exists: {config_file}")

    try:
        write_toml_text(config_file, generate_toml_from_schema(SECTION, SCHEMA, {}))
    except TOMLError as e:
        raise ConfigError(str(e)) from e
    return config_file


__all__ = [
    "ConfigError",
    "Settings",
    "default_settings",
    "load_settings",
    "write_default_settings",
]
