"""
Xcconfig File Merging.

Build settings files (`KEY = value` per line) produced by CocoaPods are
folded into the plugins xcconfig of the native project.

Key features:
- Parsing of settings, `//` comments and `#include` directives
- Merging where a key present in both files gets the union of its values
- Locating the Pods and plugins xcconfig files for a build configuration
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from podmerge.podfile import PodfileError

logger = logging.getLogger(__name__)

_SETTING_REGEX = re.compile(r"^\s*([A-Za-z0-9_]+(?:\[[^\]]*\])*)\s*=\s*(.*?)\s*;?\s*$")
_COMMENT_REGEX = re.compile(r"(?:^|\s)//.*$")
_INCLUDE_REGEX = re.compile(r"^\s*#include\??\s+\"[^\"]*\"\s*$")


class XcconfigError(PodfileError):
    """Raised when an xcconfig file cannot be read or written."""

    pass


@dataclass
class Xcconfig:
    """
    Parsed xcconfig content.

    Attributes:
        includes: `#include` lines, in file order
        settings: Key -> value, in file order
    """

    includes: list[str] = field(default_factory=list)
    settings: dict[str, str] = field(default_factory=dict)


def parse_xcconfig(text: str) -> Xcconfig:
    config = Xcconfig()
    for line in text.splitlines():
        # Comments start the line or follow whitespace
        line = _COMMENT_REGEX.sub("", line).rstrip()
        if not line.strip():
            continue

        if _INCLUDE_REGEX.match(line):
            config.includes.append(line.strip())
            continue

        match = _SETTING_REGEX.match(line)
        if match:
            config.settings[match.group(1)] = match.group(2)

    return config


def merge_xcconfig(destination: Xcconfig, source: Xcconfig) -> Xcconfig:
    """
    Merge source into destination.

    Values of a key present in both are joined, keeping each token once and
    destination tokens first.

    Args:
        destination: Config receiving the settings
        source: Config providing the settings

    Returns:
        New merged Xcconfig
    """
    merged = Xcconfig(
        includes=list(destination.includes),
        settings=dict(destination.settings),
    )

    for include in source.includes:
        if include not in merged.includes:
            merged.includes.append(include)

    for key, value in source.settings.items():
        if key not in merged.settings:
            merged.settings[key] = value
            continue

        tokens = merged.settings[key].split()
        tokens.extend(token for token in value.split() if token not in tokens)
        merged.settings[key] = " ".join(tokens)

    return merged


def render_xcconfig(config: Xcconfig) -> str:
    lines = list(config.includes)
    if lines and config.settings:
        lines.append("")
    lines.extend(f"{key} = {value}" for key, value in config.settings.items())
    return "\n".join(lines) + "\n"


def merge_files(source_path: Path, destination_path: Path) -> None:
    """
    Merge the xcconfig at source_path into destination_path.

    A missing destination is created.

    Args:
        source_path: Xcconfig providing settings
        destination_path: Xcconfig receiving settings

    Raises:
        XcconfigError: If a file cannot be read or written
    """
    try:
        source = parse_xcconfig(source_path.read_text(encoding="utf-8"))
        destination = Xcconfig()
        if destination_path.exists():
            destination = parse_xcconfig(destination_path.read_text(encoding="utf-8"))
    except Exception as e:
        raise XcconfigError(f"Failed to read xcconfig file: {e}") from e

    merged = merge_xcconfig(destination, source)

    try:
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        destination_path.write_text(render_xcconfig(merged), encoding="utf-8")
    except Exception as e:
        raise XcconfigError(f"Failed to write xcconfig file {destination_path}: {e}") from e

    logger.info("Merged %s into %s", source_path, destination_path)


def get_plugins_xcconfig_path(project_root: Path, release: bool = False) -> Path:
    name = "plugins-release.xcconfig" if release else "plugins-debug.xcconfig"
    return project_root / name


def get_pods_xcconfig_path(project_root: Path, project_name: str, release: bool = False) -> Path:
    configuration = "release" if release else "debug"
    return (
        project_root
        / "Pods"
        / "Target Support Files"
        / f"Pods-{project_name}"
        / f"Pods-{project_name}.{configuration}.xcconfig"
    )
