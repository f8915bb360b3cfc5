"""
Platform Section Management.

A Podfile may only declare its deployment platform once, but every plugin
fragment may carry its own `platform :ios, '<version>'` row. Rows are
commented out inside the managed blocks and a single platform section holds
the winning row.

Selection rules:
- The application resources Podfile always wins
- Otherwise the highest platform version wins
"""

import re
from dataclasses import dataclass

from podmerge.podfile.markers import all_blocks_pattern

PLATFORM_SECTION_BEGIN_PREFIX = "# Begin Platform Section - "
PLATFORM_SECTION_END_MARKER = "# End Platform Section"


@dataclass
class PlatformData:
    """
    A platform row taken from a Podfile fragment.

    Attributes:
        content: The platform row (e.g. "platform :ios, '12.0'")
        version: Platform version, or None if the row has none
        path: Path of the fragment the row came from
    """

    content: str
    version: str | None
    path: str


@dataclass
class PlatformSection:
    """A platform section found in the project Podfile."""

    text: str
    data: PlatformData


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two dotted version strings.

    Args:
        v1: First version
        v2: Second version

    Returns:
        -1 if v1 < v2, 0 if v1 == v2, 1 if v1 > v2
    """
    parts1 = [int(x) for x in v1.split(".")]
    parts2 = [int(x) for x in v2.split(".")]

    # Pad shorter version with zeros
    max_len = max(len(parts1), len(parts2))
    parts1.extend([0] * (max_len - len(parts1)))
    parts2.extend([0] * (max_len - len(parts2)))

    for p1, p2 in zip(parts1, parts2, strict=True):
        if p1 < p2:
            return -1
        elif p1 > p2:
            return 1
    return 0


def _is_newer(candidate: PlatformData, current: PlatformData) -> bool:
    if candidate.version is None:
        return False
    if current.version is None:
        return True
    return compare_versions(candidate.version, current.version) > 0


class PlatformSectionManager:
    """
    Keeps the project Podfile's platform section in line with its fragments.

    Example:
        manager = PlatformSectionManager("ios", "app/App_Resources/iOS/Podfile")
        text, data = manager.replace_platform_row(fragment_text, fragment_path)
        podfile = manager.add_platform_section(data, podfile)
    """

    def __init__(self, platform_name: str = "ios", app_resources_podfile: str | None = None):
        """
        Initialize PlatformSectionManager.

        Args:
            platform_name: Platform symbol used in `platform :<name>` rows
            app_resources_podfile: Path of the application's own Podfile
        """
        self.platform_name = platform_name
        self.app_resources_podfile = app_resources_podfile

        row = rf"platform :{re.escape(platform_name)}\b"
        version = r"""(?:\s*,\s*['"](\d+(?:\.\d+)*)['"])?"""
        self._row_regex = re.compile(rf"^[ \t]*({row}{version}.*?)[ \t]*$", re.MULTILINE)
        self._commented_row_regex = re.compile(
            rf"^[ \t]*#[ \t]*({row}{version}.*?)[ \t]*$", re.MULTILINE
        )
        self._section_regex = re.compile(
            rf"^{re.escape(PLATFORM_SECTION_BEGIN_PREFIX)}(.*?)[ \t]*\n"
            rf"(.*?)\n"
            rf"{re.escape(PLATFORM_SECTION_END_MARKER)}",
            re.MULTILINE,
        )

    def replace_platform_row(
        self, text: str, fragment_path: str
    ) -> tuple[str, PlatformData | None]:
        """
        Comment out the platform rows of a fragment.

        Args:
            text: Fragment text
            fragment_path: Path of the fragment

        Returns:
            Tuple of (text with rows commented out, data of the first row)
        """
        match = self._row_regex.search(text)
        if not match:
            return text, None

        data = PlatformData(content=match.group(1), version=match.group(2), path=fragment_path)
        replaced = self._row_regex.sub(lambda m: m.group(0).replace(m.group(1), f"# {m.group(1)}", 1), text)
        return replaced, data

    def add_platform_section(self, data: PlatformData, text: str) -> str:
        """
        Add or replace the platform section of the project Podfile content.

        Args:
            data: Platform data of the fragment being applied
            text: Project Podfile content

        Returns:
            Updated content
        """
        section = self.get_platform_section(text)
        if section is None:
            if text:
                text += "\n\n"
            return f"{text}{self.build_platform_section(data)}"

        if self._should_replace(section.data, data):
            return text.replace(section.text, self.build_platform_section(data), 1)
        return text

    def remove_platform_section(self, owner: str, text: str, fragment_path: str) -> str:
        """
        Drop the platform section contributed by fragment_path.

        The section is rebuilt from the remaining managed blocks when one of
        them still carries a platform row.

        Args:
            owner: Plugin name
            text: Project Podfile content, with the fragment's block removed
            fragment_path: Path of the fragment being removed

        Returns:
            Updated content
        """
        section = self.get_platform_section(text)
        if section is None or section.data.path != fragment_path:
            return text

        selected = self.select_platform_data(text)
        if selected is None:
            # Take the blank lines in front along with the section
            return re.sub(
                rf"\n*^{re.escape(section.text)}[ \t]*$", "", text, count=1, flags=re.MULTILINE
            )
        return text.replace(section.text, self.build_platform_section(selected), 1)

    def get_platform_section(self, text: str) -> PlatformSection | None:
        match = self._section_regex.search(text)
        if not match:
            return None

        path, row = match.group(1), match.group(2)
        row_match = self._row_regex.search(row)
        version = row_match.group(2) if row_match else None
        return PlatformSection(
            text=match.group(0),
            data=PlatformData(content=row.strip(), version=version, path=path),
        )

    def select_platform_data(self, text: str) -> PlatformData | None:
        """
        Pick the winning platform row among the managed blocks in text.

        Args:
            text: Project Podfile content

        Returns:
            Winning PlatformData, or None if no block has a platform row
        """
        selected = None
        for match in all_blocks_pattern().finditer(text):
            row = self._commented_row_regex.search(match.group(0))
            if not row:
                continue

            current = PlatformData(content=row.group(1), version=row.group(2), path=match.group(1))
            if current.path == self.app_resources_podfile:
                return current
            if selected is None or _is_newer(current, selected):
                selected = current

        return selected

    def build_platform_section(self, data: PlatformData) -> str:
        return (
            f"{PLATFORM_SECTION_BEGIN_PREFIX}{data.path}\n"
            f"{data.content}\n"
            f"{PLATFORM_SECTION_END_MARKER}"
        )

    def _should_replace(self, existing: PlatformData, candidate: PlatformData) -> bool:
        """
        Decide whether candidate takes over the platform section.

        Rules:
        1. A row from the application resources Podfile replaces any row
        2. A row from the application resources Podfile is never replaced by a plugin
        3. Otherwise the higher version wins
        """
        if candidate.path == self.app_resources_podfile:
            return True
        if existing.path == self.app_resources_podfile:
            return False
        return _is_newer(candidate, existing)
