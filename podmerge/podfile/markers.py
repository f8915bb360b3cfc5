"""
Managed Block Markers.

Plugin fragments live in the project Podfile between a begin marker naming
the fragment path and a fixed end marker, so a block can be found and
removed by path alone, whatever its current content.
"""

import re

PODFILE_BEGIN_PREFIX = "# Begin Podfile - "
PODFILE_END_MARKER = "# End Podfile"


def podfile_begin_marker(fragment_path: str) -> str:
    return f"{PODFILE_BEGIN_PREFIX}{fragment_path}"


def podfile_end_marker() -> str:
    return PODFILE_END_MARKER


def wrap(fragment_path: str, text: str) -> str:
    """
    Wrap fragment text in the managed block markers.

    Args:
        fragment_path: Path of the fragment the text came from
        text: Processed fragment text

    Returns:
        Managed block, terminated by a newline
    """
    return (
        f"{podfile_begin_marker(fragment_path)}\n"
        f"{text}\n"
        f"{podfile_end_marker()}\n"
    )


def block_pattern(fragment_path: str) -> re.Pattern:
    """
    Regex matching the managed block of one fragment path.

    The begin marker must fill its whole line, so `plugins/a/Podfile` does
    not match the block of `plugins/a/Podfile.bak`.
    """
    begin = re.escape(podfile_begin_marker(fragment_path))
    end = re.escape(podfile_end_marker())
    return re.compile(rf"^{begin}[ \t]*\r?\n[\s\S]*?^{end}[ \t]*(?:\r?\n|\Z)", re.MULTILINE)


def all_blocks_pattern() -> re.Pattern:
    """Regex matching any managed block; group 1 is the fragment path."""
    begin = re.escape(PODFILE_BEGIN_PREFIX)
    end = re.escape(podfile_end_marker())
    return re.compile(rf"^{begin}(.*?)[ \t]*\r?\n[\s\S]*?^{end}", re.MULTILINE)


def remove_block(fragment_path: str, text: str) -> str:
    """Delete the managed block of fragment_path from text."""
    return block_pattern(fragment_path).sub("", text)
