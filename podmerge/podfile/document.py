"""
Project Podfile Document.

The project Podfile is a fixed target header, the managed content, and a
fixed footer. This module renders those pieces for a project and the two
renderings that mean "nothing left to install".
"""

from podmerge.podfile.hooks import (
    INSTALLER_BLOCK_PARAMETER_NAME,
    POST_INSTALL_HOOK_NAME,
    hook_header,
)


def podfile_header(project_name: str) -> str:
    return f'use_frameworks!\n\ntarget "{project_name}" do\n'


def podfile_footer() -> str:
    return "\nend"


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


def squeeze_blank_lines(text: str) -> str:
    """Drop blank lines and trailing spaces."""
    return "\n".join(line.rstrip() for line in text.splitlines() if line.strip())


class PodfileDocument:
    """
    Templates of one project's Podfile.

    Example:
        doc = PodfileDocument("MyApp")
        text = doc.wrap_target("pod 'Alamofire'")
        doc.strip_target(text)  # "pod 'Alamofire'"
    """

    def __init__(
        self,
        project_name: str,
        hook_name: str = POST_INSTALL_HOOK_NAME,
        hook_parameter: str = INSTALLER_BLOCK_PARAMETER_NAME,
    ):
        self.project_name = project_name
        self.hook_name = hook_name
        self.hook_parameter = hook_parameter

    @property
    def header(self) -> str:
        return podfile_header(self.project_name)

    @property
    def footer(self) -> str:
        return podfile_footer()

    @property
    def empty_without_hook(self) -> str:
        return f"{self.header}end"

    @property
    def empty_with_hook(self) -> str:
        return f"{self.header}\n{hook_header(self.hook_name, self.hook_parameter)}end\nend"

    def is_empty(self, text: str) -> bool:
        """
        Check whether text holds no contribution at all.

        Blank lines and trailing spaces are ignored.
        """
        squeezed = squeeze_blank_lines(text)
        templates = (self.empty_with_hook, self.empty_without_hook)
        return not squeezed or squeezed in [squeeze_blank_lines(t) for t in templates]

    def strip_target(self, text: str) -> str:
        """
        Remove the target header and footer from text.

        The footer is only removed when the text starts with the header, so
        hand-written Podfiles keep their last `end`.

        Args:
            text: Project Podfile content

        Returns:
            Inner content, stripped of surrounding whitespace
        """
        if text.startswith(self.header):
            text = text[len(self.header) :]
            if text.endswith(self.footer):
                text = text[: -len(self.footer)]
        return text.strip()

    def wrap_target(self, inner: str) -> str:
        return f"{self.header}{self.strip_target(inner)}{self.footer}"
