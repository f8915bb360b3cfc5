"""
Podfile Merge Engine.

This module merges plugin Podfile fragments into the project Podfile text.

Key features:
- Idempotent apply: an identical block already present is a no-op
- Replace-in-place: stale blocks, hook calls and platform rows are purged first
- Hook aggregation into one `post_install` block
- Collapse to delete when only the empty template is left

All operations are pure functions of their text inputs; reading and writing
the file is left to the caller (see podmerge.podfile.service).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from podmerge.podfile.document import PodfileDocument, normalize_newlines
from podmerge.podfile.hooks import (
    INSTALLER_BLOCK_PARAMETER_NAME,
    POST_INSTALL_HOOK_NAME,
    HookFunction,
    add_hook_calls,
    extract_hooks,
    remove_empty_aggregate,
    remove_hook_calls,
)
from podmerge.podfile.markers import remove_block, wrap
from podmerge.podfile.platform import PlatformData, PlatformSectionManager

logger = logging.getLogger(__name__)


class MergeAction(Enum):
    """What the caller should do with the project Podfile."""

    WRITE = "write"
    DELETE = "delete"
    UNCHANGED = "unchanged"


@dataclass
class MergeResult:
    """
    Outcome of an apply or remove.

    Attributes:
        action: Action to take on the project Podfile
        content: New content when action is WRITE, otherwise None
    """

    action: MergeAction
    content: str | None = None


@dataclass
class PodfileBlock:
    """
    A fragment prepared for insertion into the project Podfile.

    Attributes:
        content: Managed block text, markers included
        functions: Hook functions extracted from the fragment
        platform_data: Platform row of the fragment, if any
    """

    content: str
    functions: list[HookFunction] = field(default_factory=list)
    platform_data: PlatformData | None = None


class PodfileMerger:
    """
    Applies and removes plugin fragments on the project Podfile text.

    Example:
        merger = PodfileMerger("MyApp", PlatformSectionManager())
        result = merger.apply("plugins/a/Podfile", "a", fragment, podfile)
        if result.action is MergeAction.WRITE:
            path.write_text(result.content)
    """

    def __init__(
        self,
        project_name: str,
        platform_manager: PlatformSectionManager,
        hook_name: str = POST_INSTALL_HOOK_NAME,
        hook_parameter: str = INSTALLER_BLOCK_PARAMETER_NAME,
    ):
        """
        Initialize PodfileMerger.

        Args:
            project_name: Native project (target) name
            platform_manager: Platform section delegate
            hook_name: Hook whose blocks are aggregated
            hook_parameter: Block parameter of the hook aggregate
        """
        self.document = PodfileDocument(project_name, hook_name, hook_parameter)
        self.platform_manager = platform_manager
        self.hook_name = hook_name
        self.hook_parameter = hook_parameter

    def build_block(self, fragment_path: str, owner: str, fragment_text: str) -> PodfileBlock:
        """
        Turn a fragment into a managed block.

        Args:
            fragment_path: Path of the fragment
            owner: Plugin name
            fragment_text: Fragment content

        Returns:
            PodfileBlock
        """
        extraction = extract_hooks(self.hook_name, fragment_text, owner)
        text, platform_data = self.platform_manager.replace_platform_row(
            extraction.text, fragment_path
        )
        return PodfileBlock(
            content=wrap(fragment_path, text),
            functions=extraction.functions,
            platform_data=platform_data,
        )

    def apply(
        self,
        fragment_path: str,
        owner: str,
        fragment_text: str | None,
        project_text: str | None,
    ) -> MergeResult:
        """
        Merge a fragment into the project Podfile.

        Args:
            fragment_path: Path of the fragment
            owner: Plugin name
            fragment_text: Fragment content, or None if the fragment is gone
            project_text: Current project Podfile, or None if there is none

        Returns:
            MergeResult
        """
        if fragment_text is None:
            return self.remove(fragment_path, owner, project_text)

        fragment_text = normalize_newlines(fragment_text)
        if project_text is not None:
            project_text = normalize_newlines(project_text)

        block = self.build_block(fragment_path, owner, fragment_text)
        if project_text is not None and block.content in project_text.strip():
            logger.debug("Podfile of %s (%s) is up to date", owner, fragment_path)
            return MergeResult(MergeAction.UNCHANGED)

        # Purge the stale version; a collapsed or missing Podfile starts empty
        removed = self.remove(fragment_path, owner, project_text)
        inner = self.document.strip_target(removed.content or "")

        if block.functions:
            inner = add_hook_calls(self.hook_name, self.hook_parameter, block.functions, inner)

        if block.platform_data:
            inner = self.platform_manager.add_platform_section(block.platform_data, inner)

        content = self.document.wrap_target(f"{block.content}\n{inner}")
        return MergeResult(MergeAction.WRITE, content)

    def remove(self, fragment_path: str, owner: str, project_text: str | None) -> MergeResult:
        """
        Remove a fragment's contribution from the project Podfile.

        Args:
            fragment_path: Path of the fragment
            owner: Plugin name
            project_text: Current project Podfile, or None if there is none

        Returns:
            MergeResult; DELETE when nothing but the empty template is left
        """
        if project_text is None:
            return MergeResult(MergeAction.UNCHANGED)

        # CRLF files (e.g. a git autocrlf checkout) are rewritten with \n
        text = remove_block(fragment_path, normalize_newlines(project_text))
        without_calls = remove_hook_calls(self.hook_name, owner, text)
        if without_calls != text:
            # Drop the aggregate only when this owner emptied it
            without_calls = remove_empty_aggregate(self.hook_name, self.hook_parameter, without_calls)
        text = without_calls
        text = self.platform_manager.remove_platform_section(owner, text, fragment_path)

        if self.document.is_empty(text):
            return MergeResult(MergeAction.DELETE)
        return MergeResult(MergeAction.WRITE, text)
