"""
Podmerge - Shared CocoaPods Podfile maintenance for plugin-based projects.

Plugins ship Podfile fragments; podmerge merges them into one project
Podfile, aggregates their `post_install` hooks, and removes them cleanly
again on uninstall.
"""

__version__ = "0.1.0"

from podmerge.podfile.merger import MergeAction, MergeResult, PodfileMerger
from podmerge.podfile.platform import PlatformSectionManager
from podmerge.podfile.service import (
    CocoaPodsService,
    PluginData,
    ProjectData,
    footer_for,
    header_for,
)

__all__ = [
    "__version__",
    "CocoaPodsService",
    "MergeAction",
    "MergeResult",
    "PlatformSectionManager",
    "PluginData",
    "PodfileMerger",
    "ProjectData",
    "footer_for",
    "header_for",
]
