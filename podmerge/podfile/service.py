"""
CocoaPods Service.

File-backed entry points for maintaining a native project's Podfile.

Key features:
- Apply/remove of plugin Podfiles with fresh reads on every call
- Application resources Podfile support
- Whole-file writes, deletion when the Podfile becomes empty
- `pod install` and Pods xcconfig merging
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from podmerge.config import Settings, default_settings
from podmerge.podfile import PodfileError
from podmerge.podfile.document import podfile_footer, podfile_header
from podmerge.podfile.merger import MergeAction, MergeResult, PodfileMerger
from podmerge.podfile.platform import PlatformSectionManager
from podmerge.podfile.pod_tool import execute_pod_install
from podmerge.podfile.store import FileStore, StoreError
from podmerge.podfile.xcconfig import (
    get_plugins_xcconfig_path,
    get_pods_xcconfig_path,
    merge_files,
)

logger = logging.getLogger(__name__)

BASE_PODFILE_OWNER = "PodfileBase"


class PodfileMergeError(PodfileError):
    """Raised when a merge result cannot be persisted."""

    pass


@dataclass
class ProjectData:
    """
    The native project a Podfile is maintained for.

    Attributes:
        project_name: Target name used in the Podfile header
        project_root: Native platform project directory
        app_resources_dir: Application resources directory, if any
    """

    project_name: str
    project_root: Path
    app_resources_dir: Path | None = None


@dataclass
class PluginData:
    """
    An installed plugin.

    Attributes:
        name: Plugin name (owner of its Podfile block)
        platforms_dir: Directory holding the plugin's per-platform folders
    """

    name: str
    platforms_dir: Path


def header_for(project_name: str) -> str:
    return podfile_header(project_name)


def footer_for() -> str:
    return podfile_footer()


class CocoaPodsService:
    """
    Maintains project Podfiles on disk.

    Example:
        service = CocoaPodsService()
        project = ProjectData("MyApp", Path("platforms/ios"))
        service.apply_podfile_to_project("a", Path("plugins/a/Podfile"), project)
    """

    def __init__(
        self,
        store: FileStore | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize CocoaPodsService.

        Args:
            store: File store (default: local filesystem)
            settings: Settings object (default: built-in defaults)
        """
        self.store = store or FileStore()
        self.settings = settings or default_settings()

    def get_project_podfile_path(self, project_root: Path) -> Path:
        return Path(project_root) / self.settings.podfile_name

    def get_app_resources_podfile_path(self, project: ProjectData) -> Path | None:
        if project.app_resources_dir is None:
            return None
        return Path(project.app_resources_dir) / self.settings.native_dir_name / self.settings.podfile_name

    def get_plugin_podfile_path(self, plugin: PluginData) -> Path:
        return Path(plugin.platforms_dir) / self.settings.native_dir_name / self.settings.podfile_name

    def create_merger(self, project: ProjectData) -> PodfileMerger:
        app_resources_podfile = self.get_app_resources_podfile_path(project)
        platform_manager = PlatformSectionManager(
            self.settings.platform_name,
            str(app_resources_podfile) if app_resources_podfile else None,
        )
        return PodfileMerger(
            project.project_name,
            platform_manager,
            hook_name=self.settings.hook_name,
            hook_parameter=self.settings.hook_parameter,
        )

    def apply_podfile_to_project(
        self, owner: str, fragment_path: Path, project: ProjectData
    ) -> MergeResult:
        """
        Merge a plugin Podfile into the project Podfile.

        A missing plugin Podfile removes the plugin's previous contribution.

        Args:
            owner: Plugin name
            fragment_path: Path of the plugin Podfile
            project: Target project

        Returns:
            MergeResult describing what was done

        Raises:
            PodfileMergeError: If the project Podfile cannot be updated
        """
        podfile_path = self.get_project_podfile_path(project.project_root)
        try:
            fragment_text = self.store.read_text_if_exists(fragment_path)
            project_text = self.store.read_text_if_exists(podfile_path)
        except StoreError as e:
            raise PodfileMergeError(
                f"Failed to read Podfile of {owner} ({fragment_path}): {e}"
            ) from e

        merger = self.create_merger(project)
        result = merger.apply(str(fragment_path), owner, fragment_text, project_text)
        self._persist(result, podfile_path, owner, fragment_path)
        return result

    def remove_podfile_from_project(
        self, owner: str, fragment_path: Path, project: ProjectData
    ) -> MergeResult:
        """
        Remove a plugin's contribution from the project Podfile.

        Nothing happens when the project has no Podfile.

        Args:
            owner: Plugin name
            fragment_path: Path of the plugin Podfile
            project: Target project

        Returns:
            MergeResult describing what was done

        Raises:
            PodfileMergeError: If the project Podfile cannot be updated
        """
        podfile_path = self.get_project_podfile_path(project.project_root)
        try:
            project_text = self.store.read_text_if_exists(podfile_path)
        except StoreError as e:
            raise PodfileMergeError(
                f"Failed to read project Podfile while removing {owner} ({fragment_path}): {e}"
            ) from e

        merger = self.create_merger(project)
        result = merger.remove(str(fragment_path), owner, project_text)
        self._persist(result, podfile_path, owner, fragment_path)
        return result

    def apply_podfile_from_app_resources(self, project: ProjectData) -> MergeResult | None:
        """
        Merge the application's own Podfile into the project Podfile.

        Returns:
            MergeResult, or None if neither Podfile exists
        """
        main_podfile_path = self.get_app_resources_podfile_path(project)
        podfile_path = self.get_project_podfile_path(project.project_root)
        if main_podfile_path is None:
            return None

        if self.store.exists(podfile_path) or self.store.exists(main_podfile_path):
            return self.apply_podfile_to_project(BASE_PODFILE_OWNER, main_podfile_path, project)
        return None

    def execute_pod_install(self, project: ProjectData) -> subprocess.CompletedProcess:
        return execute_pod_install(
            Path(project.project_root),
            use_sandbox=self.settings.use_pod_sandbox,
            timeout=self.settings.pod_install_timeout,
        )

    def merge_pod_xcconfig_file(self, project: ProjectData, release: bool = False) -> bool:
        """
        Fold the Pods xcconfig of a build configuration into the plugins xcconfig.

        Args:
            project: Target project
            release: Use the release configuration instead of debug

        Returns:
            True if a Pods xcconfig was found and merged
        """
        project_root = Path(project.project_root)
        pods_xcconfig = get_pods_xcconfig_path(project_root, project.project_name, release)
        if not pods_xcconfig.exists():
            logger.debug("No Pods xcconfig at %s", pods_xcconfig)
            return False

        merge_files(pods_xcconfig, get_plugins_xcconfig_path(project_root, release))
        return True

    def _persist(
        self, result: MergeResult, podfile_path: Path, owner: str, fragment_path: Path
    ) -> None:
        try:
            if result.action is MergeAction.WRITE:
                self.store.write_text(podfile_path, result.content)
                logger.info("Updated %s with Podfile of %s", podfile_path, owner)
            elif result.action is MergeAction.DELETE:
                self.store.delete(podfile_path)
                logger.info("Deleted %s, no Podfile contributions left", podfile_path)
            else:
                logger.debug("%s unchanged for %s", podfile_path, owner)
        except StoreError as e:
            raise PodfileMergeError(
                f"Failed to update project Podfile for {owner} ({fragment_path}): {e}"
            ) from e
