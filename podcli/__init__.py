"""
podcli - Command-line interface for podmerge.

Shared helpers used by the command modules.
"""

import argparse

from podmerge.config import load_settings
from podmerge.podfile.service import CocoaPodsService, ProjectData

__version__ = "0.1.0"


class CLIError(Exception):
    """Base exception for CLI errors."""

    pass


def build_project(args: argparse.Namespace) -> ProjectData:
    """
    Build project data from arguments.

    Raises:
        CLIError: If the project name is missing
    """
    if not args.project:
        raise CLIError("--project is required")
    return ProjectData(
        project_name=args.project,
        project_root=args.root,
        app_resources_dir=args.app_resources,
    )


def build_service(args: argparse.Namespace) -> CocoaPodsService:
    return CocoaPodsService(settings=load_settings(args.config))


__all__ = ["__version__", "CLIError", "build_project", "build_service"]
