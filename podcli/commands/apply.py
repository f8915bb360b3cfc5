"""
podmerge apply commands (-A, -B).

Merge a plugin Podfile, or the app resources Podfile, into the project Podfile.
"""

from pathlib import Path
from typing import Any

from podcli import CLIError, build_project, build_service
from podmerge.podfile.merger import MergeAction, MergeResult


def describe_result(result: MergeResult | None, podfile_path: Path) -> str:
    if result is None or result.action is MergeAction.UNCHANGED:
        return f"{podfile_path} is up to date"
    if result.action is MergeAction.DELETE:
        return f"Deleted {podfile_path}"
    return f"Updated {podfile_path}"


def apply_command(args: Any) -> int:
    """
    Execute apply command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if not args.owner:
        raise CLIError("--owner is required with -A")

    project = build_project(args)
    service = build_service(args)

    result = service.apply_podfile_to_project(args.owner, Path(args.apply), project)
    print(describe_result(result, service.get_project_podfile_path(project.project_root)))
    return 0


def base_command(args: Any) -> int:
    """Execute app resources Podfile command."""
    if not args.app_resources:
        raise CLIError("--app-resources is required with -B")

    project = build_project(args)
    service = build_service(args)

    result = service.apply_podfile_from_app_resources(project)
    print(describe_result(result, service.get_project_podfile_path(project.project_root)))
    return 0
