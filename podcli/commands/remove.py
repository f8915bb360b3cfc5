"""
podmerge remove command (-R).

Remove a plugin's contribution from the project Podfile.
"""

from pathlib import Path
from typing import Any

from podcli import CLIError, build_project, build_service
from podcli.commands.apply import describe_result


def remove_command(args: Any) -> int:
    """
    Execute remove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if not args.owner:
        raise CLIError("--owner is required with -R")

    project = build_project(args)
    service = build_service(args)

    result = service.remove_podfile_from_project(args.owner, Path(args.remove), project)
    print(describe_result(result, service.get_project_podfile_path(project.project_root)))
    return 0
