"""
podmerge pod commands (-I, -X).

Run `pod install` and merge the resulting xcconfig into the plugins xcconfig.
"""

from typing import Any

from podcli import build_project, build_service


def install_command(args: Any) -> int:
    """
    Execute pod install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    project = build_project(args)
    service = build_service(args)

    result = service.execute_pod_install(project)
    if args.verbose:
        print(result.stdout)
    print("Pods installed")
    return 0


def xcconfig_command(args: Any) -> int:
    project = build_project(args)
    service = build_service(args)

    if service.merge_pod_xcconfig_file(project, release=args.release):
        print("Merged Pods xcconfig")
    else:
        print("No Pods xcconfig found")
    return 0
