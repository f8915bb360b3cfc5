"""
CocoaPods Tool Execution.

Runs `pod install` in the native project directory.

Key features:
- Tool availability check before running
- Optional sandboxed `sandbox-pod` binary
- Subprocess execution with timeout
- Exit code handling
"""

import logging
import shutil
import subprocess
from pathlib import Path

from podmerge.podfile import PodfileError

logger = logging.getLogger(__name__)


class PodToolError(PodfileError):
    """Raised when the pod tool is missing or fails."""

    pass


def pod_tool_name(use_sandbox: bool = False) -> str:
    return "sandbox-pod" if use_sandbox else "pod"


def execute_pod_install(
    project_root: Path,
    use_sandbox: bool = False,
    timeout: int = 600,
) -> subprocess.CompletedProcess:
    """
    Run `pod install` for a native project.

    CocoaPods prints progress on stderr, so stderr is merged into stdout.

    Args:
        project_root: Directory containing the project Podfile
        use_sandbox: Use `sandbox-pod` instead of `pod`
        timeout: Timeout in seconds (default: 600)

    Returns:
        Completed process

    Raises:
        PodToolError: If CocoaPods is not installed, fails, or times out
    """
    if shutil.which("pod") is None:
        raise PodToolError(
            "CocoaPods is not installed. Run `sudo gem install cocoapods` and try again."
        )

    tool = pod_tool_name(use_sandbox)
    logger.info("Installing pods in %s", project_root)

    try:
        result = subprocess.run(
            [tool, "install"],
            cwd=project_root,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise PodToolError(f"'{tool} install' timed out after {timeout} seconds") from e
    except FileNotFoundError as e:
        raise PodToolError(f"{tool} command not found") from e
    except Exception as e:
        raise PodToolError(f"Failed to execute '{tool} install': {e}") from e

    if result.returncode != 0:
        raise PodToolError(
            f"'{tool} install' command failed with exit code {result.returncode}:\n"
            f"{result.stdout}"
        )

    return result
