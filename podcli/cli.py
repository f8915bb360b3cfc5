"""
podmerge CLI - Project Podfile maintenance.

Pacman-style interface for merging plugin Podfiles.

Usage:
    podmerge -A <fragment> --owner <plugin>     Apply plugin Podfile
    podmerge -R <fragment> --owner <plugin>     Remove plugin Podfile
    podmerge -B                                 Apply app resources Podfile
    podmerge -I                                 Run pod install
    podmerge -X [--release]                     Merge Pods xcconfig
"""

import argparse
import logging
import sys
from pathlib import Path

from podcli import CLIError
from podmerge.config import ConfigError, write_default_settings
from podmerge.podfile import PodfileError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with pacman-style flags."""
    parser = argparse.ArgumentParser(
        prog="podmerge",
        description="podmerge - Shared Podfile maintenance for plugins",
        add_help=False,
    )

    # Operation flags (mutually exclusive)
    ops = parser.add_mutually_exclusive_group()
    ops.add_argument("-A", "--apply", metavar="FRAGMENT", help="Apply plugin Podfile")
    ops.add_argument("-R", "--remove", metavar="FRAGMENT", help="Remove plugin Podfile")
    ops.add_argument("-B", "--base", action="store_true", help="Apply app resources Podfile")
    ops.add_argument("-I", "--install", action="store_true", help="Run pod install")
    ops.add_argument("-X", "--xcconfig", action="store_true", help="Merge Pods xcconfig")
    ops.add_argument("--init-config", action="store_true", help="Write default settings file")
    ops.add_argument("-h", "--help", action="store_true", help="Show help")

    # Project options
    parser.add_argument("--owner", help="Plugin name owning the fragment")
    parser.add_argument("--project", help="Native project (target) name")
    parser.add_argument("--root", type=Path, default=Path("."), help="Native project directory")
    parser.add_argument("--app-resources", type=Path, help="App resources directory")
    parser.add_argument("--release", action="store_true", help="Use release configuration (-X)")

    # Common options
    parser.add_argument("--config", type=Path, help="Settings file (default: podmerge.toml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    return parser


def print_help():
    """Print help message."""
    help_text = """
podmerge - Shared Podfile maintenance for plugins

Usage:
    podmerge -A <fragment> --owner <plugin>     Apply plugin Podfile
    podmerge -R <fragment> --owner <plugin>     Remove plugin Podfile
    podmerge -B                                 Apply app resources Podfile
    podmerge -I                                 Run pod install
    podmerge -X [--release]                     Merge Pods xcconfig
    podmerge --init-config                      Write default settings file

Options:
    --owner NAME                 Plugin name owning the fragment (-A, -R)
    --project NAME               Native project (target) name
    --root DIR                   Native project directory (default: .)
    --app-resources DIR          App resources directory
    --release                    Use release configuration (-X)
    --config FILE                Settings file (default: podmerge.toml)
    -v, --verbose                Verbose output
    -h, --help                   Show this help
"""
    print(help_text.strip())


def main(argv: list[str] | None = None) -> int:
    """Main entry point for podmerge CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        # Route to appropriate command
        if args.apply:
            # -A: Apply
            from podcli.commands.apply import apply_command

            return apply_command(args)

        elif args.remove:
            # -R: Remove
            from podcli.commands.remove import remove_command

            return remove_command(args)

        elif args.base:
            # -B: App resources Podfile
            from podcli.commands.apply import base_command

            return base_command(args)

        elif args.install or args.xcconfig:
            # -I / -X: Pods
            from podcli.commands.install import install_command, xcconfig_command

            return install_command(args) if args.install else xcconfig_command(args)

        elif args.init_config:
            path = write_default_settings(args.config)
            print(f"Wrote {path}")
            return 0

        print_help()
        return 0

    except (CLIError, ConfigError, PodfileError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
