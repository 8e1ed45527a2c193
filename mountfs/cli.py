#!/usr/bin/env python3
"""Command-line interface for MountFS.

This module provides the `mountfs` command for inspecting a namespace:
- Argument parsing and validation
- Mount table loading from YAML and --mount options
- Reading resources through the namespace (cat)
- Printing the registered mount points (mounts)

Example:
    >>> from mountfs.cli import parse_arguments
    >>> args = parse_arguments(['--mount', '/assets=./static', 'cat', '/assets/a.txt'])
"""

import argparse
import os
import shutil
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from mountfs.core.constants import MOUNTFS_VERSION, ConfigKey, ErrorCode
from mountfs.core.errors import MountFSError
from mountfs.infrastructure.config_manager import ConfigManager, ConfigSource
from mountfs.infrastructure.logger import configure_logging, get_logger
from mountfs.namespace.loader import load_namespace
from mountfs.namespace.namespace import Namespace

VERSION = MOUNTFS_VERSION
DESCRIPTION = "MountFS - Composable virtual filesystem namespace"

logger = get_logger("mountfs.cli")


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If the arguments are inconsistent
    """
    parser = argparse.ArgumentParser(
        prog="mountfs",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read a file through a single mount
  mountfs --mount /assets=./static cat /assets/img/logo.png

  # Use a mount table
  mountfs --config mounts.yaml cat /docs/index.md

  # Overlay a directory on top of a mount table
  mountfs --config mounts.yaml --mount /docs=./drafts cat /docs/index.md

  # Show registered mount points
  mountfs --config mounts.yaml mounts
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Mount table file (YAML format)",
    )

    parser.add_argument(
        "-m",
        "--mount",
        metavar="TARGET=DIR",
        action="append",
        dest="mounts",
        default=[],
        help="Mount directory DIR at virtual path TARGET (repeatable, later wins)",
    )

    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write logs to FILE",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    cat_parser = commands.add_parser("cat", help="Write resources to standard output")
    cat_parser.add_argument("paths", metavar="PATH", nargs="+", help="Virtual paths to read")

    commands.add_parser("mounts", help="List registered mount points")

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if not args.config and not args.mounts:
        raise CLIError(
            "Either --config or --mount must be specified\n" "Use --help for usage information"
        )

    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Configuration path is not a file: {args.config}")

    for spec in args.mounts:
        parse_mount_spec(spec)


def parse_mount_spec(spec: str) -> Tuple[str, str]:
    """
    Split a TARGET=DIR mount option.

    Args:
        spec: Option value

    Returns:
        (target, directory) tuple

    Raises:
        CLIError: If spec is malformed
    """
    target, sep, directory = spec.partition("=")
    if not sep or not target or not directory:
        raise CLIError(f"Invalid mount option (expected TARGET=DIR): {spec}")
    return target, directory


def build_config(args: argparse.Namespace) -> ConfigManager:
    """
    Build the configuration from the mount table file and arguments.

    Mounts given with --mount are registered after those from the file.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration manager
    """
    config = ConfigManager()

    if args.config:
        config.load_file(args.config)

    if args.mounts:
        mounts: List[Dict[str, str]] = list(config.get(f"{ConfigKey.ROOT}.{ConfigKey.MOUNTS}", []))
        for spec in args.mounts:
            target, directory = parse_mount_spec(spec)
            mounts.append(
                {
                    ConfigKey.MOUNT_PATH: target,
                    ConfigKey.MOUNT_SOURCE: os.path.abspath(directory),
                }
            )
        config.set(f"{ConfigKey.ROOT}.{ConfigKey.MOUNTS}", mounts, ConfigSource.CLI_ARGS)

    if args.debug:
        config.set(f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_LEVEL}", "DEBUG",
                   ConfigSource.CLI_ARGS)

    if args.log_file:
        config.set(f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_FILE}", args.log_file,
                   ConfigSource.CLI_ARGS)

    return config


def setup_logging(config: ConfigManager) -> None:
    """
    Apply the configured log level and log file.

    Args:
        config: Configuration manager
    """
    logging_config = config.section().get(ConfigKey.LOGGING, {})
    configure_logging(
        level=logging_config.get(ConfigKey.LOG_LEVEL, "WARNING"),
        log_file=logging_config.get(ConfigKey.LOG_FILE),
    )


def cmd_cat(namespace: Namespace, paths: List[str]) -> int:
    """
    Copy each resource to standard output.

    Args:
        namespace: Namespace to read from
        paths: Virtual paths, in output order

    Returns:
        Exit code
    """
    out = sys.stdout.buffer
    for path in paths:
        with namespace.open(path) as resource:
            shutil.copyfileobj(resource, out)
    out.flush()
    return ErrorCode.SUCCESS


def cmd_mounts(namespace: Namespace) -> int:
    """
    Print one line per mount point: virtual path, then provider.

    Args:
        namespace: Namespace to describe

    Returns:
        Exit code
    """
    for path, mount in namespace.mounts():
        print(f"{path}\t{mount!r}")
    return ErrorCode.SUCCESS


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    try:
        parsed = parse_arguments(args)

        config = build_config(parsed)
        setup_logging(config)

        namespace = load_namespace(config)
        logger.debug("Namespace ready", mounts=len(namespace))

        if parsed.command == "cat":
            return cmd_cat(namespace, parsed.paths)
        return cmd_mounts(namespace)

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except MountFSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return int(e.error_code)

    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
