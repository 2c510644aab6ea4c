"""Command line entry point: render a settings file as a canonical snapshot.

Each top-level key of the source file becomes one configuration root, in
file order.  Nested keys are sorted, empty values are dropped, and the
result is written to stdout, to ``--output``, or (with ``--save``) to the
snapshot path from the config file.
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from . import __version__
from .backup import SnapshotBackup, export
from .config_loader import load_hierarchical_config, load_yaml_file
from .config_schema import SnapshotConfig, UnifiedConfig, build_config
from .discovery import StaticRoot, mapping_key
from .errors import SnapshotError
from .logger import setup_logging

logger = logging.getLogger(__name__)


def _load_roots(source: Path) -> list[StaticRoot]:
    data = load_yaml_file(source)
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ValueError(
            f"{source}: top level must be a mapping, got {type(data).__name__}"
        )
    return [
        StaticRoot(mapping_key(name), value) for name, value in data.items()
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="config-snapshot",
        description="Render a YAML or JSON settings file as a canonical "
        "configuration snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the snapshot to stdout
  config-snapshot settings.yml

  # Write the snapshot to a file
  config-snapshot settings.yml -o snapshot.yaml

  # Write to the snapshot path configured in .config_snapshot/config.yml
  config-snapshot settings.yml --save
        """,
    )
    parser.add_argument("source", type=Path, help="Settings file to render")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the snapshot to this file instead of stdout",
    )
    target.add_argument(
        "--save",
        action="store_true",
        help="Write the snapshot to the configured output_dir/filename",
    )
    parser.add_argument(
        "--width",
        type=int,
        help="Preferred maximum line width (overrides the config file)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--debug-format",
        choices=["text", "json"],
        default="text",
        help="Log record format (default: text)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"config-snapshot version {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config: UnifiedConfig = build_config(load_hierarchical_config())
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(
        debug=args.debug,
        log_file=config.logging.file,
        debug_format=args.debug_format,
        level=config.logging.level,
    )
    width = config.snapshot.width
    if args.width is not None:
        try:
            width = SnapshotConfig(width=args.width).width
        except ValueError as e:
            print(f"Error: invalid --width: {e}", file=sys.stderr)
            return 1

    try:
        roots = _load_roots(args.source)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: cannot read {args.source}: {e}", file=sys.stderr)
        return 1
    logger.debug("Loaded %d root(s) from %s", len(roots), args.source)

    if args.save:
        target = config.snapshot.output_path
        backup = SnapshotBackup(
            roots,
            target.parent,
            filename=target.name,
            width=width,
        )
        path = backup.on_change(args.source)
        if path is None:
            print("Error: snapshot was not saved", file=sys.stderr)
            return 1
        print(f"Snapshot saved: {path}", file=sys.stderr)
        return 0

    try:
        data = export(roots, width=width)
    except SnapshotError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_bytes(data)
        except OSError as e:
            print(
                f"Error: cannot write {args.output}: {e}", file=sys.stderr
            )
            return 1
        logger.info("Snapshot written to %s", args.output)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    return 0


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
