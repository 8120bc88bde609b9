"""setupconf CLI: check and read a project's Cabal setup-config."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def _build_parser() -> argparse.ArgumentParser:
    try:
        setupconf_version = get_version("setupconf")
    except PackageNotFoundError:
        setupconf_version = "dev"

    parser = argparse.ArgumentParser(
        prog="setupconf",
        description="setupconf: staleness checks and fact extraction for Cabal setup-config files"
    )
    parser.add_argument("--version", action="version", version=f"setupconf {setupconf_version}")

    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "project",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Project root directory (defaults to the current directory)"
    )
    parent_parser.add_argument(
        "--package-db",
        type=Path,
        default=None,
        help="Package database directory holding package.cache"
    )
    parent_parser.add_argument(
        "--cabal-file",
        type=Path,
        default=None,
        help="Path to the project's .cabal file (discovered in the root by default)"
    )
    parent_parser.add_argument(
        "--dist-dir",
        default=None,
        help="Build output directory relative to the root (defaults to 'dist')"
    )
    parent_parser.add_argument(
        "--cradle",
        type=Path,
        default=None,
        help="Path to a setupconf.json cradle file (overrides discovery)"
    )
    parent_parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable canonical JSON."
    )
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug details to stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser(
        "check",
        help="Check whether setup-config is valid (exit 1 if stale)",
        parents=[parent_parser]
    )
    subparsers.add_parser(
        "world",
        help="Print the filesystem snapshot that decides validity",
        parents=[parent_parser]
    )
    deps_parser = subparsers.add_parser(
        "deps",
        help="List external package dependencies (regenerates setup-config if stale)",
        parents=[parent_parser]
    )
    deps_parser.add_argument(
        "--own-package",
        default=None,
        help="Own package identifier, e.g. demo-0.1.0.0 (defaults to the setup-config header)"
    )
    subparsers.add_parser(
        "flags",
        help="Print the configured flag assignment (regenerates setup-config if stale)",
        parents=[parent_parser]
    )
    return parser


def _cradle_from_args(args):
    from .cradle import discover_cradle, load_cradle

    if args.cradle is not None:
        cradle = load_cradle(args.cradle.resolve())
        overrides = {}
        if args.cabal_file is not None:
            overrides["descriptor_path"] = args.cabal_file.resolve()
        if args.dist_dir is not None:
            overrides["dist_dir"] = args.dist_dir
        return cradle.model_copy(update=overrides) if overrides else cradle
    return discover_cradle(
        args.project.resolve(),
        package_db=args.package_db.resolve() if args.package_db else None,
        descriptor_path=args.cabal_file.resolve() if args.cabal_file else None,
        dist_dir=args.dist_dir,
    )


def _run(args) -> int:
    from . import api
    from ._internal.canonical_json import canonical_dumps

    cradle = _cradle_from_args(args)

    if args.command == "check":
        valid = api.is_artifact_valid(cradle)
        if args.json:
            print(canonical_dumps({"setup_config": str(cradle.setup_config_file), "valid": valid}))
        elif not args.quiet:
            print(f"[{'OK' if valid else 'STALE'}] {cradle.setup_config_file}")
        return 0 if valid else 1

    if args.command == "world":
        world = api.capture_world(cradle)
        if args.json:
            print(canonical_dumps(world))
        elif not args.quiet:
            for name, value in world.model_dump(mode="json").items():
                print(f"  {name}: {value if value is not None else '-'}")
        return 0

    if args.command == "deps":
        deps = api.get_dependencies(cradle, own_identity=args.own_package)
        if args.json:
            print(canonical_dumps(deps))
        elif not args.quiet:
            for dep in deps:
                print(f"{dep.package}\t{dep.installed_id}")
        return 0

    if args.command == "flags":
        assignment = api.get_flags(cradle)
        if args.json:
            print(canonical_dumps(assignment.flags))
        elif not args.quiet:
            for name, enabled in assignment.flags:
                print(f"{'+' if enabled else '-'}{name}")
        return 0

    raise ValueError(f"unknown command: {args.command}")


def main():
    """Main CLI entry point for setupconf commands."""
    parser = _build_parser()
    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    from ._internal.logging_utils import configure_logging
    from .kernel.errors import SetupConfigError

    if args.verbose:
        configure_logging(logging.DEBUG)
    else:
        configure_logging(logging.WARNING if args.quiet else logging.INFO)

    try:
        exit_code = _run(args)
    except (SetupConfigError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
