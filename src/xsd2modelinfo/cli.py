"""xsd2modelinfo CLI: import, verify and normalize commands."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path

from .kernel.errors import ModelImportError


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Attach a stderr handler unless the root logger is already configured."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        root_logger.addHandler(handler)
    if verbose:
        root_logger.setLevel(logging.DEBUG)
    elif quiet:
        root_logger.setLevel(logging.ERROR)
    else:
        root_logger.setLevel(logging.WARNING)


def main():
    """Main CLI entry point for xsd2modelinfo commands."""
    try:
        tool_version = get_version("xsd2modelinfo")
    except PackageNotFoundError:
        tool_version = "dev"

    parser = argparse.ArgumentParser(
        prog="xsd2modelinfo",
        description="xsd2modelinfo: Resolve XSD type graphs into model info catalogs"
    )
    parser.add_argument("--version", action="version", version=f"xsd2modelinfo {tool_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # import command
    import_parser = subparsers.add_parser(
        "import",
        help="Resolve a schema graph into a catalog",
        parents=[parent_parser]
    )
    import_parser.add_argument(
        "--schema",
        type=Path,
        required=True,
        help="Path to schema graph JSON"
    )
    import_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to import configuration (.properties or .json)"
    )
    import_parser.add_argument(
        "--model",
        default=None,
        help="Model name (overrides the 'model' configuration key)"
    )
    import_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output path for catalog JSON (defaults to stdout)"
    )

    # verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Preflight a schema graph and configuration without writing output",
        parents=[parent_parser]
    )
    verify_parser.add_argument(
        "--schema",
        type=Path,
        required=True,
        help="Path to schema graph JSON"
    )
    verify_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to import configuration (.properties or .json)"
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Print a configuration file in normalized properties form",
        parents=[parent_parser]
    )
    config_parser.add_argument(
        "config_path",
        type=Path,
        help="Path to import configuration (.properties or .json)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose, args.quiet)

    if args.command == "import":
        try:
            from .api import import_model
            from ._internal.io.artifacts import dump_catalog, write_catalog

            catalog = import_model(args.schema, args.config, model=args.model)

            if args.out:
                out_path = write_catalog(catalog, Path(args.out))
                if not args.quiet:
                    print("[OK] Import complete")
                    print(f"  Entries: {len(catalog.entries)}")
                    print(f"  Warnings: {len(catalog.warnings)}")
                    print(f"  Catalog: {out_path}")
            else:
                sys.stdout.write(dump_catalog(catalog))
            sys.exit(0)
        except ModelImportError as e:
            print(f"Error [{e.rule.value}]: {e}", file=sys.stderr)
            sys.exit(1)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "verify":
        from .api import validate

        result = validate(args.schema, args.config)
        if not args.quiet:
            print(f"Status: {'OK' if result.ok else 'FAILED'}")
            print(f"Errors: {len(result.errors)}")
            print(f"Warnings: {len(result.warnings)}")
            for issue in result.errors:
                print(f"  ERROR {issue.code}: {issue.message}")
            for issue in result.warnings:
                print(f"  WARNING {issue.code}: {issue.message}")
        sys.exit(0 if result.ok else 1)
    elif args.command == "config":
        try:
            from .api import export_options, load_options

            options = load_options(args.config_path)
            sys.stdout.write(export_options(options))
            sys.exit(0)
        except (ModelImportError, FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
