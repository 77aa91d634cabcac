"""``fxp`` command-line entry point.

Usage::

    fxp init -f node-express
    fxp add login -f node-express
    fxp list
    fxp inject login
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from freakend import __version__
from freakend.config import Config
from freakend.scaffolder import (
    FeatureGenerator,
    InitGenerator,
    ScaffoldError,
    ServerInjector,
    TemplateCatalog,
)
from freakend.utils import print_error, print_info, print_summary_table, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fxp",
        description="Freakend CLI - Generate backend code instantly",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fxp init -f node-express\n"
            "  fxp add login -f node-express\n"
            "  fxp list -f node-express\n"
            "  fxp inject login\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    init_parser = subparsers.add_parser(
        "init", help="Initialize a backend project with boilerplate structure"
    )
    init_parser.add_argument("-f", "--framework", help="Choose your backend framework")
    init_parser.add_argument(
        "--skip-install",
        action="store_true",
        default=None,
        help="Write the files but do not run the package manager",
    )
    _add_dir_argument(init_parser)

    add_parser = subparsers.add_parser(
        "add", help="Add backend features like login, auth, comments"
    )
    add_parser.add_argument("feature", help="Feature like login, auth, comment")
    add_parser.add_argument(
        "-f", "--framework", help="Framework like node-express, python-django"
    )
    _add_version_argument(add_parser)
    _add_dir_argument(add_parser)

    list_parser = subparsers.add_parser("list", help="List the available features")
    list_parser.add_argument("-f", "--framework", help="Only list this framework")
    _add_version_argument(list_parser)

    inject_parser = subparsers.add_parser(
        "inject", help="Mount a feature's routes in freakend.server.js"
    )
    inject_parser.add_argument("feature", help="Feature whose routes to mount")
    _add_dir_argument(inject_parser)

    return parser


def _add_dir_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dir",
        dest="target_dir",
        default=None,
        help="Target directory (default: current directory)",
    )


def _add_version_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--template-version",
        default=None,
        help="Template version (default: 1.0.0)",
    )


def _load_config(args: argparse.Namespace) -> Config:
    """Environment first, then command-line overrides."""
    config = Config.from_env()
    updates: dict[str, object] = {}
    if getattr(args, "target_dir", None):
        updates["target_dir"] = Path(args.target_dir)
    if getattr(args, "template_version", None):
        updates["template_version"] = args.template_version
    if getattr(args, "skip_install", None):
        updates["skip_install"] = True
    return config.model_copy(update=updates)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _cmd_init(args: argparse.Namespace, config: Config) -> int:
    if not args.framework:
        print_error("Unsupported framework. Only 'node-express' is supported for now.")
        return 1
    await InitGenerator(config).generate(args.framework)
    return 0


async def _cmd_add(args: argparse.Namespace, config: Config) -> int:
    if not args.framework:
        print_error("Please specify a framework using -f or --framework")
        return 1
    print_info(f"Adding feature '{args.feature}' for framework '{args.framework}'")
    report = await FeatureGenerator(config).generate(args.feature, args.framework)
    return 0 if report.ok else 1


async def _cmd_list(args: argparse.Namespace, config: Config) -> int:
    catalog = TemplateCatalog(config.template_dir, config.template_version)
    if args.framework:
        frameworks = [catalog.resolve_framework(args.framework)]
    else:
        frameworks = catalog.list_frameworks()

    if not frameworks:
        print_warning(f"No templates found in {catalog.root}")
        return 1

    listed = 0
    for framework in frameworks:
        features = catalog.list_features(framework)
        if not features:
            print_warning(
                f"No templates found for '{framework}' ({catalog.default_version})"
            )
            continue
        listed += 1
        grouped = catalog.categorize(features)
        print_summary_table(
            {category: ", ".join(names) for category, names in grouped.items()},
            title=f"{framework} {catalog.default_version}",
            columns=("Category", "Features"),
        )
    return 0 if listed else 1


async def _cmd_inject(args: argparse.Namespace, config: Config) -> int:
    await ServerInjector(config).inject(args.feature)
    return 0


_COMMANDS = {
    "init": _cmd_init,
    "add": _cmd_add,
    "list": _cmd_list,
    "inject": _cmd_inject,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``fxp`` and ``python -m freakend``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = _load_config(args)
    except ValueError as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    try:
        return asyncio.run(_COMMANDS[args.command](args, config))
    except ScaffoldError as exc:
        print_error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
