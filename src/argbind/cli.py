# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

# PYTHON_ARGCOMPLETE_OK

from __future__ import annotations

import argparse
import importlib
import sys
import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

import argcomplete
import exitcode
from pydantic import BaseModel, ValidationError

from argbind.config import Settings, load_settings
from argbind.errors import ParseError
from argbind.log import ColorMode, Loglevel, get_logger, setup_logging
from argbind.parser import ArgParser
from argbind.result import Ok

logger = get_logger(__name__)


def _version() -> str:
    try:
        return version("argbind")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="argbind",
        description="""Bind an argument list to a pydantic model and print the result.
        TARGET names the model as `package.module:Attribute`; it may also name a union
        of models or a mapping of command names to models.
        A few options can be set via a TOML config file. Check `argbind --template` for a starting point.
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_version()}",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="show information about the loaded config",
    )
    parser.add_argument(
        "--template",
        action="store_true",
        help="print a config template",
    )
    parser.add_argument(
        "--usage",
        action="store_true",
        help="print the usage text of TARGET instead of binding arguments",
    )
    parser.add_argument(
        "--prog",
        help="program name used in the usage header of command sets",
    )
    parser.add_argument(
        "--color",
        choices=[m.value for m in ColorMode],
        help="color mode of the log output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase verbosity on the console",
    )
    parser.add_argument("target", nargs="?", metavar="TARGET", help="the shape to bind to")
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        metavar="ARGS",
        help="arguments bound to TARGET",
    )
    return parser


def get_log_level(verbosity: int) -> Loglevel:
    level = Loglevel.WARNING
    if verbosity == 1:
        level = Loglevel.INFO
    elif verbosity == 2:
        level = Loglevel.DEBUG
    elif verbosity >= 3:
        level = Loglevel.TRACE
    return level


def load_target(name: str) -> Any:
    """Imports `package.module:Attribute`.

    Raises:
        ValueError: If the name has no `:` separator.
        ImportError: If the module or the attribute does not exist.
    """
    module_name, sep, attr = name.partition(":")
    if sep == "" or module_name == "" or attr == "":
        raise ValueError(f"invalid target '{name}', expected 'package.module:Attribute'")

    module = importlib.import_module(module_name)

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ImportError(f"{module_name} has no attribute {attr}") from e
    return obj


def render_value(value: Any) -> str:
    if isinstance(value, BaseModel):
        return value.model_dump_json(indent=2)
    return repr(value)


def render_errors(errors: list[ParseError]) -> str:
    if len(errors) == 1:
        return f"error: {errors[0].message}"

    msg = f"{len(errors)} errors:"
    for e in errors:
        msg += f"\n  {e.message}"
    return msg


def cmd_show_config(settings: Settings, config_path: Path | None) -> None:
    if config_path is None:
        print("no config loaded")
    else:
        print(f"loaded config: {config_path}")

    for key, value in settings.model_dump(mode="json").items():
        print(f"  argbind.{key} = {value!r}")


def cmd_template() -> None:
    template = """# [argbind]
# prog = <string>
# verbosity = <int>
# color = <"always"|"auto"|"never">
"""
    print(template.strip())


def run(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    settings: Settings,
) -> int:
    try:
        target = load_target(args.target)
    except ValueError as e:
        parser.print_usage(sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return exitcode.USAGE
    except ImportError as e:
        logger.error(f"could not load {args.target}: {e}")
        return exitcode.SOFTWARE

    prog = args.prog or settings.prog

    try:
        arg_parser: ArgParser[Any] = ArgParser(target, prog=prog)
    except TypeError as e:
        logger.error(f"{args.target} cannot be bound: {e}")
        return exitcode.SOFTWARE

    if args.usage:
        print(arg_parser.usage())
        return exitcode.OK

    result = arg_parser.from_cli(args.args)
    if isinstance(result, Ok):
        print(render_value(result.value))
        return exitcode.OK

    print(arg_parser.usage(), file=sys.stderr)
    print(render_errors(result.error), file=sys.stderr)
    return exitcode.USAGE


def main() -> None:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args()

    try:
        settings, config_path = load_settings()
    except (tomllib.TOMLDecodeError, FileNotFoundError, ValidationError) as e:
        print(f"invalid config: {e}", file=sys.stderr)
        sys.exit(exitcode.CONFIG)

    if args.show_config:
        cmd_show_config(settings, config_path)
        sys.exit(exitcode.OK)

    if args.template:
        cmd_template()
        sys.exit(exitcode.OK)

    if args.target is None:
        parser.print_usage(sys.stderr)
        sys.exit(exitcode.USAGE)

    verbosity = args.verbose or settings.verbosity
    color_mode = ColorMode(args.color) if args.color is not None else settings.color

    setup_logging(level=get_log_level(verbosity), color_mode=color_mode)

    sys.exit(run(parser, args, settings))


if __name__ == "__main__":
    main()
