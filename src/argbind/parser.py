# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Declarative and Typed Argument Binding.

The `parser` module contains the `ArgParser` class and the module level
`parse`, `parse_or_throw`, `usage` and `options` functions.

The procedure to bind arguments to a typed value is:

1. Define a `pydantic` model (or a union of models for commands)
2. Create an `ArgParser` for it, or call the functions directly
3. Parse the argument list

The result of a successful parse is an instance of the defined model, so it
is compatible with an IDE, linter or type checker.
"""

import sys
from collections.abc import Callable, Iterable
from typing import Any, Generic, TextIO, TypeVar

from argbind import binder
from argbind.errors import InvalidOptionsError, ParseError
from argbind.fields import FieldParserRegistry
from argbind.log import get_logger
from argbind.result import Err, Ok
from argbind.schema import Schema, VariantSchema, schema_for
from argbind.usage import render_usage

logger = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class ArgParser(Generic[T]):
    """Binds argument lists to one target shape.

    The schema is extracted once, when the parser is created, and reused for
    every call.
    """

    def __init__(
        self,
        target: Any,
        prog: str = "app",
        registry: FieldParserRegistry | None = None,
    ) -> None:
        """Instantiates the parser with its target.

        :param target: Pydantic model class, union of models, `RootModel` over
                       a union, mapping of command names to targets, or a
                       prebuilt schema.
        :param prog: Program name used in the variant usage header.
        :param registry: Field parser registry; the default registry if None.
        """
        self.schema: Schema = schema_for(target, registry)
        self.prog = prog
        self._mapper: Callable[[Any], T] | None = None

    def from_cli(self, args: Iterable[str]) -> Ok[T] | Err[list[ParseError]]:
        """Parses arguments without raising on bad input.

        :param args: Argument tokens, without the program name.
        :return: `Ok` with the bound value or `Err` with every error found.
        """
        result = binder.bind(self.schema, args)
        if self._mapper is not None:
            result = result.map(self._mapper)
        return result

    def parse_or_throw(self, args: Iterable[str], file: TextIO | None = None) -> T:
        """Parses arguments, raising on bad input.

        On failure the usage text is written to `file` (stderr by default)
        before `InvalidOptionsError` is raised.

        :raises InvalidOptionsError: Carrying every error; its message joins
                                     the error messages with newlines.
        """
        result = self.from_cli(args)
        if isinstance(result, Ok):
            return result.value

        print(self.usage(), file=file if file is not None else sys.stderr)
        logger.debug(f"binding failed with {len(result.error)} error(s)")
        raise InvalidOptionsError(result.error)

    def usage(self) -> str:
        return render_usage(self.schema, self.prog)

    def options(self) -> list[str]:
        """Lists the valid command names of a variant target.

        :raises TypeError: If the target is a record, which has no commands.
        """
        if not isinstance(self.schema, VariantSchema):
            raise TypeError(f"{self.schema.name} is not a command set")
        return self.schema.options()

    def transform(self, fn: Callable[[T], U]) -> "ArgParser[U]":
        """Returns a parser for the same arguments whose results are mapped with `fn`.

        Only successful results are mapped; the usage text is unchanged.
        """
        inner = self._mapper
        parser: ArgParser[U] = ArgParser(self.schema, self.prog)
        parser._mapper = fn if inner is None else lambda v: fn(inner(v))
        return parser


def parse(target: Any, args: Iterable[str]) -> Ok[Any] | Err[list[ParseError]]:
    return ArgParser(target).from_cli(args)


def parse_or_throw(target: Any, args: Iterable[str], *, file: TextIO | None = None) -> Any:
    return ArgParser(target).parse_or_throw(args, file)


def usage(target: Any, prog: str = "app") -> str:
    return ArgParser(target, prog).usage()


def options(target: Any) -> list[str]:
    return ArgParser(target).options()
