# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""String to value converters for single fields.

A `FieldParser` takes the raw string following a flag and returns `Ok(value)`
or `Err(message)`. Converters are looked up once per field type in a
`FieldParserRegistry` when a schema is built.
"""

from collections.abc import Callable
from typing import Any, TypeAlias, TypeVar

from argbind.result import Err, Ok

T = TypeVar("T")

FieldParser: TypeAlias = Callable[[str], Ok[Any] | Err[str]]


def describe_exception(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


def field_parser(convert: Callable[[str], T]) -> FieldParser:
    """Creates a FieldParser from a conversion that might raise.

    Any exception raised by `convert` is turned into an `Err` carrying the
    exception type and message, e.g.
    `ValueError: invalid literal for int() with base 10: 'x'`.
    """

    def parse(raw: str) -> Ok[T] | Err[str]:
        try:
            return Ok(convert(raw))
        except Exception as e:
            return Err(describe_exception(e))

    return parse


def either_field_parser(convert: Callable[[str], Ok[T] | Err[str]]) -> FieldParser:
    """Creates a FieldParser from a function already returning `Ok` or `Err`."""

    def parse(raw: str) -> Ok[T] | Err[str]:
        return convert(raw)

    return parse


def optional_parser(inner: FieldParser) -> FieldParser:
    """Wraps a parser for `T` into one for `T | None`.

    A given value is always present, even if it is an empty string; absence
    is only ever expressed by the field's default.
    """

    def parse(raw: str) -> Ok[Any] | Err[str]:
        return inner(raw)

    return parse


class FieldParserRegistry:
    """Maps field types to their FieldParser.

    Registered types take precedence over the generic handling of optional,
    container, literal and enum annotations in `argbind.parsers`.
    """

    def __init__(self, parsers: dict[Any, FieldParser] | None = None) -> None:
        self._parsers: dict[Any, FieldParser] = dict(parsers) if parsers is not None else {}
        # Bumped on every registration; keys the schema cache.
        self.generation = 0

    def register(
        self, type_: Any, parser: FieldParser | None = None
    ) -> Any:
        """Registers `parser` for `type_`.

        Without `parser` this returns a decorator, so a plain conversion
        function can be registered with `@registry.register(MyType)`. The
        decorated function is wrapped with `field_parser()`.
        """
        if parser is not None:
            self._parsers[type_] = parser
            self.generation += 1
            return parser

        def decorator(convert: Callable[[str], Any]) -> Callable[[str], Any]:
            self._parsers[type_] = field_parser(convert)
            self.generation += 1
            return convert

        return decorator

    def get(self, type_: Any) -> FieldParser | None:
        return self._parsers.get(type_)

    def __contains__(self, type_: Any) -> bool:
        return type_ in self._parsers

    def lookup(self, annotation: Any) -> FieldParser:
        """Resolves the parser for a field annotation.

        Raises:
            TypeError: If no parser is known for the annotation.
        """
        from argbind import parsers

        return parsers.resolve(self, annotation)

    def copy(self) -> "FieldParserRegistry":
        return FieldParserRegistry(self._parsers)


def default_registry() -> FieldParserRegistry:
    """Returns a new registry populated with the built-in scalar parsers."""
    from argbind.parsers import standard

    registry = FieldParserRegistry()
    standard.register_builtins(registry)
    return registry


registry = default_registry()
