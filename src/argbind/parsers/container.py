# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Parses Container field types.

Since every flag takes exactly one value, container values are given as a
single delimited string: `--ports 80,443`. Every element is converted with
the element type's parser and all element failures are reported together.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, get_args, get_origin

from argbind.fields import FieldParser, either_field_parser
from argbind.result import Err, Ok

if TYPE_CHECKING:
    from argbind.fields import FieldParserRegistry

DELIMITER = ","

CONTAINERS: dict[Any, Callable[[list[Any]], Any]] = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
}


def should_parse(annotation: Any) -> bool:
    """Checks whether the annotation is a supported container.

    Args:
        annotation (Any): Field annotation to check.

    Returns:
        bool: Whether the field should be parsed as a container.
    """
    return get_origin(annotation) in CONTAINERS or annotation in CONTAINERS


def _element_type(annotation: Any) -> Any:
    args = get_args(annotation)

    if len(args) == 0:
        return str

    if get_origin(annotation) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if len(set(args)) != 1:
            raise TypeError(f"heterogeneous tuple {annotation} is not supported")

    return args[0]


def build(registry: "FieldParserRegistry", annotation: Any) -> FieldParser:
    """Creates the parser for a container annotation.

    Args:
        registry (FieldParserRegistry): Registry used for the element type.
        annotation (Any): Container annotation, e.g. `list[int]`.

    Returns:
        FieldParser: Parser splitting on `DELIMITER`.
    """
    origin = get_origin(annotation) or annotation
    factory = CONTAINERS[origin]
    element_parser = registry.lookup(_element_type(annotation))

    def parse(raw: str) -> Ok[Any] | Err[str]:
        if raw == "":
            return Ok(factory([]))

        values: list[Any] = []
        errors: list[str] = []

        for i, item in enumerate(raw.split(DELIMITER)):
            match element_parser(item.strip()):
                case Ok(value):
                    values.append(value)
                case Err(error):
                    errors.append(f"element {i}: {error}")

        if len(errors) > 0:
            return Err("; ".join(errors))

        return Ok(factory(values))

    return either_field_parser(parse)
