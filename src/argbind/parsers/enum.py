# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Parses Enum field types.

The `enum` module contains the `should_parse` function, which checks whether
this module should be used for a field annotation, as well as the `build`
function, which creates a parser matching member names first and member
values second.
"""

import enum
from typing import Any

from argbind.fields import FieldParser, either_field_parser
from argbind.result import Err, Ok


def should_parse(annotation: Any) -> bool:
    """Checks whether the annotation is an `enum.Enum` subclass.

    Args:
        annotation (Any): Field annotation to check.

    Returns:
        bool: Whether the field should be parsed as an `enum`.
    """
    return isinstance(annotation, type) and issubclass(annotation, enum.Enum)


def build(annotation: type[enum.Enum]) -> FieldParser:
    """Creates the parser for an `enum.Enum` subclass.

    Args:
        annotation (type[enum.Enum]): The enum class.

    Returns:
        FieldParser: Parser returning one of the members.
    """
    names = [m.name for m in annotation]

    def parse(raw: str) -> Ok[enum.Enum] | Err[str]:
        if raw in annotation.__members__:
            return Ok(annotation[raw])

        for member in annotation:
            if str(member.value) == raw:
                return Ok(member)

        return Err(f"'{raw}' is not a valid {annotation.__name__}, expected one of: {', '.join(names)}")

    return either_field_parser(parse)
