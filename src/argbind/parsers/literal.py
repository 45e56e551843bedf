# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Parses Literal field types.

The given string is compared against the string form of every choice; the
matching choice itself (which may be an int or a bool) is returned.
"""

from typing import Any, Literal, get_args, get_origin

from argbind.fields import FieldParser, either_field_parser
from argbind.result import Err, Ok


def should_parse(annotation: Any) -> bool:
    return get_origin(annotation) is Literal


def build(annotation: Any) -> FieldParser:
    choices = get_args(annotation)

    def parse(raw: str) -> Ok[Any] | Err[str]:
        for choice in choices:
            if str(choice) == raw:
                return Ok(choice)
        return Err(f"'{raw}' is not one of: {', '.join(str(c) for c in choices)}")

    return either_field_parser(parse)
