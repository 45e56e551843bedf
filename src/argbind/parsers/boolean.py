# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Parses boolean values.

Booleans are regular `--flag value` pairs; a flag without value is not
treated as `True`.
"""

from argbind.fields import FieldParser, either_field_parser
from argbind.result import Err, Ok

TRUE = ("true", "yes", "on", "1")
FALSE = ("false", "no", "off", "0")


def _parse(raw: str) -> Ok[bool] | Err[str]:
    value = raw.strip().lower()

    if value in TRUE:
        return Ok(True)
    if value in FALSE:
        return Ok(False)

    return Err(f"'{raw}' is not a boolean, expected one of: {', '.join(TRUE + FALSE)}")


def parser() -> FieldParser:
    return either_field_parser(_parse)
