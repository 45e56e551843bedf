# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Built-in parsers for scalar field types.

Unlike the other `parser` modules, the `standard` module does not contain a
`should_parse` function. Its types are registered in every default
registry and are found by exact type lookup.
"""

import datetime
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING

from argbind.fields import field_parser

from . import boolean

if TYPE_CHECKING:
    from argbind.fields import FieldParserRegistry


def _identity(raw: str) -> str:
    return raw


def register_builtins(registry: "FieldParserRegistry") -> None:
    registry.register(str, field_parser(_identity))
    # Python ints are unbounded, this also covers the long integer case.
    registry.register(int, field_parser(int))
    registry.register(float, field_parser(float))
    registry.register(bool, boolean.parser())
    registry.register(Decimal, field_parser(Decimal))
    registry.register(Path, field_parser(Path))
    registry.register(datetime.date, field_parser(datetime.date.fromisoformat))
    registry.register(datetime.datetime, field_parser(datetime.datetime.fromisoformat))
