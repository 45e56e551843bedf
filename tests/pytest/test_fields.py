# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import datetime
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import pytest

from argbind.fields import (
    FieldParserRegistry,
    default_registry,
    either_field_parser,
    field_parser,
    optional_parser,
    registry,
)
from argbind.result import Err, Ok


class Color(Enum):
    RED = "r"
    GREEN = "g"


@dataclass(frozen=True)
class Sections:
    first: str
    second: str


def test_field_parser_success() -> None:
    assert field_parser(int)("21") == Ok(21)


def test_field_parser_keeps_exception_description() -> None:
    result = field_parser(int)("twentyone")

    assert isinstance(result, Err)
    assert "ValueError" in result.error
    assert "invalid literal for int()" in result.error
    assert "twentyone" in result.error


def test_either_field_parser() -> None:
    def parse(raw: str) -> Ok[Sections] | Err[str]:
        match raw.split(":"):
            case [first, second]:
                return Ok(Sections(first, second))
            case _:
                return Err("Expected string in the form a:b")

    parser = either_field_parser(parse)
    assert parser("aaaa:bbbb") == Ok(Sections("aaaa", "bbbb"))
    assert parser("aaaa:bbbb:cccc") == Err("Expected string in the form a:b")


def test_optional_parser_distinguishes_empty() -> None:
    parser = optional_parser(registry.lookup(str))
    assert parser("") == Ok("")
    assert parser("x") == Ok("x")


@pytest.mark.parametrize(
    "annotation,raw,expected",
    [
        (str, "text", "text"),
        (int, "-12", -12),
        (int, "123456789012345678901234567890", 123456789012345678901234567890),
        (float, "1.5", 1.5),
        (bool, "yes", True),
        (bool, "Off", False),
        (Decimal, "0.10", Decimal("0.10")),
        (Path, "/tmp/x", Path("/tmp/x")),
        (datetime.date, "2020-01-31", datetime.date(2020, 1, 31)),
        (Color, "RED", Color.RED),
        (Color, "g", Color.GREEN),
        (Literal["fast", "slow"], "slow", "slow"),
        (Literal[1, 2], "2", 2),
        (list[int], "1, 2,3", [1, 2, 3]),
        (list[str], "", []),
        (tuple[int, ...], "4,5", (4, 5)),
        (set[str], "a,b,a", {"a", "b"}),
        (int | None, "3", 3),
        (Optional[int], "3", 3),  # noqa: UP007
        (Annotated[int, "meta"], "7", 7),
    ],
)
def test_builtin_lookup(annotation: Any, raw: str, expected: Any) -> None:
    assert registry.lookup(annotation)(raw) == Ok(expected)


@pytest.mark.parametrize(
    "annotation,raw,fragment",
    [
        (int, "x", "ValueError"),
        (float, "one", "ValueError"),
        (bool, "maybe", "not a boolean"),
        (Color, "BLUE", "not a valid Color"),
        (Literal["fast", "slow"], "medium", "not one of: fast, slow"),
        (list[int], "1,x,3", "element 1"),
        (datetime.date, "yesterday", "ValueError"),
    ],
)
def test_builtin_lookup_failure(annotation: Any, raw: str, fragment: str) -> None:
    result = registry.lookup(annotation)(raw)

    assert isinstance(result, Err)
    assert fragment in result.error


def test_unknown_type() -> None:
    with pytest.raises(TypeError, match="Sections"):
        registry.lookup(Sections)


def test_register_custom_type() -> None:
    reg = registry.copy()
    reg.register(Sections, field_parser(lambda s: Sections(*s.split(":"))))

    assert Sections in reg
    assert Sections not in registry
    assert reg.lookup(Sections)("a:b") == Ok(Sections("a", "b"))
    assert reg.lookup(list[Sections])("a:b,c:d") == Ok([Sections("a", "b"), Sections("c", "d")])
    assert reg.lookup(Sections | None)("a:b") == Ok(Sections("a", "b"))


def test_register_decorator() -> None:
    reg = FieldParserRegistry()

    @reg.register(Sections)
    def parse_sections(raw: str) -> Sections:
        first, second = raw.split(":")
        return Sections(first, second)

    assert reg.lookup(Sections)("a:b") == Ok(Sections("a", "b"))
    result = reg.lookup(Sections)("a")
    assert isinstance(result, Err)
    assert "ValueError" in result.error


def test_registered_type_overrides_builtin() -> None:
    reg = default_registry()
    reg.register(int, field_parser(lambda s: int(s, 0)))

    assert reg.lookup(int)("0x10") == Ok(16)
    assert isinstance(registry.lookup(int)("0x10"), Err)
