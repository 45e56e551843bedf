# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import inspect
import io

import pytest
from pydantic import BaseModel

import argbind
from argbind import (
    ArgParser,
    Err,
    InvalidOptionsError,
    MissingRequiredField,
    Ok,
    UnrecognizedArguments,
)


class SimpleApp(BaseModel):
    input: str
    output: str


class CommandOne(BaseModel):
    input: str
    output: str
    mode: str


class CommandTwo(BaseModel):
    input: str
    throughput: str


def test_parse() -> None:
    assert argbind.parse(SimpleApp, ["--input", "a", "--output", "b"]) == Ok(
        SimpleApp(input="a", output="b")
    )


def test_parse_never_raises() -> None:
    result = argbind.parse(SimpleApp, ["stray", "--input"])

    assert isinstance(result, Err)


def test_parse_or_throw() -> None:
    value = argbind.parse_or_throw(SimpleApp, ["--output", "b", "--input", "a"])
    assert value == SimpleApp(input="a", output="b")


def test_parse_or_throw_prints_usage_and_raises() -> None:
    sink = io.StringIO()

    with pytest.raises(InvalidOptionsError) as exc:
        argbind.parse_or_throw(SimpleApp, ["--throughput", "x"], file=sink)

    assert sink.getvalue() == "--input : required\n--output : required\n"
    assert len(exc.value.errors) == 3
    assert isinstance(exc.value.errors[0], MissingRequiredField)
    assert isinstance(exc.value.errors[2], UnrecognizedArguments)
    assert str(exc.value) == "\n".join(e.message for e in exc.value.errors)
    assert isinstance(exc.value, ValueError)


def test_parse_or_throw_defaults_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(InvalidOptionsError, match="throughput"):
        argbind.parse_or_throw(
            SimpleApp,
            ["--input", "a", "--output", "b", "--throughput", "c"],
        )

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "--input : required" in captured.err


def test_usage_function() -> None:
    assert argbind.usage(SimpleApp) == "--input : required\n--output : required"
    assert argbind.usage(CommandOne | CommandTwo, prog="demo").startswith("USAGE: demo [command]")


def test_options() -> None:
    assert argbind.options(CommandOne | CommandTwo) == ["CommandOne", "CommandTwo"]

    with pytest.raises(TypeError):
        argbind.options(SimpleApp)


def test_arg_parser_reuse() -> None:
    parser: ArgParser[SimpleApp] = ArgParser(SimpleApp)

    assert parser.from_cli(["--input", "a", "--output", "b"]) == Ok(SimpleApp(input="a", output="b"))
    assert parser.from_cli(["--input", "c", "--output", "d"]) == Ok(SimpleApp(input="c", output="d"))
    assert parser.usage() == parser.usage()


def test_transform() -> None:
    parser: ArgParser[SimpleApp] = ArgParser(SimpleApp)
    paths = parser.transform(lambda app: (app.input, app.output))

    assert paths.from_cli(["--input", "a", "--output", "b"]) == Ok(("a", "b"))
    assert paths.usage() == parser.usage()

    result = paths.from_cli(["--input", "a"])
    assert isinstance(result, Err)
    assert isinstance(result.error[0], MissingRequiredField)


def test_transform_chains() -> None:
    parser = ArgParser(SimpleApp).transform(lambda app: app.input).transform(str.upper)

    assert parser.parse_or_throw(["--input", "a", "--output", "b"]) == "A"


def test_custom_registry() -> None:
    class Hex(BaseModel):
        value: int

    registry = argbind.default_registry()
    registry.register(int, argbind.field_parser(lambda s: int(s, 16)))

    assert ArgParser(Hex, registry=registry).from_cli(["--value", "ff"]) == Ok(Hex(value=255))
    assert isinstance(ArgParser(Hex).from_cli(["--value", "ff"]), Err)


def test_unsupported_target() -> None:
    with pytest.raises(TypeError):
        ArgParser(42)


class Temperature:
    def __init__(self, degrees: float) -> None:
        self.degrees = degrees


class Thermostat(argbind.BaseArgument):
    setpoint: Temperature


def test_reregistered_parser_applies_to_parsed_targets() -> None:
    argbind.registry.register(Temperature, argbind.field_parser(lambda s: Temperature(float(s))))
    assert argbind.parse(Thermostat, ["--setpoint", "68"]).unwrap().setpoint.degrees == 68.0

    @argbind.registry.register(Temperature)
    def fahrenheit(raw: str) -> Temperature:
        return Temperature((float(raw) - 32) * 5 / 9)

    assert argbind.parse(Thermostat, ["--setpoint", "68"]).unwrap().setpoint.degrees == 20.0


def test_constructor_signature() -> None:
    params = list(inspect.signature(ArgParser.__init__).parameters)

    assert params == ["self", "target", "prog", "registry"]
