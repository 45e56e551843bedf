# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, RootModel

from argbind.fields import registry
from argbind.schema import FieldSpec, RecordSchema, schema_for
from argbind.usage import describe_field, render_usage


class Paths(BaseModel):
    inputPath: str  # noqa: N815
    outputFilePattern: str = Field("out-%d", description="pattern for output files")  # noqa: N815


class Mode(Enum):
    FAST = "f"
    SLOW = "s"


class CommandOne(BaseModel):
    input: str
    output: str = "/dev/null"
    mode: Mode = Mode.FAST


class CommandTwo(BaseModel):
    input: str
    throughput: str = Field(description="items per second")


class Up(BaseModel):
    model_config = ConfigDict(title="up")


class Down(BaseModel):
    model_config = ConfigDict(title="down")

    force: bool = False


class Service(RootModel[Up | Down]):
    model_config = ConfigDict(title="service")


class Nested(RootModel[Service | CommandTwo]):
    pass


def test_record_usage() -> None:
    assert render_usage(schema_for(Paths)) == (
        "--input-path : required\n"
        "--output-file-pattern : optional, defaults to out-%d - pattern for output files"
    )


def test_enum_default_renders_name() -> None:
    text = render_usage(schema_for(CommandOne))
    assert "--mode : optional, defaults to FAST" in text


def test_variant_usage() -> None:
    assert render_usage(schema_for(CommandOne | CommandTwo), prog="tool") == (
        "USAGE: tool [command] [options], where [command] is one of:\n"
        "CommandOne\n"
        "  --input : required\n"
        "  --output : optional, defaults to /dev/null\n"
        "  --mode : optional, defaults to FAST\n"
        "\n"
        "CommandTwo\n"
        "  --input : required\n"
        "  --throughput : required - items per second"
    )


def test_nested_variant_usage() -> None:
    assert render_usage(schema_for(Nested)) == (
        "USAGE: app [command] [options], where [command] is one of:\n"
        "service\n"
        "  up\n"
        "\n"
        "  down\n"
        "    --force : optional, defaults to False\n"
        "\n"
        "CommandTwo\n"
        "  --input : required\n"
        "  --throughput : required - items per second"
    )


def test_usage_is_idempotent() -> None:
    schema = schema_for(CommandOne | CommandTwo)

    first = render_usage(schema)
    second = render_usage(schema)

    assert first == second
    assert schema is schema_for(CommandOne | CommandTwo)


def test_describe_field() -> None:
    assert describe_field(FieldSpec("retryCount", registry.lookup(int))) == "--retry-count : required"
    assert (
        describe_field(FieldSpec("retryCount", registry.lookup(int), default=3, hint="attempts"))
        == "--retry-count : optional, defaults to 3 - attempts"
    )


def test_handwritten_record_usage() -> None:
    schema = RecordSchema(
        "empty",
        (),
        lambda: None,
    )
    assert render_usage(schema) == ""
