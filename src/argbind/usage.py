# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import textwrap

from argbind.schema import FieldSpec, RecordSchema, Schema, VariantSchema
from argbind.utils.pydantic import render_default

INDENT = "  "


def describe_field(field: FieldSpec) -> str:
    """Renders the usage line of a single field, e.g. `--output : optional, defaults to /dev/null`."""
    if field.has_default:
        status = f"optional, defaults to {render_default(field.default)}"
    else:
        status = "required"

    line = f"{field.flag} : {status}"
    if field.hint is not None:
        line += f" - {field.hint}"
    return line


def _record_usage(schema: RecordSchema) -> str:
    return "\n".join(describe_field(f) for f in schema.fields)


def _command_listing(schema: VariantSchema) -> str:
    blocks = []

    for name, choice in schema.choices.items():
        body = _record_usage(choice) if isinstance(choice, RecordSchema) else _command_listing(choice)
        blocks.append(name if body == "" else name + "\n" + textwrap.indent(body, INDENT))

    return "\n\n".join(blocks)


def render_usage(schema: Schema, prog: str = "app") -> str:
    """Renders the usage text of a schema.

    Records render one line per field in declaration order. Variants render a
    header followed by every command name and the indented usage of the
    command's schema.

    Args:
        schema (Schema): Record or variant schema.
        prog (str): Program name shown in the variant header.

    Returns:
        str: The usage text, without trailing newline.
    """
    match schema:
        case RecordSchema():
            return _record_usage(schema)
        case VariantSchema():
            header = f"USAGE: {prog} [command] [options], where [command] is one of:"
            return header + "\n" + _command_listing(schema)

    raise TypeError(f"not a schema: {schema!r}")
