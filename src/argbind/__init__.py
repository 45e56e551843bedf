# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Typed Argument Binding with Pydantic Models.

This is the `argbind` package. It binds `--flag value` argument lists, or
`command --flag value` lists, to instances of declared `pydantic` models,
reporting every problem of an invocation at once.

The public interface exposed by this package is the `ArgParser` class, the
`parse`, `parse_or_throw`, `usage` and `options` functions, the schema and
field parser building blocks and the error types.
"""

from argbind.errors import (
    FieldConversionFailure,
    InvalidOptionsError,
    MalformedTokenStream,
    MissingRequiredField,
    NoCommandSpecified,
    ParseError,
    UnknownCommand,
    UnrecognizedArguments,
)
from argbind.fields import (
    FieldParser,
    FieldParserRegistry,
    default_registry,
    either_field_parser,
    field_parser,
    optional_parser,
    registry,
)
from argbind.naming import to_flag_name
from argbind.parser import ArgParser, options, parse, parse_or_throw, usage
from argbind.result import Err, Ok
from argbind.schema import MISSING, FieldSpec, RecordSchema, VariantSchema, schema_for
from argbind.tokenizer import tokenize
from argbind.utils.pydantic import BaseArgument

# Public Re-Exports
__all__ = (
    "MISSING",
    "ArgParser",
    "BaseArgument",
    "Err",
    "FieldConversionFailure",
    "FieldParser",
    "FieldParserRegistry",
    "FieldSpec",
    "InvalidOptionsError",
    "MalformedTokenStream",
    "MissingRequiredField",
    "NoCommandSpecified",
    "Ok",
    "ParseError",
    "RecordSchema",
    "UnknownCommand",
    "UnrecognizedArguments",
    "VariantSchema",
    "default_registry",
    "either_field_parser",
    "field_parser",
    "optional_parser",
    "options",
    "parse",
    "parse_or_throw",
    "registry",
    "schema_for",
    "to_flag_name",
    "tokenize",
    "usage",
)
