# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Binds tokenized arguments to record and variant schemas.

Binding is all-or-nothing but error detection is exhaustive: every field of
a record is attempted and every failure is reported, yet a value is only
constructed when no error occurred at all. An exception raised by a
schema constructor is reported as an error as well, so binding never raises
on bad input.
"""

import copy
from collections.abc import Iterable, Sequence
from typing import Any

from argbind.errors import (
    FieldConversionFailure,
    MissingRequiredField,
    NoCommandSpecified,
    ParseError,
    UnknownCommand,
    UnrecognizedArguments,
)
from argbind.fields import describe_exception
from argbind.log import get_logger
from argbind.result import Err, Ok
from argbind.schema import MISSING, ConstructionError, RecordSchema, Schema, VariantSchema
from argbind.tokenizer import ArgMap, tokenize

logger = get_logger(__name__)


def bind_record(schema: RecordSchema, args: ArgMap) -> Ok[Any] | Err[list[ParseError]]:
    """Binds a flag to value mapping to the fields of a record schema.

    The mapping is consumed: every flag matching a field is removed from
    it. Callers that want to keep their mapping must pass a copy.

    Args:
        schema (RecordSchema): Schema to bind to.
        args (ArgMap): Mapping of flag tokens (`--kebab-case`) to raw values.

    Returns:
        Ok[Any] | Err[list[ParseError]]: The constructed value, or every
            error in field order followed by the leftover argument error.
    """
    values: list[Any] = []
    errors: list[ParseError] = []

    for field in schema.fields:
        arg_name = field.flag

        if arg_name in args:
            raw = args.pop(arg_name)

            match field.converter(raw):
                case Ok(value):
                    logger.trace(f"{schema.name}: {field.identifier} = {value!r}")
                    values.append(value)
                case Err(reason):
                    logger.debug(f"{schema.name}: {arg_name} rejected {raw!r}: {reason}")
                    errors.append(FieldConversionFailure.create(field.identifier, reason))
        elif field.has_default:
            logger.trace(f"{schema.name}: {field.identifier} uses its default")
            if schema.constructor_defaults:
                values.append(MISSING)
            else:
                values.append(copy.deepcopy(field.default))
        else:
            errors.append(MissingRequiredField.create(field.identifier))

    if len(args) > 0:
        errors.append(UnrecognizedArguments.create(list(args.keys())))

    if len(errors) > 0:
        return Err(errors)

    try:
        return Ok(schema.constructor(*values))
    except ConstructionError as e:
        return Err(list(e.errors))
    except Exception as e:
        logger.debug(f"{schema.name}: constructor raised {e!r}")
        return Err([ParseError(f"constructing {schema.name} failed: {describe_exception(e)}")])


def bind_variant(schema: VariantSchema, args: Sequence[str]) -> Ok[Any] | Err[list[ParseError]]:
    """Selects a variant by the first argument and binds the rest to it.

    Args:
        schema (VariantSchema): Table of named alternatives.
        args (Sequence[str]): Argument tokens, the discriminator first.

    Returns:
        Ok[Any] | Err[list[ParseError]]: The injected value of the selected
            variant, or the errors. Errors of the selected variant are
            passed through unchanged.
    """
    if len(args) == 0:
        return Err([NoCommandSpecified.create(schema.options())])

    command, rest = args[0], args[1:]

    if (choice := schema.choices.get(command)) is None:
        logger.debug(f"{schema.name}: unknown command {command!r}")
        return Err([UnknownCommand.create(command, schema.options())])

    logger.trace(f"{schema.name}: selected {command}")

    match bind(choice, rest):
        case Ok(value):
            return Ok(schema.injector(command, value))
        case err:
            return err


def bind(schema: Schema, args: Iterable[str]) -> Ok[Any] | Err[list[ParseError]]:
    """Binds an argument sequence to a record or variant schema.

    Records tokenize the whole sequence; variants consume the discriminator
    first and tokenize only the remainder.
    """
    match schema:
        case VariantSchema():
            return bind_variant(schema, list(args))
        case RecordSchema():
            match tokenize(args):
                case Ok(argmap):
                    return bind_record(schema, argmap)
                case err:
                    return err

    raise TypeError(f"not a schema: {schema!r}")
