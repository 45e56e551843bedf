# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Iterable

from argbind.errors import MalformedTokenStream, ParseError
from argbind.log import get_logger
from argbind.naming import is_flag
from argbind.result import Err, Ok

logger = get_logger(__name__)

ArgMap = dict[str, str]


def tokenize(args: Iterable[str]) -> Ok[ArgMap] | Err[list[ParseError]]:
    """Converts an argument sequence into a flag to value mapping.

    Flags are stored verbatim, including the `--` prefix. The last occurrence
    of a duplicated flag wins. A flag that is directly followed by another
    flag, or that ends the sequence, has no value and is dropped.

    Args:
        args (Iterable[str]): Raw argument tokens.

    Returns:
        Ok[ArgMap] | Err[list[ParseError]]: The mapping, or one
            `MalformedTokenStream` per value token without a preceding flag.
    """
    argmap: ArgMap = {}
    errors: list[ParseError] = []
    key: str | None = None

    for arg in args:
        if is_flag(arg):
            if key is not None:
                logger.debug(f"dropping unbound flag {key}")
            key = arg
            continue

        if key is None:
            errors.append(MalformedTokenStream.create(arg))
            continue

        if key in argmap:
            logger.trace(f"{key} given more than once, keeping last value")

        argmap[key] = arg
        key = None

    if key is not None:
        logger.debug(f"dropping unbound flag {key}")

    if len(errors) > 0:
        return Err(errors)

    return Ok(argmap)
