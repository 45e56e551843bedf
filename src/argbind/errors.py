# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Parse errors reported by the tokenizer and the binders.

Every error is a frozen dataclass with an optional `field` and a `message`.
Errors carrying a field name are field-scoped; all others are structural
(unknown command, leftover arguments, malformed token stream).
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from pydantic import ValidationError


@dataclass(frozen=True)
class ParseError:
    message: str
    field: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MissingRequiredField(ParseError):
    @classmethod
    def create(cls, identifier: str) -> "MissingRequiredField":
        return cls(f"No value for '{identifier}' found in args", identifier)


@dataclass(frozen=True)
class FieldConversionFailure(ParseError):
    reason: str = ""

    @classmethod
    def create(cls, identifier: str, reason: str) -> "FieldConversionFailure":
        return cls(
            f"A parse error occurred for field '{identifier}': {reason}",
            identifier,
            reason,
        )


@dataclass(frozen=True)
class UnrecognizedArguments(ParseError):
    arguments: tuple[str, ...] = ()

    @classmethod
    def create(cls, arguments: Sequence[str]) -> "UnrecognizedArguments":
        names = ", ".join(arguments)
        return cls(
            f"arguments {names} were provided but not understood",
            arguments=tuple(arguments),
        )


@dataclass(frozen=True)
class NoCommandSpecified(ParseError):
    options: tuple[str, ...] = ()

    @classmethod
    def create(cls, options: Sequence[str]) -> "NoCommandSpecified":
        return cls(
            "no command specified; the first argument must select one of: " + ", ".join(options),
            options=tuple(options),
        )


@dataclass(frozen=True)
class UnknownCommand(ParseError):
    command: str = ""
    options: tuple[str, ...] = ()

    @classmethod
    def create(cls, command: str, options: Sequence[str]) -> "UnknownCommand":
        return cls(
            "the command specified does not match any known types that could be parsed into",
            command=command,
            options=tuple(options),
        )


@dataclass(frozen=True)
class MalformedTokenStream(ParseError):
    token: str = ""

    @classmethod
    def create(cls, token: str) -> "MalformedTokenStream":
        return cls(f"value '{token}' has no preceding flag", token=token)


class InvalidOptionsError(ValueError):
    """Raised by the throwing facade; carries every collected error."""

    def __init__(self, errors: Sequence[ParseError]) -> None:
        self.errors = tuple(errors)
        super().__init__("\n".join(e.message for e in self.errors))


def from_validation_error(
    error: ValidationError,
    identifiers: Mapping[str, str] | None = None,
) -> list[ParseError]:
    """Converts the errors of a rejected model construction to field-scoped errors.

    Args:
        error (ValidationError): Error raised by the model's validator.
        identifiers (Mapping[str, str] | None): Maps field aliases to the
            declared field names; error locations are reported by field name.

    Returns:
        list[ParseError]: One `FieldConversionFailure` per validation error, in
            the order pydantic reports them.
    """
    out: list[ParseError] = []

    for e in error.errors():
        try:
            reason = str(e["ctx"]["error"])
        except KeyError:
            reason = e["msg"]

        if len(e["loc"]) > 0:
            loc = str(e["loc"][0])
            if identifiers is not None:
                loc = identifiers.get(loc, loc)
            out.append(FieldConversionFailure.create(loc, reason))
        else:
            out.append(ParseError(reason))

    return out
