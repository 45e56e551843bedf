# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Resolves field annotations to FieldParsers.

This package contains one module per annotation kind. Each module offers a
`should_parse()` check and a `build()` function, except for `standard`,
which registers the built-in scalar parsers by exact type.
"""

from typing import TYPE_CHECKING, Any

from argbind.fields import FieldParser, optional_parser

from . import (
    container,
    enum,
    literal,
)
from .utils import is_optional, strip_optional, type_name, unwrap_annotated

if TYPE_CHECKING:
    from argbind.fields import FieldParserRegistry


def resolve(registry: "FieldParserRegistry", annotation: Any) -> FieldParser:
    """Finds or builds the parser for a field annotation.

    Args:
        registry (FieldParserRegistry): Registry holding the known types.
        annotation (Any): The field's type annotation.

    Returns:
        FieldParser: The parser to use for this field.

    Raises:
        TypeError: If the annotation is not supported and not registered.
    """
    # Registered types win, this allows overriding any generic handling
    if (parser := registry.get(annotation)) is not None:
        return parser

    annotation = unwrap_annotated(annotation)
    if (parser := registry.get(annotation)) is not None:
        return parser

    if is_optional(annotation):
        return optional_parser(registry.lookup(strip_optional(annotation)))
    elif container.should_parse(annotation):
        return container.build(registry, annotation)
    elif literal.should_parse(annotation):
        return literal.build(annotation)
    elif enum.should_parse(annotation):
        return enum.build(annotation)

    raise TypeError(f"no field parser registered for type {type_name(annotation)}")
