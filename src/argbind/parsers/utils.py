# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Annotation helpers shared by the parser modules."""

from types import NoneType, UnionType
from typing import Annotated, Any, Union, get_args, get_origin


def unwrap_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is UnionType


def is_optional(annotation: Any) -> bool:
    return is_union(annotation) and NoneType in get_args(annotation)


def strip_optional(annotation: Any) -> Any:
    """Returns the annotation without its `None` member."""
    args = tuple(a for a in get_args(annotation) if a is not NoneType)
    if len(args) == 1:
        return args[0]
    return Union[args]  # noqa: UP007


def type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", repr(annotation))
