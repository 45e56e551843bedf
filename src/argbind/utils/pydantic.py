# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Pydantic Utility Functions for Schema Extraction.

The `pydantic` module contains the functions used for reading the field list,
annotations, defaults and descriptions of `pydantic` models, and for deciding
whether a declared shape is a record (a plain model) or a set of variants
(a union of models, or a `RootModel` over such a union).
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar, get_args

from pydantic import AliasChoices, AliasPath, BaseModel, ConfigDict, RootModel
from pydantic.fields import FieldInfo

from argbind.parsers.utils import is_union, unwrap_annotated

PydanticModelT = TypeVar("PydanticModelT", bound=BaseModel)


class BaseArgument(BaseModel):
    """Convenience base model for argument shapes.

    Allows fields of arbitrary (consumer registered) types and rejects
    values for undeclared fields.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")


@dataclass
class PydanticField:
    """Simple Pydantic v2.0 field wrapper.

    Pydantic fields no longer store their name, so this class keeps the field
    name and field info together.

    The recommended entry point for an arbitrary `pydantic.BaseModel` is the
    classmethod `PydanticField.parse_model`.
    """

    name: str
    info: FieldInfo

    @classmethod
    def parse_model(cls, model: type[BaseModel]) -> Iterator["PydanticField"]:
        """Iterator over the pydantic model fields in declaration order.

        Yields:
            Instances of self (`PydanticField`)
        """
        for name, info in model.model_fields.items():
            yield cls(name, info)

    @property
    def annotation(self) -> Any:
        return self.info.annotation

    def aliases(self) -> list[str]:
        """Returns the top level keys pydantic may report this field's errors under."""
        found = [self.info.alias] if self.info.alias is not None else []

        match self.info.validation_alias:
            case str(alias):
                found.append(alias)
            case AliasPath(path=path):
                found.append(str(path[0]))
            case AliasChoices(choices=choices):
                for c in choices:
                    found.append(c if isinstance(c, str) else str(c.path[0]))

        return found

    def has_default(self) -> bool:
        return not self.info.is_required()

    def default(self) -> Any:
        """Returns the declared default, calling a default factory if needed."""
        return self.info.get_default(call_default_factory=True)

    def hint(self) -> str | None:
        return self.info.description


def is_model(target: Any) -> bool:
    return isinstance(target, type) and issubclass(target, BaseModel)


def is_variant_root(target: Any) -> bool:
    """Checks whether the target is a `RootModel` whose root is a union of models."""
    if not (isinstance(target, type) and issubclass(target, RootModel)):
        return False

    root = target.model_fields.get("root")
    return root is not None and is_union(unwrap_annotated(root.annotation))


def is_model_union(target: Any) -> bool:
    target = unwrap_annotated(target)
    return is_union(target) and all(is_model(m) for m in get_args(target))


def union_members(target: Any) -> tuple[type[BaseModel], ...]:
    """Returns the members of a union annotation, or of a `RootModel` root union."""
    if is_variant_root(target):
        target = target.model_fields["root"].annotation

    members = get_args(unwrap_annotated(target))
    for m in members:
        if not is_model(m):
            raise TypeError(f"variant member {m!r} is not a pydantic model")
    return members


def command_name(model: type[BaseModel]) -> str:
    """Name selecting the model as a variant: the configured title or the class name."""
    title = model.model_config.get("title")
    return title if title is not None else model.__name__


def render_default(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name
    return str(value)
