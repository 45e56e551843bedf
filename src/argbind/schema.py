# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Runtime schemas describing how a value is bound from arguments.

A `RecordSchema` is the ordered field list of one output shape together with
the function constructing the output value. A `VariantSchema` is a table of
named alternatives, each a `RecordSchema` or another `VariantSchema`.
Schemas are immutable and can be shared between any number of parse calls.

Schemas are usually extracted from `pydantic` models with `schema_for()`,
but they can also be assembled by hand:

```python
schema = RecordSchema(
    "copy",
    (
        FieldSpec("input", registry.lookup(str)),
        FieldSpec("output", registry.lookup(str), default="/dev/null"),
    ),
    lambda input, output: (input, output),
)
```
"""

import functools
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

from pydantic import BaseModel, ValidationError

from argbind.errors import from_validation_error
from argbind.fields import FieldParser, FieldParserRegistry
from argbind.fields import registry as shared_registry
from argbind.log import get_logger
from argbind.naming import to_flag_name
from argbind.utils.pydantic import (
    PydanticField,
    command_name,
    is_model,
    is_model_union,
    is_variant_root,
    union_members,
)

logger = get_logger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class ConstructionError(Exception):
    """Raised by a schema constructor which rejects the bound field values."""

    def __init__(self, errors: list[Any]) -> None:
        self.errors = errors
        super().__init__("\n".join(str(e) for e in errors))


@dataclass(frozen=True)
class FieldSpec:
    identifier: str
    converter: FieldParser
    default: Any = MISSING
    hint: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def flag(self) -> str:
        return to_flag_name(self.identifier)


@dataclass(frozen=True)
class RecordSchema:
    """Ordered fields of one output shape and the function building it.

    The constructor receives one positional value per field. If
    `constructor_defaults` is set, absent fields with a default are passed as
    `MISSING` and the constructor applies the default itself; otherwise the
    binder passes a fresh copy of the declared default.
    """

    name: str
    fields: tuple[FieldSpec, ...]
    constructor: Callable[..., Any]
    constructor_defaults: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

        seen: dict[str, str] = {}
        for f in self.fields:
            if f.flag in seen:
                raise ValueError(
                    f"fields '{seen[f.flag]}' and '{f.identifier}' of {self.name} both map to {f.flag}"
                )
            seen[f.flag] = f.identifier


def _identity_injector(name: str, value: Any) -> Any:
    return value


@dataclass(frozen=True)
class VariantSchema:
    name: str
    choices: Mapping[str, "Schema"]
    injector: Callable[[str, Any], Any] = field(default=_identity_injector)

    def __post_init__(self) -> None:
        if len(self.choices) == 0:
            raise ValueError(f"variant set {self.name} declares no commands")
        object.__setattr__(self, "choices", MappingProxyType(dict(self.choices)))

    def options(self) -> list[str]:
        """Returns the valid command names in declaration order."""
        return list(self.choices.keys())


Schema: TypeAlias = RecordSchema | VariantSchema


def _model_constructor(
    model: type[BaseModel],
    names: list[str],
    identifiers: dict[str, str],
) -> Callable[..., Any]:
    # Values are keyed by field name, aliases are only used to map error locations back.
    def construct(*values: Any) -> Any:
        data = {n: v for n, v in zip(names, values, strict=True) if v is not MISSING}
        try:
            return model.model_validate(data, by_alias=False, by_name=True)
        except ValidationError as e:
            raise ConstructionError(from_validation_error(e, identifiers)) from e

    return construct


def record_schema(
    model: type[BaseModel],
    registry: FieldParserRegistry | None = None,
) -> RecordSchema:
    """Extracts the record schema of a `pydantic` model.

    Args:
        model (type[BaseModel]): Model class declaring the fields.
        registry (FieldParserRegistry | None): Registry used to resolve field
            parsers. Defaults to the package wide registry.

    Returns:
        RecordSchema: The schema, with fields in declaration order.

    Raises:
        TypeError: If a field's type has no parser.
    """
    registry = registry if registry is not None else shared_registry

    fields: list[FieldSpec] = []
    names: list[str] = []
    identifiers: dict[str, str] = {}

    for f in PydanticField.parse_model(model):
        try:
            converter = registry.lookup(f.annotation)
        except TypeError as e:
            raise TypeError(f"field '{f.name}' of {model.__name__}: {e}") from e

        fields.append(
            FieldSpec(
                identifier=f.name,
                converter=converter,
                default=f.default() if f.has_default() else MISSING,
                hint=f.hint(),
            )
        )
        names.append(f.name)
        for alias in f.aliases():
            identifiers.setdefault(alias, f.name)

    logger.trace(f"extracted {len(fields)} fields from {model.__name__}")
    return RecordSchema(
        command_name(model),
        tuple(fields),
        _model_constructor(model, names, identifiers),
        constructor_defaults=True,
    )


def variant_schema(
    target: Any,
    registry: FieldParserRegistry | None = None,
) -> VariantSchema:
    """Builds the variant schema for a union of models or a mapping of targets.

    A `RootModel` over a union wraps the selected value into the root model;
    for a bare union the selected model instance is returned as is. Mapping
    values may be any target accepted by `schema_for()`, which allows nesting.

    Args:
        target (Any): Union type, `RootModel` subclass or `Mapping[str, target]`.
        registry (FieldParserRegistry | None): Registry used to resolve field parsers.

    Returns:
        VariantSchema: The variant table in declaration order.
    """
    if isinstance(target, Mapping):
        choices = {name: build_schema(t, registry) for name, t in target.items()}
        return VariantSchema("command", choices)

    choices = {}
    for member in union_members(target):
        name = command_name(member)
        if name in choices:
            raise ValueError(f"command name {name} is declared twice")
        choices[name] = build_schema(member, registry)

    if is_variant_root(target):
        return VariantSchema(target.__name__, choices, lambda _, value: target(value))

    return VariantSchema(" | ".join(choices), choices)


def build_schema(target: Any, registry: FieldParserRegistry | None = None) -> Schema:
    """Builds the schema for any supported target, without caching.

    Raises:
        TypeError: If the target is not a schema, model, union of models or mapping.
    """
    if isinstance(target, RecordSchema | VariantSchema):
        return target
    if is_variant_root(target) or is_model_union(target) or isinstance(target, Mapping):
        return variant_schema(target, registry)
    if is_model(target):
        return record_schema(target, registry)

    raise TypeError(f"cannot derive an argument schema from {target!r}")


@functools.cache
def _cached_schema(target: Any, generation: int) -> Schema:
    return build_schema(target)


def schema_for(target: Any, registry: FieldParserRegistry | None = None) -> Schema:
    """Returns the schema for a target.

    Schemas of model classes and unions built with the default registry are
    cached per registry generation, so registering a parser on the shared
    registry takes effect for targets which were parsed before.
    """
    if isinstance(target, RecordSchema | VariantSchema):
        return target
    if registry is not None or isinstance(target, Mapping):
        return build_schema(target, registry)
    return _cached_schema(target, shared_registry.generation)
