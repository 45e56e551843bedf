# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Success and failure values returned by the binding functions.

Binding never raises for bad input; every operation returns either `Ok` or
`Err`. Both are frozen dataclasses, so they can be used in `match`
statements:

```python
match parse(Model, args):
    case Ok(value):
        ...
    case Err(errors):
        ...
```
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self

    def unwrap(self) -> Any:
        raise ValueError(f"called unwrap() on an error result: {self.error!r}")


Result: TypeAlias = Ok[T] | Err[E]
