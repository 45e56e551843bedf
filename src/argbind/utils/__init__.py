# SPDX-FileCopyrightText: Hayden Richards
#
# SPDX-License-Identifier: MIT

"""Utilities for extracting binding schemas from declared shapes.

The public interface exposed by this package is the `pydantic` module.
"""

from . import pydantic

__all__ = ("pydantic",)
