# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""The `[argbind]` table of the TOML config file.

The file is searched in this order: the path in `ARGBIND_CONFIG`, the current
directory, the enclosing git repository and the user config directory.
"""

import os
import subprocess
import tomllib
from pathlib import Path

from platformdirs import user_config_path
from pydantic import BaseModel, ConfigDict, Field

from argbind.log import ColorMode

CONFIG_ENV = "ARGBIND_CONFIG"
CONFIG_NAME = "argbind.toml"


class Settings(BaseModel):
    """Options of the command line tool which can be preset in the config file."""

    model_config = ConfigDict(extra="forbid")

    prog: str = Field("app", description="program name used in the usage header of command sets")
    verbosity: int = Field(0, ge=0, description="console verbosity, like repeating -v")
    color: ColorMode = Field(ColorMode.AUTO, description="color mode of the log output")


def _git_root() -> Path | None:
    try:
        p = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            check=True,
        )
    except (FileNotFoundError, subprocess.CalledProcessError):
        return None
    return Path(p.stdout.decode().strip())


def config_dirs() -> list[Path]:
    dirs = [Path.cwd()]
    if (git_root := _git_root()) is not None:
        dirs.append(git_root)
    dirs.append(user_config_path("argbind"))
    return dirs


def find_config() -> Path | None:
    """Returns the path of the config file in effect, if there is one.

    Raises:
        FileNotFoundError: If `ARGBIND_CONFIG` names a file which does not exist.
    """
    if (s := os.getenv(CONFIG_ENV)) is not None:
        if (path := Path(s)).exists():
            return path
        raise FileNotFoundError(s)

    for dir_ in config_dirs():
        if (path := dir_.joinpath(CONFIG_NAME)).exists():
            return path
    return None


def load_settings() -> tuple[Settings, Path | None]:
    """Loads the `[argbind]` table; defaults are used without a config file.

    Raises:
        FileNotFoundError: See `find_config()`.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        pydantic.ValidationError: If the table holds unknown keys or bad values.
    """
    if (path := find_config()) is None:
        return Settings(), None

    table = tomllib.loads(path.read_text()).get("argbind", {})
    return Settings.model_validate(table), path
