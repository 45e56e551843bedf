# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

FLAG_PREFIX = "--"


def split_words(identifier: str) -> list[str]:
    """Splits an identifier at lowercase to uppercase transitions and at underscores."""
    words: list[str] = []
    partial = ""

    for char in identifier:
        if char == "_":
            if partial != "":
                words.append(partial)
            partial = ""
            continue

        if partial != "" and partial[-1].islower() and char.isupper():
            words.append(partial)
            partial = ""

        partial += char

    if partial != "" or len(words) == 0:
        words.append(partial)

    return words


def to_flag_name(identifier: str) -> str:
    """Converts a declared field identifier to its external flag spelling.

    `inputPath` and `input_path` both become `--input-path`.
    """
    return FLAG_PREFIX + "-".join(w.lower() for w in split_words(identifier))


def is_flag(token: str) -> bool:
    return token.startswith(FLAG_PREFIX)
