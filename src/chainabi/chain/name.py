# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Ledger account and action names.

A name is a 64-bit integer rendered as up to 13 characters: the first 12
use 5 bits each from ``.12345abcdefghijklmnopqrstuvwxyz`` and the optional
13th uses the remaining 4 bits, so it is limited to ``.12345abcdefghij``.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############

NAME_CHARMAP = ".12345abcdefghijklmnopqrstuvwxyz"
MAX_NAME_LENGTH = 13


class InvalidNameError(ValueError):
    """Raised when a value cannot be canonicalized into a name."""


class Name:
    """A canonicalized ledger name backed by its 64-bit integer encoding."""

    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        if not 0 <= value < 1 << 64:
            raise InvalidNameError(f"Name value out of range: {value}")
        self.value = value

    @classmethod
    def from_(cls, value: Name | str | int) -> Name:
        """Coerce a name, its string form, or its integer encoding to a :class:`Name`."""
        if isinstance(value, Name):
            return value
        if isinstance(value, bool):
            raise InvalidNameError(f"Cannot convert {value!r} to a name")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            return cls(_string_to_value(value))
        raise InvalidNameError(f"Cannot convert {type(value).__name__} to a name")

    def __str__(self) -> str:
        return _value_to_string(self.value)

    def __repr__(self) -> str:
        return f"Name({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        # Only names compare equal; a raw str or int would need a matching hash.
        if isinstance(other, Name):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)


# ################
# Implementation
# ################

_SYMBOLS: dict[str, int] = {c: i for i, c in enumerate(NAME_CHARMAP)}


def _string_to_value(text: str) -> int:
    if len(text) > MAX_NAME_LENGTH:
        raise InvalidNameError(f"Name '{text}' is longer than {MAX_NAME_LENGTH} characters")
    value = 0
    for index, char in enumerate(text):
        symbol = _SYMBOLS.get(char)
        if symbol is None:
            raise InvalidNameError(f"Invalid character {char!r} in name '{text}'")
        if index < 12:
            value |= symbol << (64 - 5 * (index + 1))
        else:
            if symbol > 0x0F:
                raise InvalidNameError(f"Invalid 13th character {char!r} in name '{text}'")
            value |= symbol
    return value


def _value_to_string(value: int) -> str:
    chars = ["."] * MAX_NAME_LENGTH
    remaining = value
    for i in range(MAX_NAME_LENGTH):
        # The last character only has 4 bits.
        if i == 0:
            chars[12] = NAME_CHARMAP[remaining & 0x0F]
            remaining >>= 4
        else:
            chars[12 - i] = NAME_CHARMAP[remaining & 0x1F]
            remaining >>= 5
    return "".join(chars).rstrip(".")
