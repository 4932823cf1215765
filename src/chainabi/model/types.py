# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type names and resolved type nodes for the chainabi type system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# ###############
# Public Interface
# ###############

ARRAY_SUFFIX = "[]"
OPTIONAL_SUFFIX = "?"
EXTENSION_SUFFIX = "$"


class BuiltinType(Enum):
    """Builtin types understood by every ABI codec without a declaration."""

    BOOL = "bool"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    INT128 = "int128"
    UINT128 = "uint128"
    VARINT32 = "varint32"
    VARUINT32 = "varuint32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    FLOAT128 = "float128"
    TIME_POINT = "time_point"
    TIME_POINT_SEC = "time_point_sec"
    BLOCK_TIMESTAMP_TYPE = "block_timestamp_type"
    NAME = "name"
    BYTES = "bytes"
    STRING = "string"
    CHECKSUM160 = "checksum160"
    CHECKSUM256 = "checksum256"
    CHECKSUM512 = "checksum512"
    PUBLIC_KEY = "public_key"
    SIGNATURE = "signature"
    SYMBOL = "symbol"
    SYMBOL_CODE = "symbol_code"
    ASSET = "asset"
    EXTENDED_ASSET = "extended_asset"


# Mapping from builtin type name strings to BuiltinType enum values.
BUILTIN_TYPE_NAMES: dict[str, BuiltinType] = {bt.value: bt for bt in BuiltinType}


@dataclass(frozen=True)
class TypeName:
    """A type name split into its base name and modifier suffixes.

    Attributes:
        name: The base type name with all recognised suffixes stripped.
        is_array: True if the name carried a ``[]`` suffix.
        is_optional: True if the name carried a ``?`` suffix.
        is_extension: True if the name carried a ``$`` (binary extension) suffix.
    """

    name: str
    is_array: bool = False
    is_optional: bool = False
    is_extension: bool = False

    @property
    def type_name(self) -> str:
        """Type name including suffixes: [] array, ? optional, $ binary extension."""
        return render_type_name(self.name, self.is_array, self.is_optional, self.is_extension)


def parse_type_name(full_name: str) -> TypeName:
    """Split a full type name into its base name and modifier flags.

    Suffixes are stripped in a fixed order: the extension marker first, then
    the optional marker, then the array marker, so the only recognised
    ordering is ``name[]?$``. Markers written in any other order stay part
    of the base name: ``foo?[]`` parses to base ``foo?`` with ``is_array``
    set, not to an optional array of ``foo``.

    Args:
        full_name: The type name as written in the ABI, e.g. ``"asset[]?"``.

    Returns:
        The parsed :class:`TypeName`.
    """
    name = full_name
    is_extension = name.endswith(EXTENSION_SUFFIX)
    if is_extension:
        name = name[: -len(EXTENSION_SUFFIX)]
    is_optional = name.endswith(OPTIONAL_SUFFIX)
    if is_optional:
        name = name[: -len(OPTIONAL_SUFFIX)]
    is_array = name.endswith(ARRAY_SUFFIX)
    if is_array:
        name = name[: -len(ARRAY_SUFFIX)]
    return TypeName(name=name, is_array=is_array, is_optional=is_optional, is_extension=is_extension)


def render_type_name(name: str, is_array: bool = False, is_optional: bool = False, is_extension: bool = False) -> str:
    """Append modifier suffixes to *name* in canonical order."""
    rv = name
    if is_array:
        rv += ARRAY_SUFFIX
    if is_optional:
        rv += OPTIONAL_SUFFIX
    if is_extension:
        rv += EXTENSION_SUFFIX
    return rv


@dataclass(eq=False)
class ResolvedField:
    """A struct field whose declared type has been resolved."""

    name: str
    type: ResolvedType


@dataclass(eq=False)
class ResolvedType:
    """A node in a resolved type graph.

    Exactly one of ``fields``, ``variant`` and ``ref`` is populated for
    structs, variants and aliases respectively; none of them is set for
    builtin or unknown types. Nodes compare by identity because the graph
    may contain cycles.

    Attributes:
        name: Base type name (suffixes stripped).
        id: Discovery order within the resolution pass that created the node.
        is_array: Whether the full name carried a ``[]`` suffix.
        is_optional: Whether the full name carried a ``?`` suffix.
        is_extension: Whether the full name carried a ``$`` suffix.
        fields: Flattened, resolved struct fields.
        variant: Resolved variant alternatives in declared order.
        ref: The resolved target of a type alias.
    """

    name: str
    id: int = 0
    is_array: bool = False
    is_optional: bool = False
    is_extension: bool = False
    fields: list[ResolvedField] | None = field(default=None, repr=False)
    variant: list[ResolvedType] | None = field(default=None, repr=False)
    ref: ResolvedType | None = field(default=None, repr=False)

    @classmethod
    def from_type_name(cls, full_name: str, id: int = 0) -> ResolvedType:
        """Create an unlinked node for *full_name* with the given id."""
        parsed = parse_type_name(full_name)
        return cls(
            name=parsed.name,
            id=id,
            is_array=parsed.is_array,
            is_optional=parsed.is_optional,
            is_extension=parsed.is_extension,
        )

    @property
    def type_name(self) -> str:
        """Type name including suffixes: [] array, ? optional, $ binary extension."""
        return render_type_name(self.name, self.is_array, self.is_optional, self.is_extension)

    @property
    def is_builtin(self) -> bool:
        """Return True if no alias, struct or variant definition was found."""
        return self.fields is None and self.variant is None and self.ref is None
