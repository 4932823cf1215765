# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema model for chainabi (ABI records, type names, resolved type nodes)."""

from chainabi.model.entities import (
    DEFAULT_ABI_VERSION,
    AbiDef,
    ActionDef,
    ClauseDef,
    FieldDef,
    StructDef,
    TableDef,
    TypeAliasDef,
    VariantDef,
)
from chainabi.model.types import (
    BUILTIN_TYPE_NAMES,
    BuiltinType,
    ResolvedField,
    ResolvedType,
    TypeName,
    parse_type_name,
    render_type_name,
)

__all__ = [
    # Type system
    "BuiltinType",
    "BUILTIN_TYPE_NAMES",
    "TypeName",
    "parse_type_name",
    "render_type_name",
    "ResolvedField",
    "ResolvedType",
    # ABI records
    "DEFAULT_ABI_VERSION",
    "TypeAliasDef",
    "FieldDef",
    "StructDef",
    "VariantDef",
    "ActionDef",
    "TableDef",
    "ClauseDef",
    "AbiDef",
]
