# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""ABI document records: aliases, structs, variants, actions, tables and clauses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

DEFAULT_ABI_VERSION = "eosio::abi/1.1"


class TypeAliasDef(BaseModel):
    """A type alias: ``new_type_name`` stands in for ``type``."""

    model_config = ConfigDict(extra="ignore")

    new_type_name: str
    type: str


class FieldDef(BaseModel):
    """A named, typed member of a struct."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: str


class StructDef(BaseModel):
    """A struct with an optional single base struct."""

    model_config = ConfigDict(extra="ignore")

    name: str
    base: str = ""
    fields: list[FieldDef] = _Field(default_factory=list)

    @field_validator("base", mode="before")
    @classmethod
    def _null_base(cls, value: object) -> object:
        return "" if value is None else value


class VariantDef(BaseModel):
    """A tagged union; the order of ``types`` defines the wire tags."""

    model_config = ConfigDict(extra="ignore")

    name: str
    types: list[str] = _Field(default_factory=list)


class ActionDef(BaseModel):
    """A contract action and the type of its payload."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: str
    ricardian_contract: str = ""


class TableDef(BaseModel):
    """A contract table and the type of its rows."""

    model_config = ConfigDict(extra="ignore")

    name: str
    index_type: str = ""
    key_names: list[str] = _Field(default_factory=list)
    key_types: list[str] = _Field(default_factory=list)
    type: str


class ClauseDef(BaseModel):
    """A ricardian clause attached to the contract."""

    model_config = ConfigDict(extra="ignore")

    id: str
    body: str = ""


class AbiDef(BaseModel):
    """Top-level model of an ABI document.

    Every collection is optional and defaults to an empty list. Keys not
    listed here (``error_messages``, ``abi_extensions``, ...) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    version: str = DEFAULT_ABI_VERSION
    types: list[TypeAliasDef] = _Field(default_factory=list)
    variants: list[VariantDef] = _Field(default_factory=list)
    structs: list[StructDef] = _Field(default_factory=list)
    actions: list[ActionDef] = _Field(default_factory=list)
    tables: list[TableDef] = _Field(default_factory=list)
    ricardian_clauses: list[ClauseDef] = _Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value: object) -> object:
        # An empty or null version falls back to the default.
        return value or DEFAULT_ABI_VERSION

    @field_validator("types", "variants", "structs", "actions", "tables", "ricardian_clauses", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value
