# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""ABI schema store and type resolution.

An :class:`Abi` holds the flat lists of aliases, structs, variants, actions,
tables and ricardian clauses that describe a contract interface, and turns
type names into linked :class:`~chainabi.model.types.ResolvedType` graphs
for a binary codec to walk.

Resolution is lenient: builtin types such as ``uint64`` or ``string`` are
never declared in an ABI, so any name that is not an alias, struct or
variant resolves to a leaf node instead of failing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

from pydantic import ValidationError

from chainabi.chain.name import InvalidNameError, Name
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
from chainabi.model.types import ResolvedField, ResolvedType

# ###############
# Public Interface
# ###############


class AbiDefinitionError(ValueError):
    """Raised when an ABI document is malformed and cannot be loaded."""


class CircularStructBaseError(ValueError):
    """Raised in strict mode when a struct's base chain loops back on itself.

    Attributes:
        struct_name: The struct whose fields were requested.
        path: The struct names visited, ending with the repeated base.
    """

    def __init__(self, struct_name: str, path: list[str]) -> None:
        self.struct_name = struct_name
        self.path = path
        super().__init__(f"Circular base chain in struct '{struct_name}': {' -> '.join(path)}")


class Abi(AbiDef):
    """An ABI document with lookup and type resolution helpers.

    The instance is treated as read-only once constructed: resolution reads
    the definition lists but never changes them, so one ABI can be shared
    across threads.
    """

    DEFAULT_VERSION: ClassVar[str] = DEFAULT_ABI_VERSION

    @classmethod
    def from_(cls, value: Abi | AbiDef | Mapping[str, Any] | str | bytes) -> Abi:
        """Build an ABI from any supported representation.

        Args:
            value: An existing :class:`Abi` (returned unchanged), an
                :class:`AbiDef`, a mapping, or the JSON text of an ABI document.

        Returns:
            The :class:`Abi`. Omitted collections default to empty lists and
            an omitted version defaults to :attr:`DEFAULT_VERSION`.

        Raises:
            AbiDefinitionError: If the document is not valid JSON or does not
                match the ABI structure.
        """
        if isinstance(value, Abi):
            return value
        try:
            if isinstance(value, (str, bytes)):
                return cls.model_validate_json(value)
            if isinstance(value, AbiDef):
                return cls.model_validate(value.model_dump())
            if isinstance(value, Mapping):
                return cls.model_validate(dict(value))
        except ValidationError as exc:
            raise AbiDefinitionError(f"Invalid ABI definition: {exc}") from exc
        raise AbiDefinitionError(f"Cannot build an ABI from {type(value).__name__}")

    def to_dict(self) -> dict[str, Any]:
        """Return the ABI as a plain JSON-compatible dict."""
        return self.model_dump()

    def to_json(self) -> str:
        """Return the ABI as compact JSON text."""
        return self.model_dump_json()

    # -------- type resolution --------

    def resolve_type(self, name: str) -> ResolvedType:
        """Resolve *name* into a fully linked type graph.

        Each call uses its own cache and id counter, so ids start at 1 and
        nodes are never shared between calls. Within a call every distinct
        full type name (suffixes included) maps to exactly one node; a node
        is cached before its children are resolved, which is what makes
        self-referential and mutually recursive types terminate.

        Args:
            name: A type name, optionally with ``[]``, ``?`` and ``$`` suffixes.

        Returns:
            The root :class:`ResolvedType` of the graph.
        """
        return _TypeResolver(self).resolve(name)

    def resolve_struct(self, name: str, *, strict: bool = False) -> list[FieldDef] | None:
        """Return the flattened field list of a struct, base-most fields first.

        Each struct's own fields keep their declared order. A struct with no
        fields anywhere in its chain yields an empty list.

        Args:
            name: The struct name.
            strict: Raise instead of returning ``None`` on a circular base chain.

        Returns:
            The ordered field list, or ``None`` if *name* is not a struct or if
            its base chain loops back on itself (in non-strict mode the two
            cases cannot be told apart).

        Raises:
            CircularStructBaseError: If *strict* is set and the base chain is circular.
        """
        top = self.get_struct(name)
        if top is None:
            return None
        rv: list[FieldDef] = []
        seen: set[str] = set()
        path: list[str] = []
        while top is not None:
            rv[:0] = top.fields
            seen.add(top.name)
            path.append(top.name)
            if top.base in seen:
                if strict:
                    raise CircularStructBaseError(name, path + [top.base])
                return None
            top = self.get_struct(top.base)
        return rv

    # -------- lookups --------

    def get_alias(self, name: str) -> TypeAliasDef | None:
        """Return the first type alias named *name*, if any."""
        return next((t for t in self.types if t.new_type_name == name), None)

    def get_struct(self, name: str) -> StructDef | None:
        """Return the first struct named *name*, if any."""
        return next((s for s in self.structs if s.name == name), None)

    def get_variant(self, name: str) -> VariantDef | None:
        """Return the first variant named *name*, if any."""
        return next((v for v in self.variants if v.name == name), None)

    def get_action(self, action_name: Name | str | int) -> ActionDef | None:
        """Return the action with the given (canonicalized) name, if any.

        A value that is not a valid name cannot match any action and yields ``None``.
        """
        name = _canonical_name(action_name)
        return next((a for a in self.actions if a.name == name), None)

    def get_action_type(self, action_name: Name | str | int) -> str | None:
        """Return the payload type name of an action, or ``None`` if the action is not declared."""
        action = self.get_action(action_name)
        if action is not None:
            return action.type
        return None

    def get_table(self, table_name: Name | str | int) -> TableDef | None:
        """Return the table with the given (canonicalized) name, if any."""
        name = _canonical_name(table_name)
        return next((t for t in self.tables if t.name == name), None)

    def get_table_type(self, table_name: Name | str | int) -> str | None:
        """Return the row type name of a table, or ``None`` if the table is not declared."""
        table = self.get_table(table_name)
        if table is not None:
            return table.type
        return None

    def get_clause(self, clause_id: str) -> ClauseDef | None:
        """Return the ricardian clause with the given id, if any."""
        return next((c for c in self.ricardian_clauses if c.id == clause_id), None)


# ################
# Implementation
# ################


def _canonical_name(value: Name | str | int) -> str | None:
    try:
        return str(Name.from_(value))
    except InvalidNameError:
        return None


@dataclass
class _Expansion:
    """A node whose children are still being resolved."""

    node: ResolvedType
    kind: Literal["ref", "fields", "variant"]
    child_names: list[str]
    field_names: list[str] = field(default_factory=list)
    children: list[ResolvedType] = field(default_factory=list)

    def complete(self) -> None:
        if self.kind == "ref":
            self.node.ref = self.children[0]
        elif self.kind == "fields":
            self.node.fields = [ResolvedField(name=n, type=t) for n, t in zip(self.field_names, self.children)]
        else:
            self.node.variant = self.children


class _TypeResolver:
    """One resolution pass over an ABI: a private node cache and id counter.

    Children are expanded depth-first from an explicit stack rather than by
    recursion, so deeply nested schemas are not bounded by the interpreter's
    recursion limit. Ids are still assigned in pre-order.
    """

    def __init__(self, abi: Abi) -> None:
        self._abi = abi
        # Keyed by full type name, so "foo" and "foo[]" are separate nodes.
        self._types: dict[str, ResolvedType] = {}
        self._next_id = 0

    def resolve(self, name: str) -> ResolvedType:
        root, expansion = self._visit(name)
        stack = [expansion] if expansion is not None else []
        while stack:
            top = stack[-1]
            if len(top.children) == len(top.child_names):
                top.complete()
                stack.pop()
                continue
            child, child_expansion = self._visit(top.child_names[len(top.children)])
            top.children.append(child)
            if child_expansion is not None:
                stack.append(child_expansion)
        return root

    def _visit(self, name: str) -> tuple[ResolvedType, _Expansion | None]:
        """Return the node for *name*, and its pending expansion if it was just created."""
        existing = self._types.get(name)
        if existing is not None:
            return existing, None

        self._next_id += 1
        node = ResolvedType.from_type_name(name, self._next_id)
        # Register before expanding so cycles find this node.
        self._types[node.type_name] = node

        alias = self._abi.get_alias(node.name)
        if alias is not None:
            return node, _Expansion(node, "ref", [alias.type])

        fields = self._abi.resolve_struct(node.name)
        if fields is not None:
            return node, _Expansion(node, "fields", [f.type for f in fields], [f.name for f in fields])

        variant = self._abi.get_variant(node.name)
        if variant is not None:
            return node, _Expansion(node, "variant", list(variant.types))

        # builtin or unknown type
        return node, None
