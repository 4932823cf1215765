# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Strict validation checks for ABI documents.

Type resolution never fails: unknown names become leaf nodes and circular
struct bases resolve to "no fields". These checks report the schema
authoring errors that lenient resolution hides.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chainabi.chain.abi import Abi, CircularStructBaseError
from chainabi.chain.variant import HasVariantAlternatives, abi_type_string
from chainabi.model.types import BUILTIN_TYPE_NAMES, parse_type_name

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue: the ABI resolves, but probably not as intended.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal issue: the ABI cannot be encoded or decoded reliably.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running validation checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors that indicate an invalid ABI.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(abi: Abi) -> ValidationResult:
    """Run all validation checks on an ABI.

    Checks performed:

    1. **Duplicate names** (error): two aliases, structs, variants, actions,
       tables or clauses with the same name. Lookups only ever see the first.

    2. **Shadowed definitions** (warning): a name declared as more than one
       kind of type. Aliases win over structs, which win over variants.

    3. **Circular struct bases** (error): a base chain that loops back on
       itself. Such structs silently resolve to no fields.

    4. **Unknown base structs** (warning): a ``base`` that names no struct.
       Flattening stops there, dropping any fields the base was meant to add.

    5. **Circular aliases** (error): aliases that eventually alias themselves.

    6. **Unknown types** (warning for fields, alias targets and variant
       alternatives; error for action and table types): a referenced base
       type that is neither declared nor builtin.

    7. **Duplicate variant alternatives** (warning): a variant listing the same
       alternative twice, which makes the later tag unreachable.

    Args:
        abi: The ABI to validate.

    Returns:
        A :class:`ValidationResult`. An empty result means the ABI is valid.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    errors.extend(_check_duplicate_names(abi))
    warnings.extend(_check_shadowed_definitions(abi))
    errors.extend(_check_struct_base_cycles(abi))
    warnings.extend(_check_unknown_bases(abi))
    errors.extend(_check_alias_cycles(abi))
    unknown_warnings, unknown_errors = _check_unknown_types(abi)
    warnings.extend(unknown_warnings)
    errors.extend(unknown_errors)
    warnings.extend(_check_duplicate_alternatives(abi))

    return ValidationResult(warnings=warnings, errors=errors)


def check_variant_class(abi: Abi, variant_cls: HasVariantAlternatives) -> list[ValidationError]:
    """Check that a variant class declares the same alternatives, in the same order, as the ABI.

    Args:
        abi: The ABI that declares the variant type.
        variant_cls: A variant class registered with
            :func:`~chainabi.chain.variant.variant_type`.

    Returns:
        A list of errors; empty if the class matches the ABI declaration.
    """
    variant = abi.get_variant(variant_cls.abi_name)
    if variant is None:
        return [ValidationError(f"Variant '{variant_cls.abi_name}' is not declared in the ABI.")]
    declared = [abi_type_string(d) for d in variant_cls.abi_variant]
    if declared != variant.types:
        return [
            ValidationError(
                f"Variant '{variant_cls.abi_name}' alternatives {declared} do not match the ABI order {variant.types}."
            )
        ]
    return []


# ################
# Implementation
# ################


def _duplicates(names: list[str]) -> list[str]:
    """Return each name that appears more than once, in first-repeat order."""
    seen: set[str] = set()
    reported: list[str] = []
    for name in names:
        if name in seen:
            if name not in reported:
                reported.append(name)
        else:
            seen.add(name)
    return reported


def _detect_cycle(graph: dict[str, list[str]]) -> list[str] | None:
    """Detect a cycle in a directed graph using DFS.

    Uses a three-colour marking scheme (white/grey/black) to distinguish
    unvisited, in-progress, and fully-explored nodes.

    Returns:
        The node names forming the cycle with the start node repeated at the
        end (e.g. ``["A", "B", "A"]``), or ``None`` if the graph is acyclic.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    color: dict[str, int] = {}
    path: list[str] = []

    def _dfs(node: str) -> list[str] | None:
        color[node] = GREY
        path.append(node)
        for neighbor in graph.get(node, []):
            state = color.get(neighbor, WHITE)
            if state == GREY:
                cycle_start = path.index(neighbor)
                return path[cycle_start:] + [neighbor]
            if state == WHITE:
                result = _dfs(neighbor)
                if result is not None:
                    return result
        path.pop()
        color[node] = BLACK
        return None

    for node in graph:
        if color.get(node, WHITE) == WHITE:
            result = _dfs(node)
            if result is not None:
                return result
    return None


def _check_duplicate_names(abi: Abi) -> list[ValidationError]:
    errors: list[ValidationError] = []
    groups: list[tuple[str, list[str]]] = [
        ("type alias", [t.new_type_name for t in abi.types]),
        ("struct", [s.name for s in abi.structs]),
        ("variant", [v.name for v in abi.variants]),
        ("action", [a.name for a in abi.actions]),
        ("table", [t.name for t in abi.tables]),
        ("ricardian clause", [c.id for c in abi.ricardian_clauses]),
    ]
    for kind, names in groups:
        for name in _duplicates(names):
            errors.append(ValidationError(f"Duplicate {kind} name '{name}'."))
    return errors


def _check_shadowed_definitions(abi: Abi) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    alias_names = {t.new_type_name for t in abi.types}
    struct_names = {s.name for s in abi.structs}
    variant_names = {v.name for v in abi.variants}
    for name in sorted(alias_names & struct_names):
        warnings.append(ValidationWarning(f"'{name}' is declared as both a type alias and a struct; the alias is used."))
    for name in sorted(alias_names & variant_names):
        warnings.append(ValidationWarning(f"'{name}' is declared as both a type alias and a variant; the alias is used."))
    for name in sorted((struct_names & variant_names) - alias_names):
        warnings.append(ValidationWarning(f"'{name}' is declared as both a struct and a variant; the struct is used."))
    return warnings


def _check_struct_base_cycles(abi: Abi) -> list[ValidationError]:
    errors: list[ValidationError] = []
    reported: set[frozenset[str]] = set()
    for struct in abi.structs:
        try:
            abi.resolve_struct(struct.name, strict=True)
        except CircularStructBaseError as exc:
            cycle = exc.path[exc.path.index(exc.path[-1]) :]
            key = frozenset(cycle)
            if key in reported:
                continue
            reported.add(key)
            errors.append(ValidationError(f"Circular struct base chain: {' -> '.join(cycle)}."))
    return errors


def _check_unknown_bases(abi: Abi) -> list[ValidationWarning]:
    struct_names = {s.name for s in abi.structs}
    return [
        ValidationWarning(f"Struct '{s.name}' has base '{s.base}', which is not a declared struct.")
        for s in abi.structs
        if s.base and s.base not in struct_names
    ]


def _check_alias_cycles(abi: Abi) -> list[ValidationError]:
    alias_names = {t.new_type_name for t in abi.types}
    graph: dict[str, list[str]] = {}
    for alias in abi.types:
        target = parse_type_name(alias.type).name
        graph.setdefault(alias.new_type_name, [])
        if target in alias_names:
            graph[alias.new_type_name].append(target)
    errors: list[ValidationError] = []
    # Break each cycle at its closing edge so the next search finds a different one.
    cycle = _detect_cycle(graph)
    while cycle is not None:
        errors.append(ValidationError(f"Circular type alias chain: {' -> '.join(cycle)}."))
        graph[cycle[-2]].remove(cycle[-1])
        cycle = _detect_cycle(graph)
    return errors


def _check_unknown_types(abi: Abi) -> tuple[list[ValidationWarning], list[ValidationError]]:
    known = (
        set(BUILTIN_TYPE_NAMES)
        | {t.new_type_name for t in abi.types}
        | {s.name for s in abi.structs}
        | {v.name for v in abi.variants}
    )

    def _is_known(type_name: str) -> bool:
        return parse_type_name(type_name).name in known

    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []
    for struct in abi.structs:
        for f in struct.fields:
            if not _is_known(f.type):
                warnings.append(
                    ValidationWarning(f"Unknown type '{f.type}' in field '{f.name}' of struct '{struct.name}'.")
                )
    for alias in abi.types:
        if not _is_known(alias.type):
            warnings.append(ValidationWarning(f"Type alias '{alias.new_type_name}' refers to unknown type '{alias.type}'."))
    for variant in abi.variants:
        for alternative in variant.types:
            if not _is_known(alternative):
                warnings.append(ValidationWarning(f"Unknown type '{alternative}' in variant '{variant.name}'."))
    for action in abi.actions:
        if not _is_known(action.type):
            errors.append(ValidationError(f"Action '{action.name}' has unknown payload type '{action.type}'."))
    for table in abi.tables:
        if not _is_known(table.type):
            errors.append(ValidationError(f"Table '{table.name}' has unknown row type '{table.type}'."))
    return warnings, errors


def _check_duplicate_alternatives(abi: Abi) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    for variant in abi.variants:
        for alternative in _duplicates(variant.types):
            warnings.append(ValidationWarning(f"Variant '{variant.name}' lists alternative '{alternative}' more than once."))
    return warnings
