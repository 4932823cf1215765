# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the ABI validation checks."""

from chainabi.chain.abi import Abi
from chainabi.chain.variant import Variant, variant_type
from chainabi.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_variant_class,
    validate,
)

# ###############
# Test Helpers
# ###############


def _struct(name: str, base: str = "", **fields: str) -> dict:
    """Create a struct definition with the given field name/type pairs."""
    return {"name": name, "base": base, "fields": [{"name": n, "type": t} for n, t in fields.items()]}


def _alias(new_type_name: str, type_name: str) -> dict:
    return {"new_type_name": new_type_name, "type": type_name}


def _messages(items: list[ValidationWarning] | list[ValidationError]) -> list[str]:
    return [item.message for item in items]


# ###############
# Clean ABIs
# ###############


def test_empty_abi_is_valid() -> None:
    """An empty ABI has no warnings or errors."""
    result = validate(Abi.from_({}))
    assert result == ValidationResult()
    assert not result.has_errors


def test_token_abi_is_valid() -> None:
    """A well-formed ABI using builtins, aliases and variants is clean."""
    abi = Abi.from_(
        {
            "types": [_alias("account_name", "name")],
            "structs": [
                _struct("transfer", from_="account_name", to="account_name", quantity="asset", memo="string"),
                _struct("account", balance="asset"),
            ],
            "variants": [{"name": "key_or_name", "types": ["public_key", "account_name"]}],
            "actions": [{"name": "transfer", "type": "transfer"}],
            "tables": [{"name": "accounts", "type": "account"}],
        }
    )
    result = validate(abi)
    assert result.warnings == []
    assert result.errors == []


# ###############
# Duplicates and shadowing
# ###############


def test_duplicate_struct_names() -> None:
    """Two structs with the same name are an error, reported once."""
    abi = Abi.from_({"structs": [_struct("s"), _struct("s"), _struct("s")]})
    assert _messages(validate(abi).errors) == ["Duplicate struct name 's'."]


def test_duplicate_action_and_table_names() -> None:
    """Duplicate actions and tables are errors."""
    abi = Abi.from_(
        {
            "structs": [_struct("s")],
            "actions": [{"name": "go", "type": "s"}, {"name": "go", "type": "s"}],
            "tables": [{"name": "rows", "type": "s"}, {"name": "rows", "type": "s"}],
        }
    )
    errors = _messages(validate(abi).errors)
    assert "Duplicate action name 'go'." in errors
    assert "Duplicate table name 'rows'." in errors


def test_alias_shadows_struct() -> None:
    """A name declared as alias and struct is a warning."""
    abi = Abi.from_({"types": [_alias("x", "uint8")], "structs": [_struct("x")]})
    warnings = _messages(validate(abi).warnings)
    assert warnings == ["'x' is declared as both a type alias and a struct; the alias is used."]


def test_struct_shadows_variant() -> None:
    """A name declared as struct and variant is a warning."""
    abi = Abi.from_({"structs": [_struct("x")], "variants": [{"name": "x", "types": ["uint8"]}]})
    assert _messages(validate(abi).warnings) == [
        "'x' is declared as both a struct and a variant; the struct is used."
    ]


# ###############
# Circular definitions
# ###############


def test_self_base_is_error() -> None:
    """A struct that is its own base is reported."""
    abi = Abi.from_({"structs": [_struct("A", base="A", a="uint8")]})
    assert _messages(validate(abi).errors) == ["Circular struct base chain: A -> A."]


def test_mutual_base_cycle_reported_once() -> None:
    """A two-struct base cycle produces a single error."""
    abi = Abi.from_({"structs": [_struct("A", base="B"), _struct("B", base="A"), _struct("C", base="A")]})
    assert _messages(validate(abi).errors) == ["Circular struct base chain: A -> B -> A."]


def test_unknown_base_is_warning() -> None:
    """A base that names no struct is a warning."""
    abi = Abi.from_({"structs": [_struct("D", base="ghost", d="uint8")]})
    result = validate(abi)
    assert _messages(result.warnings) == ["Struct 'D' has base 'ghost', which is not a declared struct."]
    assert not result.has_errors


def test_alias_cycle_is_error() -> None:
    """Aliases that alias each other are reported."""
    abi = Abi.from_({"types": [_alias("a", "b"), _alias("b", "a[]")]})
    assert _messages(validate(abi).errors) == ["Circular type alias chain: a -> b -> a."]


def test_every_alias_cycle_is_reported() -> None:
    """Independent alias cycles are each reported once."""
    abi = Abi.from_(
        {"types": [_alias("a", "b"), _alias("b", "a"), _alias("x", "y?"), _alias("y", "x"), _alias("c", "uint8")]}
    )
    assert _messages(validate(abi).errors) == [
        "Circular type alias chain: a -> b -> a.",
        "Circular type alias chain: x -> y -> x.",
    ]


def test_recursive_struct_is_not_an_error() -> None:
    """Structs may refer to themselves through their fields."""
    abi = Abi.from_({"structs": [_struct("node", value="uint8", next="node?")]})
    assert validate(abi) == ValidationResult()


# ###############
# Unknown types
# ###############


def test_unknown_field_type_is_warning() -> None:
    """A field of an undeclared, non-builtin type is a warning."""
    abi = Abi.from_({"structs": [_struct("s", a="mystery[]")]})
    result = validate(abi)
    assert _messages(result.warnings) == ["Unknown type 'mystery[]' in field 'a' of struct 's'."]
    assert not result.has_errors


def test_unknown_alias_target_and_variant_alternative() -> None:
    """Alias targets and variant alternatives are checked too."""
    abi = Abi.from_({"types": [_alias("a", "ghost")], "variants": [{"name": "v", "types": ["int8", "phantom?"]}]})
    warnings = _messages(validate(abi).warnings)
    assert "Type alias 'a' refers to unknown type 'ghost'." in warnings
    assert "Unknown type 'phantom?' in variant 'v'." in warnings


def test_unknown_action_and_table_types_are_errors() -> None:
    """Actions and tables must refer to resolvable types."""
    abi = Abi.from_(
        {
            "actions": [{"name": "go", "type": "missing"}],
            "tables": [{"name": "rows", "type": "nowhere"}],
        }
    )
    result = validate(abi)
    assert _messages(result.errors) == [
        "Action 'go' has unknown payload type 'missing'.",
        "Table 'rows' has unknown row type 'nowhere'.",
    ]


def test_duplicate_variant_alternative_is_warning() -> None:
    """Repeating an alternative makes its second tag unreachable."""
    abi = Abi.from_({"variants": [{"name": "v", "types": ["int8", "string", "int8"]}]})
    assert _messages(validate(abi).warnings) == ["Variant 'v' lists alternative 'int8' more than once."]


# ###############
# Variant classes
# ###############


@variant_type("int_or_string", ["int8", "string"])
class IntOrString(Variant):
    pass


def test_variant_class_matches_abi() -> None:
    """A class declaring the ABI's alternatives in order is consistent."""
    abi = Abi.from_({"variants": [{"name": "int_or_string", "types": ["int8", "string"]}]})
    assert check_variant_class(abi, IntOrString) == []


def test_variant_class_order_mismatch() -> None:
    """Alternatives in a different order would shift the wire tags."""
    abi = Abi.from_({"variants": [{"name": "int_or_string", "types": ["string", "int8"]}]})
    errors = check_variant_class(abi, IntOrString)
    assert len(errors) == 1
    assert "do not match the ABI order" in errors[0].message


def test_variant_class_not_declared() -> None:
    """A class for a variant the ABI does not declare is reported."""
    errors = check_variant_class(Abi.from_({}), IntOrString)
    assert _messages(errors) == ["Variant 'int_or_string' is not declared in the ABI."]
