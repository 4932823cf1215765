# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime tagged-union values bound to a declared list of alternatives.

A concrete variant class registers its ordered alternatives with
:func:`variant_type`. The position of an alternative in that list is its
wire tag, matching the order the ABI declares for the variant type::

    @variant_type("key_or_name", ["public_key", "name"])
    class KeyOrName(Variant):
        pass

    KeyOrName("name", "alice").variant_idx  # 1

The JSON form of a variant is the pair ``[tag, value]``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, TypeVar, runtime_checkable

from chainabi.model.types import parse_type_name, render_type_name
from chainabi.serializer.codec import ResolvedVariant, get_codec

# ###############
# Public Interface
# ###############


class UnknownVariantError(ValueError):
    """Raised when a variant is constructed with a tag it does not declare.

    Attributes:
        tag: The rejected tag.
        variant_name: The ABI name of the variant type.
    """

    def __init__(self, tag: str, variant_name: str) -> None:
        self.tag = tag
        self.variant_name = variant_name
        super().__init__(f"Unknown variant {tag}")


@runtime_checkable
class AbiNamed(Protocol):
    """A class that serializes under a named ABI type."""

    abi_name: ClassVar[str]


@runtime_checkable
class HasVariantAlternatives(Protocol):
    """A class that declares an ordered list of variant alternatives."""

    abi_name: ClassVar[str]
    abi_variant: ClassVar[tuple[TypeDescriptor, ...]]


@dataclass(frozen=True)
class TypeDescriptor:
    """An ABI type reference: a type name or ABI-named class plus modifiers."""

    type: str | type
    optional: bool = False
    array: bool = False
    extension: bool = False


def to_type_descriptor(value: str | type | TypeDescriptor | Mapping[str, Any]) -> TypeDescriptor:
    """Normalize a type reference into a :class:`TypeDescriptor`.

    Args:
        value: A type name (suffixes allowed, e.g. ``"asset[]"``), a class
            exposing ``abi_name``, an existing descriptor, or a mapping with a
            ``type`` key and optional ``optional``/``array``/``extension`` flags.

    Raises:
        TypeError: If *value* is none of the supported forms.
    """
    if isinstance(value, TypeDescriptor):
        return value
    if isinstance(value, str):
        parsed = parse_type_name(value)
        return TypeDescriptor(
            type=parsed.name,
            optional=parsed.is_optional,
            array=parsed.is_array,
            extension=parsed.is_extension,
        )
    if isinstance(value, type) and isinstance(value, AbiNamed):
        return TypeDescriptor(type=value)
    if isinstance(value, Mapping) and "type" in value:
        return TypeDescriptor(
            type=value["type"],
            optional=bool(value.get("optional", False)),
            array=bool(value.get("array", False)),
            extension=bool(value.get("extension", False)),
        )
    raise TypeError(f"Cannot use {value!r} as an ABI type")


def abi_type_string(descriptor: TypeDescriptor) -> str:
    """Render a descriptor as its canonical type name, e.g. ``"asset[]?"``."""
    name = descriptor.type if isinstance(descriptor.type, str) else descriptor.type.abi_name
    return render_type_name(name, descriptor.array, descriptor.optional, descriptor.extension)


V = TypeVar("V", bound="Variant")


def variant_type(
    name: str,
    types: Sequence[str | type | TypeDescriptor | Mapping[str, Any]],
) -> Callable[[type[V]], type[V]]:
    """Class decorator registering the ABI name and ordered alternatives of a variant class."""

    def decorator(cls: type[V]) -> type[V]:
        cls.abi_name = name
        cls.abi_variant = tuple(to_type_descriptor(t) for t in types)
        return cls

    return decorator


class Variant:
    """Base class for runtime variant values.

    Attributes:
        value: The payload of the selected alternative.
        variant_idx: Position of the selected alternative in ``abi_variant``.
    """

    abi_name: ClassVar[str] = ""
    abi_variant: ClassVar[tuple[TypeDescriptor, ...]] = ()

    def __init__(self, tag: str, value: Any) -> None:
        alternatives = type(self).abi_variant
        variant_idx = next(
            (i for i, descriptor in enumerate(alternatives) if abi_type_string(descriptor) == tag),
            -1,
        )
        if not 0 <= variant_idx < len(alternatives):
            raise UnknownVariantError(tag, type(self).abi_name)
        self.value = value
        self.variant_idx = variant_idx

    @classmethod
    def from_(cls: type[V], obj: Any) -> V:
        """Coerce *obj* into an instance of this variant class.

        Instances are returned unchanged. Codec output (:class:`ResolvedVariant`)
        and ``[tag, value]`` pairs are wrapped as-is; anything else is handed to
        the installed codec to decode.

        Raises:
            UnknownVariantError: If the tag is not one of the declared alternatives.
            CodecNotConfiguredError: If *obj* needs decoding and no codec is installed.
        """
        if isinstance(obj, ResolvedVariant):
            return cls(obj.tag, obj.value)
        if isinstance(obj, cls):
            return obj
        if _is_tagged_pair(obj):
            return cls(obj[0], obj[1])
        return get_codec().decode(obj, cls)

    @property
    def variant_name(self) -> str:
        """The tag of the selected alternative."""
        return abi_type_string(type(self).abi_variant[self.variant_idx])

    def equals(self, other: Any) -> bool:
        """Return True if this variant equals *other*.

        Note: Values with the same tag are compared by their encoded bytes,
        which requires an installed codec. Subclasses should override this
        with a structural comparison when possible.
        """
        other_variant = type(self).from_(other)
        if self.variant_idx != other_variant.variant_idx:
            return False
        codec = get_codec()
        return codec.encode(self) == codec.encode(other_variant)

    def to_json(self) -> list[Any]:
        """Return the ``[tag, value]`` JSON form."""
        return [self.variant_name, self.value]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, type(self)) or _is_tagged_pair(other):
            try:
                return self.equals(other)
            except UnknownVariantError:
                return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self.variant_idx))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.variant_name!r}, {self.value!r})"


# ################
# Implementation
# ################


def _is_tagged_pair(obj: object) -> bool:
    return isinstance(obj, (list, tuple)) and len(obj) == 2 and isinstance(obj[0], str)
