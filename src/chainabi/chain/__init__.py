# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""ABI schema store, type resolution, names and variant values."""

from chainabi.chain.abi import Abi, AbiDefinitionError, CircularStructBaseError
from chainabi.chain.loader import AbiLoadError, load_abi, save_abi
from chainabi.chain.name import InvalidNameError, Name
from chainabi.chain.variant import (
    AbiNamed,
    HasVariantAlternatives,
    TypeDescriptor,
    UnknownVariantError,
    Variant,
    abi_type_string,
    to_type_descriptor,
    variant_type,
)

__all__ = [
    "Abi",
    "AbiDefinitionError",
    "CircularStructBaseError",
    "AbiLoadError",
    "load_abi",
    "save_abi",
    "Name",
    "InvalidNameError",
    "AbiNamed",
    "HasVariantAlternatives",
    "TypeDescriptor",
    "UnknownVariantError",
    "Variant",
    "abi_type_string",
    "to_type_descriptor",
    "variant_type",
]
