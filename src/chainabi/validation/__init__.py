# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for ABI documents (circular bases, unknown types, etc.)."""

from chainabi.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_variant_class,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_variant_class",
    "validate",
]
