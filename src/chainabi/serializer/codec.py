# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Binary codec interface consumed by chainabi.

chainabi does not encode or decode bytes itself. A binary codec walks the
:class:`~chainabi.model.types.ResolvedType` graphs built by
:meth:`chainabi.chain.abi.Abi.resolve_type` and is installed here so that
runtime values (variants in particular) can fall back to comparing their
encoded bytes.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol, runtime_checkable

# ###############
# Public Interface
# ###############


class CodecNotConfiguredError(RuntimeError):
    """Raised when an operation needs the binary codec but none is installed."""


@runtime_checkable
class AbiCodec(Protocol):
    """A binary codec driven by resolved ABI types."""

    def encode(self, value: Any) -> bytes:
        """Encode a typed runtime value to its binary form."""
        ...

    def decode(self, data: Any, type: Any) -> Any:
        """Decode *data* (bytes or a JSON-like object) into an instance of *type*."""
        ...


class ResolvedVariant(NamedTuple):
    """Variant data already resolved by a codec: the alternative's tag and its decoded value."""

    tag: str
    value: Any


def use_codec(codec: AbiCodec | None) -> AbiCodec | None:
    """Install *codec* as the active binary codec and return the previous one.

    Passing ``None`` uninstalls the current codec.
    """
    global _codec
    previous = _codec
    _codec = codec
    return previous


def get_codec() -> AbiCodec:
    """Return the active binary codec.

    Raises:
        CodecNotConfiguredError: If no codec has been installed with :func:`use_codec`.
    """
    if _codec is None:
        raise CodecNotConfiguredError("No ABI codec installed; call chainabi.serializer.use_codec() first")
    return _codec


# ################
# Implementation
# ################

_codec: AbiCodec | None = None
