# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Codec interface and resolved type graph serialization."""

from chainabi.serializer.codec import (
    AbiCodec,
    CodecNotConfiguredError,
    ResolvedVariant,
    get_codec,
    use_codec,
)
from chainabi.serializer.graph import (
    GRAPH_FORMAT_VERSION,
    collect_types,
    deserialize_graph,
    graph_from_dict,
    graph_to_dict,
    serialize_graph,
)

__all__ = [
    "AbiCodec",
    "CodecNotConfiguredError",
    "ResolvedVariant",
    "get_codec",
    "use_codec",
    "GRAPH_FORMAT_VERSION",
    "collect_types",
    "graph_to_dict",
    "graph_from_dict",
    "serialize_graph",
    "deserialize_graph",
]
