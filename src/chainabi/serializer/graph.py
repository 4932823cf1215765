# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of resolved type graphs.

Graphs can be cyclic, so nodes are stored in a flat table keyed by their id
and link to each other by id. The format is versioned so future changes can
be detected.
"""

from __future__ import annotations

import json
from typing import Any

from chainabi.model.types import ResolvedField, ResolvedType

# ###############
# Public Interface
# ###############

GRAPH_FORMAT_VERSION = "1"


def collect_types(root: ResolvedType) -> list[ResolvedType]:
    """Return every node reachable from *root*, ordered by id."""
    seen: dict[int, ResolvedType] = {}
    stack = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen[id(node)] = node
        if node.ref is not None:
            stack.append(node.ref)
        if node.fields is not None:
            stack.extend(f.type for f in node.fields)
        if node.variant is not None:
            stack.extend(node.variant)
    return sorted(seen.values(), key=lambda n: n.id)


def graph_to_dict(root: ResolvedType) -> dict[str, Any]:
    """Flatten the graph reachable from *root* into a JSON-compatible dict."""
    return {
        "v": GRAPH_FORMAT_VERSION,
        "root": root.id,
        "types": [_node_to_dict(node) for node in collect_types(root)],
    }


def graph_from_dict(obj: dict[str, Any]) -> ResolvedType:
    """Rebuild a linked graph from the output of :func:`graph_to_dict`.

    Raises:
        ValueError: If the format version is not recognised or a link points
            to an id that is not in the table.
    """
    version = obj.get("v")
    if version != GRAPH_FORMAT_VERSION:
        raise ValueError(f"Unsupported graph format version: {version!r}")

    nodes: dict[int, ResolvedType] = {}
    for entry in obj.get("types", []):
        nodes[entry["id"]] = ResolvedType(
            name=entry["name"],
            id=entry["id"],
            is_array=entry.get("array", False),
            is_optional=entry.get("optional", False),
            is_extension=entry.get("extension", False),
        )

    def _lookup(type_id: int) -> ResolvedType:
        try:
            return nodes[type_id]
        except KeyError:
            raise ValueError(f"Graph references unknown type id {type_id}") from None

    for entry in obj.get("types", []):
        node = nodes[entry["id"]]
        if "ref" in entry:
            node.ref = _lookup(entry["ref"])
        elif "fields" in entry:
            node.fields = [ResolvedField(name=name, type=_lookup(type_id)) for name, type_id in entry["fields"]]
        elif "variant" in entry:
            node.variant = [_lookup(type_id) for type_id in entry["variant"]]

    return _lookup(obj["root"])


def serialize_graph(root: ResolvedType) -> str:
    """Serialize the graph reachable from *root* to a compact JSON string."""
    return json.dumps(graph_to_dict(root), separators=(",", ":"))


def deserialize_graph(data: str) -> ResolvedType:
    """Deserialize a graph from a JSON string produced by :func:`serialize_graph`."""
    return graph_from_dict(json.loads(data))


# ################
# Implementation
# ################


def _node_to_dict(node: ResolvedType) -> dict[str, Any]:
    d: dict[str, Any] = {"id": node.id, "name": node.name}
    if node.is_array:
        d["array"] = True
    if node.is_optional:
        d["optional"] = True
    if node.is_extension:
        d["extension"] = True
    if node.ref is not None:
        d["ref"] = node.ref.id
    elif node.fields is not None:
        d["fields"] = [[f.name, f.type.id] for f in node.fields]
    elif node.variant is not None:
        d["variant"] = [v.id for v in node.variant]
    return d
