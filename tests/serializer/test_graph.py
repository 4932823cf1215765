# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for resolved type graph serialization."""

import json

import pytest

from chainabi.chain.abi import Abi
from chainabi.serializer.graph import (
    GRAPH_FORMAT_VERSION,
    collect_types,
    deserialize_graph,
    graph_from_dict,
    graph_to_dict,
    serialize_graph,
)

# ###############
# Helpers
# ###############


def _abi() -> Abi:
    return Abi.from_(
        {
            "types": [{"new_type_name": "account_name", "type": "name"}],
            "structs": [
                {
                    "name": "node",
                    "fields": [
                        {"name": "owner", "type": "account_name"},
                        {"name": "children", "type": "node[]"},
                        {"name": "payload", "type": "payload?$"},
                    ],
                }
            ],
            "variants": [{"name": "payload", "types": ["string", "node"]}],
        }
    )


# ###############
# Flattening
# ###############


def test_collect_types_orders_by_id() -> None:
    """Every reachable node is collected once, in id order."""
    nodes = collect_types(_abi().resolve_type("node"))
    assert [n.id for n in nodes] == list(range(1, len(nodes) + 1))
    assert [n.type_name for n in nodes] == ["node", "account_name", "name", "node[]", "payload?$", "string"]


def test_graph_to_dict_links_by_id() -> None:
    """Links are stored as ids and flags only when set."""
    data = graph_to_dict(_abi().resolve_type("node"))
    assert data["v"] == GRAPH_FORMAT_VERSION
    assert data["root"] == 1
    types = {t["id"]: t for t in data["types"]}
    assert types[1] == {"id": 1, "name": "node", "fields": [["owner", 2], ["children", 4], ["payload", 5]]}
    assert types[2] == {"id": 2, "name": "account_name", "ref": 3}
    assert types[3] == {"id": 3, "name": "name"}
    assert types[4]["array"] is True
    assert types[5] == {"id": 5, "name": "payload", "optional": True, "extension": True, "variant": [6, 1]}


def test_serialize_is_compact_json() -> None:
    """Serialized output has no whitespace separators."""
    text = serialize_graph(_abi().resolve_type("uint8"))
    assert text == '{"v":"1","root":1,"types":[{"id":1,"name":"uint8"}]}'


# ###############
# Rebuilding
# ###############


def test_round_trip_preserves_links_and_cycles() -> None:
    """A deserialized graph has the same shape, including cycles."""
    root = deserialize_graph(serialize_graph(_abi().resolve_type("node")))
    assert root.type_name == "node"
    owner, children, payload = (f.type for f in root.fields)
    assert owner.ref.name == "name"
    assert children.is_array
    assert children.fields[1].type is children
    assert payload.variant[1] is root
    assert payload.is_optional and payload.is_extension


def test_unsupported_version() -> None:
    """An unknown format version is rejected."""
    with pytest.raises(ValueError, match="Unsupported graph format version"):
        graph_from_dict({"v": "99", "root": 1, "types": []})


def test_dangling_link() -> None:
    """A link to a missing id is rejected."""
    data = {"v": GRAPH_FORMAT_VERSION, "root": 1, "types": [{"id": 1, "name": "a", "ref": 2}]}
    with pytest.raises(ValueError, match="unknown type id 2"):
        deserialize_graph(json.dumps(data))
