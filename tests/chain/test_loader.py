# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for reading and writing ABI files."""

import json
from pathlib import Path

import pytest

from chainabi.chain.abi import Abi
from chainabi.chain.loader import AbiLoadError, load_abi, save_abi

# ###############
# Helpers
# ###############

_TOKEN_ABI = {
    "version": "eosio::abi/1.1",
    "types": [],
    "structs": [
        {
            "name": "transfer",
            "base": "",
            "fields": [
                {"name": "from", "type": "name"},
                {"name": "to", "type": "name"},
                {"name": "quantity", "type": "asset"},
                {"name": "memo", "type": "string"},
            ],
        }
    ],
    "actions": [{"name": "transfer", "type": "transfer", "ricardian_contract": ""}],
    "tables": [],
    "ricardian_clauses": [],
    "error_messages": [],
    "abi_extensions": [],
    "variants": [],
}


def _write(tmp_path: Path, name: str, content: str) -> Path:
    """Write an ABI file and return its path."""
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


# ###############
# Normal Cases
# ###############


def test_load_json_abi(tmp_path: Path) -> None:
    """A JSON ABI file is loaded into an Abi."""
    abi = load_abi(_write(tmp_path, "token.abi", json.dumps(_TOKEN_ABI)))

    assert isinstance(abi, Abi)
    assert abi.get_action_type("transfer") == "transfer"
    assert [f.name for f in abi.resolve_struct("transfer")] == ["from", "to", "quantity", "memo"]


def test_load_yaml_abi(tmp_path: Path) -> None:
    """A .yaml file is parsed as YAML."""
    content = """\
version: eosio::abi/1.1
structs:
  - name: greeting
    fields:
      - name: text
        type: string
"""
    abi = load_abi(_write(tmp_path, "hello.yaml", content))

    assert abi.get_struct("greeting").fields[0].type == "string"
    assert abi.actions == []


def test_load_empty_file(tmp_path: Path) -> None:
    """An empty file is an empty ABI."""
    abi = load_abi(_write(tmp_path, "empty.json", ""))
    assert abi.version == Abi.DEFAULT_VERSION
    assert abi.structs == []


def test_save_and_reload_json(tmp_path: Path) -> None:
    """A saved ABI reloads to an equal ABI."""
    abi = Abi.from_(_TOKEN_ABI)
    path = tmp_path / "out" / "token.json"
    save_abi(abi, path)

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == "eosio::abi/1.1"
    assert load_abi(path) == abi


def test_save_and_reload_yaml(tmp_path: Path) -> None:
    """YAML output reloads to an equal ABI."""
    abi = Abi.from_(_TOKEN_ABI)
    path = tmp_path / "token.yml"
    save_abi(abi, path)

    assert load_abi(path) == abi


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    """A missing file raises AbiLoadError."""
    with pytest.raises(AbiLoadError, match="not found"):
        load_abi(tmp_path / "missing.abi")


def test_invalid_json(tmp_path: Path) -> None:
    """Malformed JSON raises AbiLoadError."""
    with pytest.raises(AbiLoadError, match="Invalid JSON"):
        load_abi(_write(tmp_path, "bad.json", "{"))


def test_invalid_yaml(tmp_path: Path) -> None:
    """Malformed YAML raises AbiLoadError."""
    with pytest.raises(AbiLoadError, match="Invalid YAML"):
        load_abi(_write(tmp_path, "bad.yaml", "structs: [unclosed\n"))


def test_non_mapping_document(tmp_path: Path) -> None:
    """A document that is not a mapping is rejected."""
    with pytest.raises(AbiLoadError, match="mapping"):
        load_abi(_write(tmp_path, "list.json", "[]"))


def test_wrong_structure(tmp_path: Path) -> None:
    """A document with malformed definitions is rejected."""
    with pytest.raises(AbiLoadError):
        load_abi(_write(tmp_path, "bad.json", json.dumps({"structs": [{"fields": "nope"}]})))
