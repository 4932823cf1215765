# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reading and writing ABI documents on disk.

ABI documents are usually JSON (``*.abi`` or ``*.json``); files with a
``.yaml`` or ``.yml`` suffix are read and written as YAML instead.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from chainabi.chain.abi import Abi, AbiDefinitionError

# ###############
# Public Interface
# ###############

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class AbiLoadError(Exception):
    """Raised when an ABI file cannot be read, written, or parsed."""


def load_abi(path: Path) -> Abi:
    """Load an ABI document from disk.

    An empty file is treated as an empty ABI document.

    Args:
        path: Path to the ABI file.

    Returns:
        The loaded :class:`Abi`.

    Raises:
        AbiLoadError: If the file cannot be read, is not valid JSON/YAML, or
            does not describe an ABI.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise AbiLoadError(f"ABI file not found: {path}") from None
    except OSError as exc:
        raise AbiLoadError(f"Cannot read ABI file '{path}': {exc}") from exc

    return _parse_abi(text, source_label=str(path), as_yaml=path.suffix.lower() in YAML_SUFFIXES)


def save_abi(abi: Abi, path: Path) -> None:
    """Write an ABI document to disk, creating parent directories as needed.

    Args:
        abi: The ABI to write.
        path: Destination path. The suffix selects YAML or JSON output.

    Raises:
        AbiLoadError: If the file cannot be written.
    """
    data = abi.to_dict()
    if path.suffix.lower() in YAML_SUFFIXES:
        text = yaml.dump(data, default_flow_style=False, sort_keys=False)
    else:
        text = json.dumps(data, indent=2) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise AbiLoadError(f"Cannot write ABI file '{path}': {exc}") from exc


# ################
# Implementation
# ################


def _parse_abi(text: str, source_label: str = "<string>", *, as_yaml: bool = False) -> Abi:
    """Parse ABI document text into an :class:`Abi`.

    Args:
        text: Raw JSON or YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).
        as_yaml: Parse *text* as YAML rather than JSON.

    Raises:
        AbiLoadError: If the text is malformed or is not an ABI mapping.
    """
    if not text.strip():
        return Abi()

    if as_yaml:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise AbiLoadError(f"Invalid YAML in {source_label}: {exc}") from exc
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise AbiLoadError(f"Invalid JSON in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise AbiLoadError(f"{source_label}: ABI document must be a mapping")

    try:
        return Abi.from_(data)
    except AbiDefinitionError as exc:
        raise AbiLoadError(f"{source_label}: {exc}") from exc
