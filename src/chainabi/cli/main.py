# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the chainabi command-line interface."""

import argparse
import json
import sys
from pathlib import Path

from chainabi.chain.abi import Abi
from chainabi.chain.loader import AbiLoadError, load_abi
from chainabi.model.types import ResolvedType
from chainabi.serializer.graph import graph_to_dict
from chainabi.validation.checks import validate

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the chainabi CLI."""
    parser = argparse.ArgumentParser(
        prog="chainabi",
        description="chainabi - ABI schema resolution tool",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # resolve subcommand
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the resolved type graph of a type",
        description="Resolve a type name against an ABI and print the resulting type graph.",
    )
    resolve_parser.add_argument("abi_file", help="Path to the ABI document (JSON or YAML)")
    resolve_parser.add_argument("type_name", help="Type name to resolve, e.g. 'transfer' or 'asset[]'")
    resolve_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the graph as JSON instead of an indented tree",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check the consistency of an ABI",
        description="Report circular definitions, unknown types and duplicate names in an ABI.",
    )
    check_parser.add_argument("abi_file", help="Path to the ABI document (JSON or YAML)")

    # action-type subcommand
    action_type_parser = subparsers.add_parser(
        "action-type",
        help="Print the payload type of an action",
        description="Look up an action by name and print the type of its payload.",
    )
    action_type_parser.add_argument("abi_file", help="Path to the ABI document (JSON or YAML)")
    action_type_parser.add_argument("action", help="Action name")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "resolve":
        return _cmd_resolve(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "action-type":
        return _cmd_action_type(args)
    return 0


def _load(path_arg: str) -> Abi | None:
    """Load the ABI at *path_arg*, printing an error and returning None on failure."""
    try:
        return load_abi(Path(path_arg))
    except AbiLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _cmd_resolve(args: argparse.Namespace) -> int:
    """Handle the resolve subcommand."""
    abi = _load(args.abi_file)
    if abi is None:
        return 1

    root = abi.resolve_type(args.type_name)
    if args.json:
        print(json.dumps(graph_to_dict(root), indent=2))
    else:
        for line in _format_tree(root):
            print(line)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    abi = _load(args.abi_file)
    if abi is None:
        return 1

    result = validate(abi)
    for warning in result.warnings:
        print(f"Warning: {warning.message}")
    for error in result.errors:
        print(f"Error: {error.message}", file=sys.stderr)

    if result.has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_action_type(args: argparse.Namespace) -> int:
    """Handle the action-type subcommand."""
    abi = _load(args.abi_file)
    if abi is None:
        return 1

    action_type = abi.get_action_type(args.action)
    if action_type is None:
        print(f"Error: action '{args.action}' is not declared in the ABI.", file=sys.stderr)
        return 1

    print(action_type)
    return 0


def _format_tree(root: ResolvedType) -> list[str]:
    """Render a resolved graph as indented lines; repeated nodes are printed once."""
    lines: list[str] = []
    expanded: set[int] = set()

    def _visit(node: ResolvedType, label: str, depth: int) -> None:
        indent = "  " * depth
        head = f"{indent}{label}{node.type_name} #{node.id}"
        if id(node) in expanded:
            lines.append(f"{head} (see above)")
            return
        expanded.add(id(node))
        if node.ref is not None:
            lines.append(f"{head} alias")
            _visit(node.ref, "", depth + 1)
        elif node.fields is not None:
            lines.append(f"{head} struct")
            for f in node.fields:
                _visit(f.type, f"{f.name}: ", depth + 1)
        elif node.variant is not None:
            lines.append(f"{head} variant")
            for index, alternative in enumerate(node.variant):
                _visit(alternative, f"[{index}] ", depth + 1)
        else:
            lines.append(head)

    _visit(root, "", 0)
    return lines
