"""
CLI Verify Command

Recompute the root from an account and its proof, and compare it with
a published root (the current registry root by default).

Usage:
    por verify --id 1 --balance 1111 --proof '[["04bd..", 1], ...]' [--root HEX] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.reserve import Account, InvalidProofError
from por_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    build_service,
)


def load_proof_arg(value: str) -> list[Any]:
    """
    Parse the --proof argument: inline JSON, or @path to a JSON file.

    A full proof response ({"balance": ..., "proof": [...]}) is accepted too.
    """
    text = Path(value[1:]).read_text(encoding="utf-8") if value.startswith("@") else value
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("proof", [])
    if not isinstance(data, list):
        raise ValueError("Proof must be a JSON list of [hash, position] pairs")
    return data


def verify_cmd(args: Namespace) -> int:
    """Execute the verify command."""
    try:
        proof = load_proof_arg(args.proof)
    except (OSError, ValueError) as e:
        print(f"Error: Invalid proof argument: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    service = build_service(args)
    account = Account(id=args.id, balance=args.balance)

    try:
        computed, expected, ok = service.check_proof(account, proof, args.root)
    except InvalidProofError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "ok": ok,
            "computedRoot": computed,
            "expectedRoot": expected,
        }, indent=2))
    else:
        print(f"computed_root: {computed}")
        print(f"expected_root: {expected}")
        print(f"ok: {str(ok).lower()}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
