"""
CLI Proof Command

Print the balance and inclusion proof for one account.

Usage:
    por proof <user_id> [--accounts FILE] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from por_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, build_service


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    service = build_service(args)
    reserve_proof = service.generate_proof(args.user_id)

    if reserve_proof is None:
        print(f"Error: User not found: {args.user_id}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps(reserve_proof.model_dump(mode="json"), indent=2))
        return EXIT_SUCCESS

    print(f"user_id: {args.user_id}")
    print(f"balance: {reserve_proof.balance}")
    print(f"root: {service.compute_root_hex()}")
    print(f"proof ({len(reserve_proof.proof)} nodes):")
    for hash_hex, position in reserve_proof.proof:
        side = "left" if position == 0 else "right"
        print(f"  {hash_hex} {position} ({side})")

    return EXIT_SUCCESS
