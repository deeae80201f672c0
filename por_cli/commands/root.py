"""
CLI Root Command

Print the Merkle root over the account registry.

Usage:
    por root [--accounts FILE] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from por_cli.commands.common import EXIT_SUCCESS, build_service


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    service = build_service(args)
    root_hex = service.compute_root_hex()
    logger.info("Computed root over %d accounts", len(service.registry))

    if args.json:
        print(json.dumps({
            "merkleRoot": root_hex,
            "accounts": len(service.registry),
        }, indent=2))
    else:
        print(root_hex)

    return EXIT_SUCCESS
