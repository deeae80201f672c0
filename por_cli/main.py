"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m por_cli root [--accounts FILE] [--json]
    python -m por_cli proof <user_id> [--accounts FILE] [--json]
    python -m por_cli verify --id N --balance B --proof JSON [--root HEX] [--json]
    python -m por_cli serve [--host HOST] [--port PORT]
    python -m por_cli config --show

Environment Variables:
    POR_LOG_LEVEL         Log level (default: INFO)
    POR_LEAF_TAG          Leaf hash tag (default: ProofOfReserve_Leaf)
    POR_BRANCH_TAG        Branch hash tag (default: ProofOfReserve_Branch)
    POR_ACCOUNTS_FILE     JSON/YAML accounts file
    POR_HOST, POR_PORT    Server bind address
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import load_runtime_config
from por_cli.commands import root, proof, verify, serve
from por_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    effective_config,
)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_accounts_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--accounts", "-a",
        type=str,
        default=None,
        help="JSON/YAML accounts file (default: built-in accounts or POR_ACCOUNTS_FILE)",
    )


def _add_json_arg(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help=help_text,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="por",
        description="Proof of Reserve CLI - Compute Merkle roots, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./por.json or ~/.config/por/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root over all accounts",
        description="Compute the tagged Merkle root over the account registry.",
    )
    _add_accounts_arg(root_parser)
    _add_json_arg(root_parser, "Output machine-readable JSON")
    root_parser.set_defaults(func=root.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the inclusion proof for one account",
        description="Generate the balance and Merkle proof for an account id.",
    )
    proof_parser.add_argument(
        "user_id",
        type=int,
        help="Account id",
    )
    _add_accounts_arg(proof_parser)
    _add_json_arg(proof_parser, "Output the proof as JSON (same shape as the HTTP API)")
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a root",
        description="Recompute the root from an account and its proof and compare.",
    )
    verify_parser.add_argument("--id", type=int, required=True, help="Account id")
    verify_parser.add_argument("--balance", type=int, required=True, help="Claimed balance")
    verify_parser.add_argument(
        "--proof",
        type=str,
        required=True,
        help="Proof as JSON [[hash, position], ...] or @file.json",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root hex (default: current registry root)",
    )
    _add_accounts_arg(verify_parser)
    _add_json_arg(verify_parser, "Output machine-readable JSON report")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- serve command ---
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API",
        description="Serve the Proof of Reserve API with uvicorn.",
    )
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Port")
    _add_accounts_arg(serve_parser)
    serve_parser.set_defaults(func=serve.serve_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show effective configuration",
        description="Display configuration after file and environment overrides.",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(effective_config(args).to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: por config --show")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    setup_logging(level=args.log_level or config.log_level)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
