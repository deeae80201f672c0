"""
CLI command modules.
"""

from por_cli.commands import root, proof, verify, serve

__all__ = ["root", "proof", "verify", "serve"]
