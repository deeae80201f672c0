"""
Proof of Reserve CLI

Command-line interface for computing and checking reserve commitments.

Usage:
    python -m por_cli root
    python -m por_cli proof 3
    python -m por_cli verify --id 3 --balance 3333 --proof '[["ab..", 1]]'
    python -m por_cli serve --port 3000
"""

__version__ = "0.1.0"
