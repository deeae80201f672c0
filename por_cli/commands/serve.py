"""
CLI Serve Command

Run the HTTP API with uvicorn.

Usage:
    por serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import logging
from argparse import Namespace

import uvicorn

from core.config.runtime import set_default_config
from por_cli.commands.common import EXIT_SUCCESS, effective_config


logger = logging.getLogger(__name__)


def serve_cmd(args: Namespace) -> int:
    """Execute the serve command."""
    config = effective_config(args)
    host = args.host or config.server.host
    port = args.port or config.server.port

    set_default_config(config)

    # Imported after set_default_config so the app picks up this config
    from api.app import app

    logger.info("Proof of Reserve API server starting on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())
    return EXIT_SUCCESS
