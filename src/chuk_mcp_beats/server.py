#!/usr/bin/env python3
"""
Entry point for the CHUK Beats MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
from pathlib import Path
from typing import get_args

from chuk_mcp_beats.constants import Transport

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Beats MCP Server")
    parser.add_argument(
        "--transport",
        choices=list(get_args(Transport)),
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML config (default: ./beats.yaml if present)",
    )
    parser.add_argument(
        "--bpm",
        type=int,
        default=None,
        help="Default tempo for new sequences (overrides the config file)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    from chuk_mcp_beats.async_server import build_server
    from chuk_mcp_beats.config import load_config

    config = load_config(args.config)
    if args.bpm is not None:
        if args.bpm <= 0:
            parser.error(f"--bpm must be positive, got {args.bpm}")
        config = config.model_copy(update={"default_bpm": args.bpm})

    mcp = build_server(config)

    if args.transport == "stdio":
        logger.info("Starting CHUK Beats MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Beats MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
