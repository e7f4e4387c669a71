#!/usr/bin/env python3
"""
TaskDesk API server.

Runs the FastAPI app with uvicorn.
"""

import argparse
import logging
import sys

import uvicorn

from taskdesk.config import load_config


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def main():
    config = load_config()

    parser = argparse.ArgumentParser(
        description="TaskDesk task management API"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=config.api.host,
        help=f"Interface to bind (default: {config.api.host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.api.port,
        help=f"Port to listen on (default: {config.api.port})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    logger.info(f"Starting TaskDesk API on http://{args.host}:{args.port}")
    logger.info(f"Data directory: {config.storage.data_dir}")

    try:
        uvicorn.run(
            "api.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level="debug" if args.verbose else "info"
        )
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
