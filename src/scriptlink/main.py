#!/usr/bin/env python3
"""
ScriptLink - daemon entry point
"""

import argparse
import logging
import os
import signal
import sys
from typing import List, Optional

from .controller import ScriptLinkController

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(log_level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, log_level), format=LOG_FORMAT)


def run_controller(config_path: str) -> int:
    """
    Run a controller until SIGINT/SIGTERM.

    Returns:
        Process exit code
    """
    logger = logging.getLogger(__name__)

    config_path = os.path.expanduser(config_path)
    if not os.path.exists(config_path):
        logger.error(f"Configuration file not found: {config_path}")
        return 1

    controller = ScriptLinkController(config_path)

    def signal_handler(signum, frame):
        """Handle shutdown signals gracefully"""
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        controller.running = False
        controller.shutting_down = True
        raise KeyboardInterrupt()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        controller.run()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point"""
    parser = argparse.ArgumentParser(description="ScriptLink - script-driven Stream Deck buttons")
    parser.add_argument("config", help="Path to YAML configuration file")
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, help="Logging level")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    sys.exit(run_controller(args.config))


if __name__ == "__main__":
    main()
