#!/usr/bin/env python3
"""
ScriptLink CLI - command-line interface for the ScriptLink Stream Deck controller.

Besides running the daemon, the CLI helps while writing button configs:
checking a configuration, seeing how an argument string is split, and
running a button script once without a device.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .actions.registry import registry
from .config.loader import DEFAULT_ASSETS_DIR, ConfigLoader
from .main import LOG_LEVELS, run_controller, setup_logging
from .scripts.runner import ScriptRunner
from .utils.arguments import ArgumentStringParser
from .utils.colors import HTML_COLORS, generate_color_pngs
from .utils.errors import ScriptLinkError

logger = logging.getLogger(__name__)


class ScriptLinkCLI:
    """Main CLI handler for ScriptLink commands."""

    def run_daemon(self, config_path: str, log_level: str = "INFO") -> int:
        """Run the controller in the foreground."""
        setup_logging(log_level)
        return run_controller(config_path)

    def validate_config(self, config_path: str) -> int:
        """Check a configuration file, including each button's action settings."""
        try:
            config = ConfigLoader().load(config_path)
        except ScriptLinkError as e:
            print(f"✗ {e}")
            return 1

        registry.auto_discover()
        errors = []
        for number, button_config in sorted(config["buttons"].items()):
            action_config = button_config["action"]
            action = registry.get_action(action_config["type"])
            if not action:
                errors.append(f"Button {number}: unknown action type '{action_config['type']}'")
            elif not action.validate_config(action_config):
                errors.append(f"Button {number}: invalid '{action.action_type}' settings")

            style = button_config.get("style", "default")
            if style not in config["styles"]:
                errors.append(f"Button {number}: unknown style '{style}'")

        if errors:
            for error in errors:
                print(f"✗ {error}")
            return 1

        print(f"✓ Configuration is valid ({len(config['buttons'])} buttons)")
        return 0

    def show_arguments(self, literal: str) -> int:
        """Print the argument vector an argument string turns into."""
        print(json.dumps(ArgumentStringParser().parse(literal)))
        return 0

    def exec_script(
        self, script_path: str, script_arguments: Optional[str], timeout: Optional[float]
    ) -> int:
        """Run a button script once and print what the button would show."""
        runner = ScriptRunner(timeout=timeout)
        try:
            settings = runner.execute_script(script_path, script_arguments)
        except ScriptLinkError as e:
            print(f"✗ {e}")
            return 1

        print(json.dumps({"title": settings.title, "color": settings.color, "image": settings.image}))
        return 0

    def list_colors(self) -> int:
        for name, hex_color in HTML_COLORS.items():
            print(f"  {name:<14} {hex_color}")
        return 0

    def generate_colors(self, assets_dir: str, overwrite: bool = False) -> int:
        try:
            written = generate_color_pngs(assets_dir, overwrite=overwrite)
        except OSError as e:
            print(f"✗ Could not write color images: {e}")
            return 1
        print(f"Generated {len(written)} color PNG files in {assets_dir}")
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="scriptlink",
        description="ScriptLink - script-driven Stream Deck buttons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scriptlink run ~/.scriptlink/config.yaml      # Run the controller
  scriptlink validate ~/.scriptlink/config.yaml # Check a configuration
  scriptlink parse-args "'my repo' --short"     # Show how arguments are split
  scriptlink exec ~/bin/git-status --args ~/src # Run a button script once
  scriptlink colors list                        # List background color names
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run the controller")
    run_parser.add_argument("config", help="Path to configuration file")
    run_parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO", help="Logging level")

    validate_parser = subparsers.add_parser("validate", help="Validate a configuration")
    validate_parser.add_argument("config", help="Path to configuration file")

    parse_parser = subparsers.add_parser("parse-args", help="Show how an argument string is split")
    parse_parser.add_argument("arguments", help="Argument string as typed in button settings")

    exec_parser = subparsers.add_parser("exec", help="Run a button script once")
    exec_parser.add_argument("script", help="Path to the script")
    exec_parser.add_argument("--args", dest="script_arguments", help="Argument string for the script")
    exec_parser.add_argument(
        "--timeout", type=float, default=ScriptRunner.DEFAULT_TIMEOUT, help="Seconds to wait"
    )

    colors_parser = subparsers.add_parser("colors", help="Background color images")
    colors_subparsers = colors_parser.add_subparsers(dest="colors_command")
    colors_subparsers.add_parser("list", help="List available color names")
    generate_parser = colors_subparsers.add_parser("generate", help="Generate color PNG files")
    generate_parser.add_argument("--assets", default=DEFAULT_ASSETS_DIR, help="Assets directory")
    generate_parser.add_argument("--overwrite", action="store_true", help="Replace existing files")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = ScriptLinkCLI()

    if args.command == "run":
        return cli.run_daemon(args.config, args.log_level)

    elif args.command == "validate":
        return cli.validate_config(args.config)

    elif args.command == "parse-args":
        return cli.show_arguments(args.arguments)

    elif args.command == "exec":
        return cli.exec_script(args.script, args.script_arguments, args.timeout)

    elif args.command == "colors":
        if args.colors_command == "list":
            return cli.list_colors()
        elif args.colors_command == "generate":
            return cli.generate_colors(args.assets, args.overwrite)
        parser.print_help()
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
