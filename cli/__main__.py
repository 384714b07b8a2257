#!/usr/bin/env python3
"""
Chatport CLI - Command-line interface for importing exported chat data.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    import       Import chat data, table rows or settings
    settings     Inspect stored settings

Examples:
    python -m cli import data export.json
    python -m cli import data export.json --with-settings
    python -m cli import pg pg_export.json
    python -m cli import settings settings.json
    python -m cli settings show
"""

import sys
import argparse
from cli import imports, settings
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Chatport - Import exported chat data into the backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    imports.setup_parser(subparsers)
    settings.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()

            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)

            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
