#!/usr/bin/env python3

import yaml

from logger import get_logger

logger = get_logger()


def cmd_show(args, services):
    """Show the locally stored application settings."""
    settings = services.settings.load()

    if not settings:
        logger.info("No settings stored.")
        return

    logger.info("\nSettings:")
    logger.info("=" * 80)
    logger.info(yaml.safe_dump(settings, sort_keys=False, allow_unicode=True).rstrip())


def setup_parser(subparsers):
    """Setup settings subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "settings",
        help="Inspect application settings",
        description="Inspect locally stored application settings",
    )

    settings_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available settings commands",
        dest="subcommand",
        required=True,
    )

    show_parser = settings_subparsers.add_parser("show", help="Show stored settings")
    show_parser.set_defaults(func=cmd_show)
