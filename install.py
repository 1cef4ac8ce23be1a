#!/usr/bin/env python3
# filename: install.py
# -*- coding: utf-8 -*-
"""
Entry point for the Hyprland rice installer.
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.core_utils import log_header, setup_logging
from common.system_utils import resolve_target_user
from installer.cli_handler import list_components, show_status, view_configuration
from installer.config import SCRIPT_VERSION
from installer.config_loader import DEFAULT_CONFIG_FILE, load_app_settings
from installer.orchestrator import ComponentOrchestrator, import_component_modules
from installer.preflight import PreflightError, run_preflight_checks
from installer.registry import ComponentRegistry

EXIT_INTERRUPTED = 130


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--noconfirm",
        action="store_true",
        help="Run without any confirmation prompt (auto mode)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--sudo",
        dest="auto_elevate",
        action="store_true",
        help="Re-run through 'sudo -E' when not started as root",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"YAML profile to load (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument("--log-file", help="Also append the log to this file")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Global options are accepted before or after the command. Without a
    command, 'apply' runs every component.
    """
    all_args = list(args) if args is not None else sys.argv[1:]

    # First, extract the global flags wherever they appear in the command
    global_parser = argparse.ArgumentParser(add_help=False)
    _add_global_options(global_parser)
    global_args, remaining_args = global_parser.parse_known_args(all_args)

    parser = argparse.ArgumentParser(
        description="Bootstrap a themed Hyprland desktop on Arch Linux"
    )
    _add_global_options(parser)
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {SCRIPT_VERSION}"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    apply_parser = subparsers.add_parser(
        "apply", help="Install and configure components (default)"
    )
    apply_parser.add_argument(
        "components",
        nargs="*",
        help="Components to apply (if none specified, all components are applied)",
    )

    subparsers.add_parser("list", help="List available components")

    status_parser = subparsers.add_parser(
        "status", help="Check status of components"
    )
    status_parser.add_argument(
        "components",
        nargs="*",
        help="Components to check (if none specified, all components will be checked)",
    )

    subparsers.add_parser(
        "view-config", help="Show the effective configuration and exit"
    )

    parsed_args = parser.parse_args(remaining_args)

    # Combine the global arguments with the subcommand arguments
    for key, value in vars(global_args).items():
        if value != global_parser.get_default(key):
            setattr(parsed_args, key, value)

    if parsed_args.command is None:
        parsed_args.command = "apply"
    if not hasattr(parsed_args, "components"):
        parsed_args.components = []
    return parsed_args


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the Hyprland rice installer."""
    parsed_args = parse_args(args)
    log_level = logging.DEBUG if parsed_args.verbose else logging.INFO

    setup_logging(log_level=log_level)
    logger = logging.getLogger("hyprrice_installer")

    try:
        app_settings = load_app_settings(
            parsed_args, parsed_args.config, current_logger=logger
        )
        # Reconfigure with the prefix and symbols from the loaded settings
        setup_logging(
            log_level=log_level,
            log_file=parsed_args.log_file,
            log_prefix=app_settings.log_prefix,
            symbols=app_settings.symbols,
        )

        if parsed_args.command == "view-config":
            view_configuration(app_settings, logger)
            return 0

        if parsed_args.command == "list":
            import_component_modules(logger)
            list_components(
                ComponentRegistry.get_all_components(), app_settings, logger
            )
            return 0

        user = resolve_target_user()
        orchestrator = ComponentOrchestrator(app_settings, user, logger)
        requested = app_settings.components or orchestrator.default_component_names()

        try:
            resolved = orchestrator.resolve_dependencies(requested)
        except KeyError as e:
            logger.error(f"Cannot resolve components: {e.args[0]}")
            return 2

        if parsed_args.command == "status":
            status = orchestrator.check_status(resolved)
            show_status(status, app_settings, logger)
            return 0 if all(
                state["installed"] and state["configured"]
                for state in status.values()
            ) else 1

        log_header(f"Hyprland rice installer {SCRIPT_VERSION} ({app_settings.theme_name})", logger)
        try:
            run_preflight_checks(app_settings, resolved, logger)
        except PreflightError as e:
            logger.critical(f"Pre-run checks failed: {e}")
            return 1

        logger.info(f"Configuring the desktop for user '{user.name}' ({user.home})")
        if not orchestrator.apply(requested):
            logger.error("Installation finished with errors. Review the log above.")
            return 1

        logger.info(
            f"{app_settings.symbols.get('rocket', '')} Installation complete. Reboot and pick Hyprland in SDDM."
        )
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except KeyError as e:
        logger.error(f"Could not resolve the target user: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
