# installer/preflight.py
# -*- coding: utf-8 -*-
"""
Checks run before any component: privileges, operating system, required
tools and the presence of the repository's configs/ and assets/ content.
Any failed check raises PreflightError and nothing is changed on the system.
"""

import logging
from pathlib import Path
from typing import List, Optional

from common.command_utils import command_exists, get_symbols, log_message
from common.prompt_utils import ask_confirmation
from common.system_utils import is_arch_linux, is_root, read_os_release, reexec_with_sudo
from installer.config import ASSETS_DIR, CONFIGS_DIR, OS_RELEASE_PATH
from installer.config_models import AppSettings, SourceKind

module_logger = logging.getLogger(__name__)


class InstallerError(Exception):
    """Base class for errors that stop the installer."""


class PreflightError(InstallerError):
    """A pre-run check failed."""


def check_root(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Require root. With auto_elevate the process is replaced by the same
    invocation under 'sudo -E'.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if is_root():
        return
    if app_settings.auto_elevate:
        log_message(
            "Not running as root, re-executing with sudo...",
            "warning",
            logger_to_use,
            app_settings,
        )
        reexec_with_sudo()
    raise PreflightError(
        "This script must be run as root. Try again with 'sudo'."
    )


def check_os(
    app_settings: AppSettings,
    os_release_path: Path = OS_RELEASE_PATH,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """Warn on anything other than Arch Linux and let the user decide."""
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    os_release = read_os_release(os_release_path)
    if os_release is None:
        log_message(
            f"{symbols.get('error', '')} Unable to determine OS: {os_release_path} not found.",
            "error",
            logger_to_use,
            app_settings,
        )
    elif is_arch_linux(os_release):
        log_message(
            f"{symbols.get('success', '')} Arch Linux detected. Proceeding.",
            "success",
            logger_to_use,
            app_settings,
        )
        return
    else:
        pretty = os_release.get("PRETTY_NAME") or os_release.get("ID", "unknown")
        log_message(
            f"{symbols.get('warning', '')} This script is designed for Arch Linux. Detected: {pretty}",
            "warning",
            logger_to_use,
            app_settings,
        )

    if not ask_confirmation("Continue anyway?", app_settings, logger_to_use):
        raise PreflightError("Unsupported operating system.")


def check_required_tools(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    missing = [tool for tool in app_settings.required_tools if not command_exists(tool)]
    if missing:
        for tool in missing:
            log_message(
                f"'{tool}' is not installed. Install it with 'sudo pacman -S {tool}'.",
                "error",
                logger_to_use,
                app_settings,
            )
        raise PreflightError(f"Missing required tools: {', '.join(missing)}")


def check_repository_layout(
    app_settings: AppSettings,
    components: List[str],
    configs_dir: Path = CONFIGS_DIR,
    assets_dir: Path = ASSETS_DIR,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Ensure the files the selected components read from the repository exist:
    configs/ for dotfiles and local archives for archive-based themes.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if "dotfiles" in components and not configs_dir.is_dir():
        log_message(
            f"Directory '{configs_dir}' not found. Make sure you cloned the full repository.",
            "error",
            logger_to_use,
            app_settings,
        )
        raise PreflightError(f"Missing configuration directory: {configs_dir}")

    missing_archives = []
    for component, theme in (
        ("gtk_theme", app_settings.gtk_theme),
        ("icon_theme", app_settings.icon_theme),
    ):
        if component not in components or theme.kind != SourceKind.ARCHIVE:
            continue
        archive_path = assets_dir / theme.archive
        if not archive_path.is_file():
            log_message(
                f"Theme archive '{archive_path}' not found.",
                "error",
                logger_to_use,
                app_settings,
            )
            missing_archives.append(str(archive_path))

    if missing_archives:
        raise PreflightError(
            f"Missing theme archives: {', '.join(missing_archives)}"
        )


def run_preflight_checks(
    app_settings: AppSettings,
    components: List[str],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Run every pre-run check in order.

    Raises:
        PreflightError: A check failed or the user declined to continue.
    """
    check_root(app_settings, current_logger)
    check_os(app_settings, current_logger=current_logger)
    check_required_tools(app_settings, current_logger)
    check_repository_layout(app_settings, components, current_logger=current_logger)
