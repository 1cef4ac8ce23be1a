# common/prompt_utils.py
# -*- coding: utf-8 -*-
"""
Interactive confirmation helpers and the confirmed command runner.

Every prompt honours AppSettings.noconfirm: when it is set no input is read
and the documented default answer is used instead.
"""

import logging
import subprocess
from typing import List, Optional

from common.command_utils import (
    get_symbols,
    log_message,
    run_elevated_command,
    run_user_command,
)
from installer.config import COLORS
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def _is_interactive(app_settings: Optional[AppSettings]) -> bool:
    return not (app_settings is not None and app_settings.noconfirm)


def ask_confirmation(
    prompt: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
    default_when_noconfirm: bool = True,
) -> bool:
    """
    Ask a y/n question until a valid answer is given.

    'y'/'Y' returns True. 'n'/'N' logs "Operation cancelled." and returns
    False. Any other answer is rejected and the question is asked again.
    End of input is treated as 'n'.

    Args:
        prompt: The question, without the "(y/n)" suffix.
        app_settings: Settings; with noconfirm set no question is asked.
        current_logger: Optional logger.
        default_when_noconfirm: Answer returned when prompting is disabled.

    Returns:
        True if the user confirmed, False otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if not _is_interactive(app_settings):
        return default_when_noconfirm

    question = f"{COLORS['yellow']}{prompt} (y/n): {COLORS['reset']}"
    while True:
        try:
            reply = input(question).strip()
        except EOFError:
            log_message(
                f"No user input (EOF), defaulting to 'n' for prompt: '{prompt}'",
                "warning",
                logger_to_use,
                app_settings,
            )
            return False

        if reply in ("y", "Y"):
            return True
        if reply in ("n", "N"):
            log_message("Operation cancelled.", "error", logger_to_use, app_settings)
            return False
        log_message(
            "Invalid input. Please answer y or n.",
            "error",
            logger_to_use,
            app_settings,
        )


def wait_for_enter(
    description: str,
    app_settings: Optional[AppSettings],
) -> None:
    """Pause with "<description>? Press Enter to continue..." unless noconfirm."""
    if not _is_interactive(app_settings):
        return
    try:
        input(f"{description}? Press Enter to continue...")
    except EOFError:
        pass


def run_confirmed_command(
    command: List[str],
    description: str,
    app_settings: Optional[AppSettings],
    ask_confirm: bool = True,
    user: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Run a command after an optional confirmation, retrying on failure.

    Interactive mode is active when `ask_confirm` is True and prompting is
    not disabled globally. In interactive mode the user is asked before the
    first run and again after each failure whether to retry. In
    non-interactive mode the command runs once. Every failure is logged.

    Args:
        command: Argument list to execute.
        description: Human-readable description used in prompts and logs.
        app_settings: Application settings.
        ask_confirm: Ask before running and offer retries.
        user: Run as this unprivileged user instead of root.
        current_logger: Optional logger.

    Returns:
        True when the command eventually succeeded, False when the user
        declined or the command failed without a retry.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    interactive = ask_confirm and _is_interactive(app_settings)

    log_message(
        f"Command: {subprocess.list2cmdline(command)}"
        + (f" (as {user})" if user else ""),
        "info",
        logger_to_use,
        app_settings,
    )
    if interactive:
        if not ask_confirmation(description, app_settings, logger_to_use):
            return False
    else:
        log_message(description, "info", logger_to_use, app_settings)

    while True:
        try:
            if user:
                run_user_command(
                    command, user, app_settings, current_logger=logger_to_use
                )
            else:
                run_elevated_command(
                    command, app_settings, current_logger=logger_to_use
                )
            break
        except (subprocess.CalledProcessError, OSError):
            log_message(
                f"{symbols.get('error', '❌')} Command failed: {subprocess.list2cmdline(command)}",
                "error",
                logger_to_use,
                app_settings,
            )
            if not interactive:
                log_message(
                    f"{description} failed, no retry (auto mode).",
                    "warning",
                    logger_to_use,
                    app_settings,
                )
                return False
            if not ask_confirmation(
                f"Retry {description}?", app_settings, logger_to_use
            ):
                log_message(
                    f"{description} not completed.",
                    "warning",
                    logger_to_use,
                    app_settings,
                )
                return False

    log_message(
        f"{symbols.get('success', '✅')} {description} completed successfully.",
        "success",
        logger_to_use,
        app_settings,
    )
    return True
