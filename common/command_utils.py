# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing system commands and logging their output.

Commands are always passed as argument lists. Three privilege flavours are
provided: as-is, elevated (root, via sudo when needed) and as the target
desktop user (via 'sudo -u').
"""

import logging
import os
import pwd
import shutil
import subprocess
from typing import Dict, List, Optional, Union

from installer.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Return the configured log symbols, falling back to the defaults."""
    if app_settings is not None and getattr(app_settings, "symbols", None):
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def log_message(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs a message at the given level.

    Args:
        message (str): The log message to be recorded.
        level (str): "debug", "info", "success", "warning", "error" or
            "critical". "success" is emitted at INFO level and tagged so that
            the console formatter can colour it. Unknown levels map to INFO.
        current_logger (Optional[logging.Logger]): A logger instance to use.
            If not provided, the module-level logger is used.
        app_settings (Optional[AppSettings]): Optional application settings.
        exc_info (bool): Include exception information in the record.
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    elif level == "success":
        effective_logger.info(
            message, exc_info=exc_info, extra={"success": True}
        )
    else:
        effective_logger.info(message, exc_info=exc_info)


def _get_elevated_command_prefix() -> List[str]:
    """
    Returns ["sudo"] when the process is not root, an empty list otherwise.
    """
    return [] if os.geteuid() == 0 else ["sudo"]


def _get_user_command_prefix(user: str) -> List[str]:
    """
    Returns the prefix needed to run a command as `user`.

    No prefix is needed when the process already runs as that user.
    """
    try:
        current_user = pwd.getpwuid(os.geteuid()).pw_name
    except KeyError:
        current_user = None
    if current_user == user:
        return []
    return ["sudo", "-u", user, "-H", "--"]


def run_command(
    command: Union[List[str], str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    shell: bool = False,
    capture_output: bool = False,
    text: bool = True,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a system command and logs the process details and results.

    Args:
        command (Union[List[str], str]): The command to execute. Lists are
            preferred; a string without shell=True is split on whitespace and
            a warning is logged.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        check (bool): Raise CalledProcessError on a non-zero exit code.
        shell (bool): Execute through the shell.
        capture_output (bool): Capture stdout and stderr.
        text (bool): Decode output streams as text.
        cmd_input (Optional[str]): Data sent to the command's stdin.
        current_logger (Optional[logging.Logger]): Logger to use.
        cwd (Optional[str]): Working directory for the command.
        env (Optional[Dict[str, str]]): Environment for the command.

    Returns:
        subprocess.CompletedProcess: The completed process.

    Raises:
        subprocess.CalledProcessError: Non-zero exit code with check=True.
        FileNotFoundError: The executable was not found.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_to_log_str: str
    command_to_run: Union[List[str], str]

    if shell:
        if isinstance(command, list):
            command_to_run = " ".join(command)
        else:
            command_to_run = command
        command_to_log_str = str(command_to_run)
    else:
        if isinstance(command, str):
            log_message(
                f"{symbols.get('warning', '!')} Running string command '{command}' without shell=True. Consider list format.",
                "warning",
                effective_logger,
                app_settings,
            )
            command_to_run = command.split()
            command_to_log_str = command
        else:
            command_to_run = command
            command_to_log_str = subprocess.list2cmdline(command)

    log_message(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str} {f'(in {cwd})' if cwd else ''}",
        "debug",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            shell=shell,
            capture_output=capture_output,
            text=text,
            input=cmd_input,
            cwd=cwd,
            env=env,
        )
        if capture_output:
            if result.stdout and result.stdout.strip():
                log_message(
                    f"   stdout: {result.stdout.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
            if (
                result.stderr
                and result.stderr.strip()
                and (not check or result.returncode == 0)
            ):
                log_message(
                    f"   stderr: {result.stderr.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
        return result
    except subprocess.CalledProcessError as e:
        cmd_executed_str = (
            subprocess.list2cmdline(e.cmd)
            if isinstance(e.cmd, list)
            else str(e.cmd)
        )
        log_message(
            f"{symbols.get('error', '❌')} Command `{cmd_executed_str}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        if e.stdout and hasattr(e.stdout, "strip") and e.stdout.strip():
            log_message(
                f"   stdout: {e.stdout.strip()}",
                "error",
                effective_logger,
                app_settings,
            )
        if e.stderr and hasattr(e.stderr, "strip") and e.stderr.strip():
            log_message(
                f"   stderr: {e.stderr.strip()}",
                "error",
                effective_logger,
                app_settings,
            )
        raise
    except FileNotFoundError as e:
        log_message(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command with root privileges, prefixing 'sudo' when the
    process is not already root. See run_command for the arguments.
    """
    prefix = _get_elevated_command_prefix()
    return run_command(
        prefix + list(command),
        app_settings,
        check=check,
        shell=False,
        capture_output=capture_output,
        text=True,
        cmd_input=cmd_input,
        current_logger=current_logger,
        cwd=cwd,
        env=env,
    )


def run_user_command(
    command: List[str],
    user: str,
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command as the unprivileged target user.

    Used for everything that must not run as root: makepkg, the AUR helper,
    gsettings and writes that should end up owned by the user.
    """
    prefix = _get_user_command_prefix(user)
    return run_command(
        prefix + list(command),
        app_settings,
        check=check,
        shell=False,
        capture_output=capture_output,
        text=True,
        current_logger=current_logger,
        cwd=cwd,
    )


def spawn_detached_user_command(
    command: List[str],
    user: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> Optional[subprocess.Popen]:
    """
    Starts a command as the target user in its own session without waiting
    for it. Returns None if the executable could not be started.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    full_command = _get_user_command_prefix(user) + list(command)
    log_message(
        f"{symbols.get('gear', '⚙️')} Launching detached: {subprocess.list2cmdline(full_command)}",
        "debug",
        effective_logger,
        app_settings,
    )
    try:
        return subprocess.Popen(
            full_command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        log_message(
            f"{symbols.get('error', '❌')} Could not launch {command[0]}: {e}",
            "error",
            effective_logger,
            app_settings,
        )
        return None


def command_exists(command_name: str) -> bool:
    """Check if a command exists in the system's PATH."""
    return shutil.which(command_name) is not None


def user_command_exists(
    command_name: str,
    user: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Checks whether `command_name` resolves on the target user's PATH.

    Returns False when the lookup fails for any reason, logging a warning
    when the lookup tools themselves are missing.
    """
    try:
        run_user_command(
            ["which", command_name],
            user,
            app_settings,
            capture_output=True,
            check=True,
            current_logger=current_logger,
        )
        return True
    except subprocess.CalledProcessError:
        return False
    except FileNotFoundError:
        symbols = get_symbols(app_settings)
        log_message(
            f"{symbols.get('warning', '!')} Could not check for command '{command_name}' as 'sudo' or 'which' may be missing.",
            "warning",
            current_logger,
            app_settings,
        )
        return False


def check_package_installed(
    package_name: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Checks if a package is installed using 'pacman -Qi'.

    Returns:
        bool: True if pacman knows the package as installed, otherwise False.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    try:
        result = run_command(
            ["pacman", "-Qi", package_name],
            app_settings,
            check=False,
            capture_output=True,
            text=True,
            current_logger=logger_to_use,
        )
        return result.returncode == 0
    except FileNotFoundError:
        log_message(
            f"{symbols.get('error', '❌')} pacman command not found. Cannot check package '{package_name}'.",
            "error",
            logger_to_use,
            app_settings,
        )
        return False
