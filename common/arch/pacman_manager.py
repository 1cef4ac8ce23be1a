# common/arch/pacman_manager.py
# -*- coding: utf-8 -*-
import logging
from typing import List, Optional

from common.command_utils import check_package_installed, command_exists
from installer.config_models import AppSettings


class PacmanManager:
    """
    A centralized manager for Arch Linux packages using the pacman CLI.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the PacmanManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)
        if not command_exists("pacman"):
            self.logger.critical(
                "'pacman' command not found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'pacman' not found. Is this an Arch-based system?"
            )

    @staticmethod
    def install_command(
        packages: List[str], upgrade_system: bool = False
    ) -> List[str]:
        """
        Build the pacman command installing `packages`.

        --needed skips packages that are already up to date; with
        upgrade_system the sync databases are refreshed and the whole system
        upgraded in the same transaction.
        """
        operation = "-Syu" if upgrade_system else "-S"
        return ["pacman", operation, "--needed", "--noconfirm"] + list(packages)

    def is_installed(self, package_name: str, app_settings: AppSettings) -> bool:
        """Returns True if 'pacman -Qi' knows the package as installed."""
        return check_package_installed(package_name, app_settings, self.logger)

    def missing_packages(
        self, packages: List[str], app_settings: AppSettings
    ) -> List[str]:
        """Return the subset of `packages` that is not installed, in order."""
        return [
            pkg for pkg in packages if not self.is_installed(pkg, app_settings)
        ]
