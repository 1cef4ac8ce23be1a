"""
Official repository packages installer module.

Upgrades the system and installs the configured package list with pacman in
a single transaction.
"""

import logging
from typing import Optional

from common.arch.pacman_manager import PacmanManager
from common.command_utils import log_message
from common.prompt_utils import run_confirmed_command
from common.system_utils import TargetUser
from installer.base_component import BaseComponent
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="packages",
    metadata={
        "dependencies": [],
        "description": "System upgrade and official packages",
        "fatal": True,
    },
)
class PackagesInstaller(BaseComponent):
    """
    Installer for the official repository packages.

    Every later step relies on these packages, so a failure here ends the run.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app_settings, user, logger)
        self._pacman: Optional[PacmanManager] = None

    @property
    def pacman(self) -> PacmanManager:
        if self._pacman is None:
            self._pacman = PacmanManager(logger=self.logger)
        return self._pacman

    def install(self) -> bool:
        settings = self.app_settings.packages
        log_message(
            f"{self.symbols.get('package', '')} {len(settings.official)} packages selected.",
            "info",
            self.logger,
            self.app_settings,
        )
        return run_confirmed_command(
            PacmanManager.install_command(
                settings.official, upgrade_system=settings.upgrade_system
            ),
            "Update system and install packages",
            self.app_settings,
            current_logger=self.logger,
        )

    def configure(self) -> bool:
        """Nothing to configure."""
        return True

    def is_installed(self) -> bool:
        try:
            missing = self.pacman.missing_packages(
                self.app_settings.packages.official, self.app_settings
            )
        except FileNotFoundError:
            return False
        if missing:
            self.logger.debug(f"Missing packages: {', '.join(missing)}")
        return not missing

    def is_configured(self) -> bool:
        return self.is_installed()
