"""
Icon theme configurator module.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from common.command_utils import command_exists, log_message, run_user_command
from common.prompt_utils import ask_confirmation
from common.system_utils import TargetUser
from installer.base_component import BaseComponent
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry
from installer.theme_installer import ThemeInstaller


@ComponentRegistry.register(
    name="icon_theme",
    metadata={
        "dependencies": [],
        "description": "Icon theme and icon cache",
    },
)
class IconThemeConfigurator(BaseComponent):
    """Installs the icon theme into ~/.icons and builds its icon cache."""

    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app_settings, user, logger)
        self.theme_installer = ThemeInstaller(app_settings, user, self.logger)

    @property
    def icons_dir(self) -> Path:
        return self.user.home / ".icons"

    @property
    def theme_dir(self) -> Path:
        return self.theme_installer.destination(
            self.app_settings.icon_theme, self.icons_dir
        )

    def install(self) -> bool:
        theme = self.app_settings.icon_theme
        if not ask_confirmation(
            f"Install icon theme '{theme.name}'?", self.app_settings, self.logger
        ):
            return False
        return self.theme_installer.install(theme, self.icons_dir)

    def configure(self) -> bool:
        """Refresh the icon cache. A missing cache tool only warns."""
        if not command_exists("gtk-update-icon-cache"):
            log_message(
                f"{self.symbols.get('warning', '')} gtk-update-icon-cache not found, icon cache not updated.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return True

        try:
            run_user_command(
                ["gtk-update-icon-cache", "-f", "-t", str(self.theme_dir)],
                self.user.name,
                self.app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, OSError) as e:
            log_message(
                f"{self.symbols.get('error', '')} Failed to update icon cache: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        log_message(
            f"Icon cache updated for {self.theme_dir}",
            "success",
            self.logger,
            self.app_settings,
        )
        return True

    def is_installed(self) -> bool:
        return self.theme_installer.is_installed(
            self.app_settings.icon_theme, self.icons_dir
        )

    def is_configured(self) -> bool:
        return (self.theme_dir / "icon-theme.cache").is_file()
