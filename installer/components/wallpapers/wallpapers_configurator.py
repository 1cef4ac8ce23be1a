"""
Wallpapers configurator module.

Copies the bundled backgrounds into ~/.config and sets up hyprpaper to show
the default wallpaper.
"""

import logging
from pathlib import Path
from typing import List, Optional

from common.command_utils import log_message
from common.file_utils import copy_tree, ensure_lines, file_contains_line, write_user_file
from common.system_utils import TargetUser
from installer.base_component import BaseComponent
from installer.config import ASSETS_DIR
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="wallpapers",
    metadata={
        "dependencies": ["dotfiles"],
        "description": "Wallpapers and hyprpaper",
    },
)
class WallpapersConfigurator(BaseComponent):
    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
        assets_dir: Path = ASSETS_DIR,
    ):
        super().__init__(app_settings, user, logger)
        self.assets_dir = assets_dir

    @property
    def source_dir(self) -> Path:
        return self.assets_dir / self.app_settings.wallpapers.source_dir

    @property
    def destination_dir(self) -> Path:
        return self.user.config_dir / self.app_settings.wallpapers.destination_dir

    @property
    def hyprpaper_conf(self) -> Path:
        return self.user.config_dir / "hypr" / "hyprpaper.conf"

    @property
    def wallpaper_path(self) -> str:
        """The default wallpaper with '~' expanded to the target user's home."""
        wallpaper = self.app_settings.wallpapers.default_wallpaper
        if wallpaper == "~" or wallpaper.startswith("~/"):
            return str(self.user.home / wallpaper[2:])
        return wallpaper

    def hyprpaper_lines(self) -> List[str]:
        return [
            f"preload = {self.wallpaper_path}",
            f"wallpaper = ,{self.wallpaper_path}",
        ]

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        try:
            if not self.source_dir.is_dir():
                self.source_dir.mkdir(parents=True)
                log_message(
                    f"{self.symbols.get('warning', '')} {self.source_dir} did not exist and was created. Add your wallpapers there.",
                    "warning",
                    self.logger,
                    self.app_settings,
                )

            copy_tree(
                self.source_dir,
                self.destination_dir,
                self.user,
                self.app_settings,
                self.logger,
            )
            log_message(
                f"Wallpapers copied to {self.destination_dir}",
                "info",
                self.logger,
                self.app_settings,
            )

            if not Path(self.wallpaper_path).is_file():
                log_message(
                    f"{self.symbols.get('warning', '')} Default wallpaper {self.wallpaper_path} does not exist.",
                    "warning",
                    self.logger,
                    self.app_settings,
                )

            if self.hyprpaper_conf.is_file():
                added = ensure_lines(
                    self.hyprpaper_conf, self.hyprpaper_lines(), self.user
                )
                for line in added:
                    log_message(
                        f"Added '{line}' to hyprpaper.conf",
                        "info",
                        self.logger,
                        self.app_settings,
                    )
            else:
                write_user_file(
                    self.hyprpaper_conf,
                    self.app_settings.wallpapers.hyprpaper_template.format(
                        wallpaper=self.wallpaper_path
                    ),
                    self.user,
                )
                log_message(
                    f"Created {self.hyprpaper_conf}",
                    "info",
                    self.logger,
                    self.app_settings,
                )
        except OSError as e:
            log_message(
                f"{self.symbols.get('error', '')} Failed to set up wallpapers: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        log_message(
            "Wallpapers configured.", "success", self.logger, self.app_settings
        )
        return True

    def is_installed(self) -> bool:
        return self.destination_dir.is_dir()

    def is_configured(self) -> bool:
        return all(
            file_contains_line(self.hyprpaper_conf, line)
            for line in self.hyprpaper_lines()
        )
