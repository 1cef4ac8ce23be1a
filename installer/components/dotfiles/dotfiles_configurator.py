"""
Dotfiles configurator module.

Copies the configuration directories shipped in the repository's configs/
folder into the target user's ~/.config.
"""

import logging
from pathlib import Path
from typing import Optional

from common.command_utils import log_message
from common.file_utils import copy_tree
from common.system_utils import TargetUser
from installer.base_component import BaseComponent
from installer.config import CONFIGS_DIR
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="dotfiles",
    metadata={
        "dependencies": [],
        "description": "Copy configuration files",
    },
)
class DotfilesConfigurator(BaseComponent):
    """
    Configurator for the user's dotfiles.

    Existing files in the destination are overwritten; files that only exist
    in the destination are kept. A failing entry does not stop the others.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
        configs_dir: Path = CONFIGS_DIR,
    ):
        super().__init__(app_settings, user, logger)
        self.configs_dir = configs_dir

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        all_ok = True
        for entry in self.app_settings.dotfiles.entries:
            source = self.configs_dir / entry.source
            destination = self.user.config_dir / entry.dest_name
            log_message(
                f"Copying {entry.display_name} config...",
                "info",
                self.logger,
                self.app_settings,
            )
            try:
                copy_tree(
                    source, destination, self.user, self.app_settings, self.logger
                )
            except OSError as e:
                log_message(
                    f"{self.symbols.get('warning', '')} Failed to copy {entry.display_name} config: {e}",
                    "warning",
                    self.logger,
                    self.app_settings,
                )
                all_ok = False
                continue
            log_message(
                f"{entry.display_name} config copied to {destination}",
                "success",
                self.logger,
                self.app_settings,
            )
        return all_ok

    def is_installed(self) -> bool:
        return True

    def is_configured(self) -> bool:
        return all(
            (self.user.config_dir / entry.dest_name).is_dir()
            for entry in self.app_settings.dotfiles.entries
        )
