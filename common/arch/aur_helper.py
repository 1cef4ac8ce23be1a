# common/arch/aur_helper.py
# -*- coding: utf-8 -*-
"""
AUR helper management: bootstrapping yay from the AUR and installing AUR
packages with it. Both must run as the unprivileged target user, since
makepkg refuses to build as root.
"""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from common.command_utils import (
    log_message,
    run_user_command,
    user_command_exists,
)
from common.file_utils import chown_tree
from common.system_utils import TargetUser
from installer.config_models import AppSettings


class AurHelper:
    """Wraps an AUR helper (yay by default) for a given target user."""

    def __init__(
        self,
        user: TargetUser,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.user = user
        self.app_settings = app_settings
        self.helper = app_settings.aur.helper
        self.logger = logger or logging.getLogger(__name__)

    def is_available(self) -> bool:
        return user_command_exists(
            self.helper, self.user.name, self.app_settings, self.logger
        )

    def bootstrap(self) -> bool:
        """
        Clone the helper's AUR repository into a temporary directory owned by
        the user and build/install it with 'makepkg -si'.

        Returns:
            True if the helper is available afterwards.
        """
        if self.is_available():
            log_message(
                f"{self.helper} already present.",
                "success",
                self.logger,
                self.app_settings,
            )
            return True

        log_message(
            f"Bootstrapping {self.helper} (AUR)...",
            "info",
            self.logger,
            self.app_settings,
        )
        with tempfile.TemporaryDirectory(prefix=f"{self.helper}-build-") as tmp:
            build_root = Path(tmp)
            chown_tree(build_root, self.user)
            clone_dir = build_root / self.helper
            try:
                run_user_command(
                    [
                        "git",
                        "clone",
                        "--depth",
                        "1",
                        self.app_settings.aur.helper_repo_url,
                        str(clone_dir),
                    ],
                    self.user.name,
                    self.app_settings,
                    current_logger=self.logger,
                )
                run_user_command(
                    ["makepkg", "-si", "--noconfirm"],
                    self.user.name,
                    self.app_settings,
                    current_logger=self.logger,
                    cwd=str(clone_dir),
                )
            except (subprocess.CalledProcessError, OSError) as e:
                log_message(
                    f"Failed to bootstrap {self.helper}: {e}",
                    "error",
                    self.logger,
                    self.app_settings,
                )
                return False

        log_message(
            f"{self.helper} installed.", "success", self.logger, self.app_settings
        )
        return True

    def install_command(self, packages: List[str]) -> List[str]:
        return [self.helper, "-S", "--needed", "--noconfirm"] + list(packages)
