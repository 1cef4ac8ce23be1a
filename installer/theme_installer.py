# installer/theme_installer.py
# -*- coding: utf-8 -*-
"""
Theme installer shared by the GTK and icon theme components.

A theme is fetched into a temporary staging directory (local archive,
downloaded archive or git clone), its top-level directory is located, and
the result is moved into place under its final name, owned by the user.
"""

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from common.archive_utils import (
    ArchiveError,
    clone_repository,
    download_file,
    extract_archive,
    locate_extracted_root,
)
from common.command_utils import get_symbols, log_message
from common.file_utils import chown_tree, make_user_dirs, remove_path
from common.system_utils import TargetUser
from installer.config import ASSETS_DIR
from installer.config_models import AppSettings, SourceKind, ThemeSource


class ThemeInstaller:
    """
    Installs a ThemeSource into a themes directory (~/.themes, ~/.icons).

    This class is not a registered component; the theme components delegate
    to it.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
        assets_dir: Path = ASSETS_DIR,
    ):
        self.app_settings = app_settings
        self.user = user
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.assets_dir = assets_dir

    def destination(self, theme: ThemeSource, themes_dir: Path) -> Path:
        return themes_dir / theme.name

    def is_installed(self, theme: ThemeSource, themes_dir: Path) -> bool:
        return self.destination(theme, themes_dir).is_dir()

    def install(self, theme: ThemeSource, themes_dir: Path) -> bool:
        """
        Fetch `theme` and place it at <themes_dir>/<theme.name>, replacing
        any previous install.

        Returns:
            True on success, False if fetching or placing failed.
        """
        symbols = get_symbols(self.app_settings)
        final_dir = self.destination(theme, themes_dir)

        try:
            with tempfile.TemporaryDirectory(prefix="theme-") as tmp:
                theme_root = self._fetch(theme, Path(tmp))
                if theme_root is None:
                    return False

                make_user_dirs(themes_dir, self.user)
                if final_dir.exists() or final_dir.is_symlink():
                    log_message(
                        f"Removing previous install at {final_dir}",
                        "info",
                        self.logger,
                        self.app_settings,
                    )
                    remove_path(final_dir)

                shutil.copytree(
                    theme_root,
                    final_dir,
                    symlinks=True,
                    ignore=shutil.ignore_patterns(".git"),
                )
                chown_tree(final_dir, self.user)
        except (
            ArchiveError,
            OSError,
            subprocess.CalledProcessError,
            requests.RequestException,
        ) as e:
            log_message(
                f"{symbols.get('error', '')} Failed to install theme '{theme.name}': {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        log_message(
            f"Theme '{theme.name}' installed to {final_dir}",
            "success",
            self.logger,
            self.app_settings,
        )
        return True

    def _fetch(self, theme: ThemeSource, work_dir: Path) -> Optional[Path]:
        """Return the directory holding the theme inside `work_dir`."""
        if theme.kind == SourceKind.GIT:
            clone_dir = clone_repository(
                theme.url,
                work_dir / "clone",
                self.app_settings,
                branch=theme.branch,
                current_logger=self.logger,
            )
            root = clone_dir / theme.subdirectory if theme.subdirectory else clone_dir
            if not root.is_dir():
                log_message(
                    f"Directory '{theme.subdirectory}' not found in {theme.url}",
                    "error",
                    self.logger,
                    self.app_settings,
                )
                return None
            return root

        if theme.kind == SourceKind.URL:
            archive_name = Path(urlparse(theme.url).path).name or "theme-archive"
            archive_path = download_file(
                theme.url,
                work_dir / archive_name,
                self.app_settings,
                self.logger,
            )
        else:
            archive_path = self.assets_dir / theme.archive

        staging = work_dir / "staging"
        log_message(
            f"Extracting {archive_path.name}...",
            "info",
            self.logger,
            self.app_settings,
        )
        extract_archive(archive_path, staging)
        return self._locate(theme, staging)

    def _locate(self, theme: ThemeSource, staging: Path) -> Optional[Path]:
        root = locate_extracted_root(
            staging,
            expected_name=theme.extracted_name,
            name_glob=theme.extracted_glob,
        )
        if root is None and (theme.extracted_name or theme.extracted_glob):
            expected = theme.extracted_name or theme.extracted_glob
            log_message(
                f"{get_symbols(self.app_settings).get('warning', '')} Expected directory '{expected}' not found in the archive.",
                "warning",
                self.logger,
                self.app_settings,
            )
            root = locate_extracted_root(staging)

        if root is None:
            log_message(
                f"Could not identify the theme directory for '{theme.name}'.",
                "error",
                self.logger,
                self.app_settings,
            )
        return root
