"""
Pywal configurator module.

Sets up wallpaper-driven colours: fetches a default wallpaper, points GTK's
user stylesheets at the pywal palette, writes the apply-pywal.sh and
switch-wallpaper.sh helpers and runs apply-pywal.sh once as the user.
"""

import os
import subprocess
from pathlib import Path
from typing import List, Tuple

import requests

from common.archive_utils import download_file
from common.command_utils import command_exists, log_message, run_user_command
from common.file_utils import (
    backup_file,
    chown_tree,
    link_user_file,
    make_user_dirs,
    remove_path,
    write_user_file,
)
from installer.base_component import BaseComponent
from installer.config_models import HYPR_COLORS_FALLBACK
from installer.registry import ComponentRegistry

SCRIPTS_DIR = "scripts"
APPLY_SCRIPT = "apply-pywal.sh"
SWITCH_SCRIPT = "switch-wallpaper.sh"
GTK_STYLESHEETS = ("gtk.css", "gtk-dark.css")


@ComponentRegistry.register(
    name="pywal",
    metadata={
        "dependencies": ["app_configs"],
        "description": "Pywal colours, wallpaper and helper scripts",
        "opt_in": True,
    },
)
class PywalConfigurator(BaseComponent):
    @property
    def scripts_dir(self) -> Path:
        return self.user.config_dir / SCRIPTS_DIR

    @property
    def apply_script(self) -> Path:
        return self.scripts_dir / APPLY_SCRIPT

    @property
    def switch_script(self) -> Path:
        return self.scripts_dir / SWITCH_SCRIPT

    @property
    def wallpaper_path(self) -> Path:
        return self.user.config_dir / self.app_settings.pywal.wallpaper

    @property
    def wallpapers_dir(self) -> Path:
        return self.user.home / self.app_settings.pywal.wallpapers_dir

    @property
    def gtk_colors(self) -> Path:
        return self.user.home / ".cache" / "wal" / "colors-gtk.css"

    @property
    def hypr_colors(self) -> Path:
        return self.user.config_dir / "hypr" / "colors-hypr.conf"

    def gtk_links(self) -> List[Path]:
        return [
            self.user.config_dir / version / name
            for version in self.app_settings.pywal.gtk_versions
            for name in GTK_STYLESHEETS
        ]

    def scripts(self) -> List[Tuple[Path, str]]:
        """(path, content) of the helper scripts."""
        values = {
            "wallpaper": str(self.wallpaper_path),
            "wallpapers_dir": str(self.wallpapers_dir),
        }
        settings = self.app_settings.pywal
        return [
            (self.apply_script, settings.apply_script_template.format(**values)),
            (self.switch_script, settings.switch_script_template.format(**values)),
        ]

    def _log(self, message: str, level: str = "info") -> None:
        log_message(message, level, self.logger, self.app_settings)

    def fetch_wallpaper(self) -> bool:
        """Download the default wallpaper unless one is already in place."""
        if self.wallpaper_path.is_file():
            self._log(f"Wallpaper {self.wallpaper_path} already present", "debug")
            return True
        url = self.app_settings.pywal.wallpaper_url
        if not url:
            self._log(
                f"{self.symbols.get('info', '')} No wallpaper URL configured; apply-pywal.sh will use the first file in {self.wallpapers_dir}."
            )
            return True

        make_user_dirs(self.wallpaper_path.parent, self.user)
        try:
            download_file(url, self.wallpaper_path, self.app_settings, self.logger)
        except requests.RequestException as e:
            remove_path(self.wallpaper_path)
            self._log(
                f"{self.symbols.get('warning', '')} Could not download the default wallpaper: {e}",
                "warning",
            )
            return False
        chown_tree(self.wallpaper_path, self.user)
        self._log(f"Wallpaper placed at {self.wallpaper_path}", "success")
        return True

    def link_gtk_stylesheets(self) -> None:
        for link in self.gtk_links():
            if link.is_file() and not link.is_symlink():
                backup_file(link, self.app_settings, self.logger)
            link_user_file(link, self.gtk_colors, self.user)
        self._log(f"GTK stylesheets linked to {self.gtk_colors}", "success")

    def write_scripts(self) -> None:
        for path, content in self.scripts():
            write_user_file(path, content, self.user, mode=0o755)
            self._log(f"Created {path}", "success")
        if not self.hypr_colors.exists():
            write_user_file(self.hypr_colors, HYPR_COLORS_FALLBACK, self.user)

    def apply_theme(self) -> bool:
        """Run apply-pywal.sh as the desktop user."""
        self._log(f"{self.symbols.get('gear', '')} Applying initial theme...")
        try:
            run_user_command(
                [str(self.apply_script)],
                self.user.name,
                self.app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            self._log(
                f"{self.symbols.get('warning', '')} {APPLY_SCRIPT} failed: {e}. Run it again from the Hyprland session.",
                "warning",
            )
            return False
        self._log("Initial theme applied", "success")
        return True

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        try:
            make_user_dirs(self.wallpapers_dir, self.user)
            wallpaper_ok = self.fetch_wallpaper()
            self.link_gtk_stylesheets()
            self.write_scripts()
        except (OSError, KeyError, IndexError, ValueError) as e:
            self._log(
                f"{self.symbols.get('error', '')} Failed to set up pywal: {e}",
                "error",
            )
            return False

        if not self.app_settings.pywal.apply_on_configure:
            return wallpaper_ok
        return self.apply_theme() and wallpaper_ok

    def is_installed(self) -> bool:
        return command_exists("wal")

    def is_configured(self) -> bool:
        scripts_ok = all(
            path.is_file() and os.access(path, os.X_OK)
            for path in (self.apply_script, self.switch_script)
        )
        links_ok = all(
            link.is_symlink() and link.readlink() == self.gtk_colors
            for link in self.gtk_links()
        )
        return scripts_ok and links_ok and self.wallpaper_path.is_file()
