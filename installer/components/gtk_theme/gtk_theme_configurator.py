"""
GTK theme configurator module.

Installs the GTK theme into ~/.themes, points GTK 3 and GTK 4 at it through
settings.ini and applies the theme through gsettings for GNOME-aware
applications.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from common.command_utils import log_message, run_user_command, user_command_exists
from common.file_utils import backup_file, file_contains_line, write_user_file
from common.prompt_utils import ask_confirmation
from common.system_utils import TargetUser
from installer.base_component import BaseComponent
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry
from installer.theme_installer import ThemeInstaller

GTK_SETTINGS_TEMPLATE = """\
[Settings]
gtk-theme-name={theme}
gtk-icon-theme-name={icons}
gtk-font-name={font}
"""

GSETTINGS_SCHEMA = "org.gnome.desktop.interface"


@ComponentRegistry.register(
    name="gtk_theme",
    metadata={
        "dependencies": [],
        "description": "GTK theme and GTK settings",
    },
)
class GtkThemeConfigurator(BaseComponent):
    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app_settings, user, logger)
        self.theme_installer = ThemeInstaller(app_settings, user, self.logger)

    @property
    def themes_dir(self) -> Path:
        return self.user.home / ".themes"

    def settings_files(self) -> List[Path]:
        return [
            self.user.config_dir / version / "settings.ini"
            for version in self.app_settings.gtk.versions
        ]

    def settings_content(self) -> str:
        return GTK_SETTINGS_TEMPLATE.format(
            theme=self.app_settings.gtk_theme.name,
            icons=self.app_settings.icon_theme.name,
            font=self.app_settings.gtk.font_name,
        )

    def install(self) -> bool:
        theme = self.app_settings.gtk_theme
        if not ask_confirmation(
            f"Install GTK theme '{theme.name}'?", self.app_settings, self.logger
        ):
            return False
        return self.theme_installer.install(theme, self.themes_dir)

    def configure(self) -> bool:
        content = self.settings_content()
        try:
            for settings_file in self.settings_files():
                if settings_file.is_file():
                    existing = settings_file.read_text(
                        encoding="utf-8", errors="surrogateescape"
                    )
                    if existing == content:
                        continue
                    backup_file(settings_file, self.app_settings, self.logger)
                write_user_file(settings_file, content, self.user)
                log_message(
                    f"Wrote {settings_file}",
                    "info",
                    self.logger,
                    self.app_settings,
                )
        except OSError as e:
            log_message(
                f"{self.symbols.get('error', '')} Failed to write GTK settings: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        if self.app_settings.gtk.apply_gsettings:
            self._apply_gsettings()

        log_message(
            "GTK settings applied.", "success", self.logger, self.app_settings
        )
        return True

    def _apply_gsettings(self) -> None:
        """gsettings needs a user session bus; failures only warn."""
        if not user_command_exists(
            "gsettings", self.user.name, self.app_settings, self.logger
        ):
            log_message(
                f"{self.symbols.get('warning', '')} gsettings not found, skipping. Set the theme with your desktop's settings tool.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return

        for key, value in (
            ("gtk-theme", self.app_settings.gtk_theme.name),
            ("icon-theme", self.app_settings.icon_theme.name),
        ):
            try:
                run_user_command(
                    ["gsettings", "set", GSETTINGS_SCHEMA, key, value],
                    self.user.name,
                    self.app_settings,
                    current_logger=self.logger,
                )
            except (subprocess.CalledProcessError, OSError) as e:
                log_message(
                    f"{self.symbols.get('warning', '')} Could not set {key} with gsettings: {e}",
                    "warning",
                    self.logger,
                    self.app_settings,
                )

    def is_installed(self) -> bool:
        return self.theme_installer.is_installed(
            self.app_settings.gtk_theme, self.themes_dir
        )

    def is_configured(self) -> bool:
        theme_line = f"gtk-theme-name={self.app_settings.gtk_theme.name}"
        return all(
            file_contains_line(path, theme_line) for path in self.settings_files()
        )
