"""
Application configs configurator module.

Renders the per-application config files of a profile (Hyprland, Waybar,
Kitty and friends) from the templates in the settings into ~/.config. A file
that differs from the rendered template is backed up before being replaced.
"""

from pathlib import Path
from typing import Dict

from common.command_utils import log_message
from common.file_utils import backup_file, write_user_file
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


class TemplateError(Exception):
    """A template is malformed or references a placeholder that does not exist."""


@ComponentRegistry.register(
    name="app_configs",
    metadata={
        "dependencies": [],
        "description": "Application configs rendered from templates",
        "opt_in": True,
    },
)
class AppConfigsConfigurator(BaseComponent):
    def placeholders(self) -> Dict[str, str]:
        return {
            "home": str(self.user.home),
            "config_dir": str(self.user.config_dir),
            "font": self.app_settings.app_configs.font,
        }

    def rendered_files(self) -> Dict[Path, str]:
        """
        Destination path -> content for every template that is not disabled.

        Raises:
            TemplateError: A template is malformed or uses an unknown placeholder.
        """
        values = self.placeholders()
        files: Dict[Path, str] = {}
        for relative, template in self.app_settings.app_configs.templates.items():
            if template is None:
                continue
            try:
                files[self.user.config_dir / relative] = template.format(**values)
            except (KeyError, IndexError, ValueError) as e:
                raise TemplateError(
                    f"Cannot render template for '{relative}': {e!r}"
                ) from e
        return files

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        try:
            files = self.rendered_files()
        except TemplateError as e:
            log_message(
                f"{self.symbols.get('error', '')} {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        all_ok = True
        for path, content in files.items():
            try:
                if path.is_file():
                    existing = path.read_text(
                        encoding="utf-8", errors="surrogateescape"
                    )
                    if existing == content:
                        log_message(
                            f"{path} is up to date",
                            "debug",
                            self.logger,
                            self.app_settings,
                        )
                        continue
                    backup_file(path, self.app_settings, self.logger)
                write_user_file(path, content, self.user)
            except OSError as e:
                log_message(
                    f"{self.symbols.get('warning', '')} Failed to write {path}: {e}",
                    "warning",
                    self.logger,
                    self.app_settings,
                )
                all_ok = False
                continue
            log_message(
                f"Wrote {path}", "success", self.logger, self.app_settings
            )
        return all_ok

    def is_installed(self) -> bool:
        return True

    def is_configured(self) -> bool:
        try:
            files = self.rendered_files()
        except TemplateError:
            return False
        for path, content in files.items():
            if not path.is_file():
                return False
            if path.read_text(encoding="utf-8", errors="surrogateescape") != content:
                return False
        return True
