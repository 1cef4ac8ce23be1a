"""
Thunar configurator module.

Adds an "Open <terminal> Here" custom action to Thunar and restarts the file
manager so it picks the action up.
"""

from pathlib import Path

from common.command_utils import (
    command_exists,
    log_message,
    run_command,
    spawn_detached_user_command,
)
from common.file_utils import file_contains_line, make_user_dirs, write_user_file
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry

THUNAR_DIR_MODE = 0o700


@ComponentRegistry.register(
    name="thunar",
    metadata={
        "dependencies": [],
        "description": "Thunar custom actions",
    },
)
class ThunarConfigurator(BaseComponent):
    @property
    def thunar_dir(self) -> Path:
        return self.user.config_dir / "Thunar"

    @property
    def uca_path(self) -> Path:
        return self.thunar_dir / "uca.xml"

    def uca_content(self) -> str:
        terminal = self.app_settings.thunar.terminal
        return self.app_settings.thunar.uca_template.format(
            terminal=terminal, terminal_title=terminal.capitalize()
        )

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        try:
            make_user_dirs(self.thunar_dir, self.user, mode=THUNAR_DIR_MODE)
            if self.uca_path.exists():
                log_message(
                    f"{self.uca_path} already exists, leaving it unchanged.",
                    "info",
                    self.logger,
                    self.app_settings,
                )
            else:
                write_user_file(self.uca_path, self.uca_content(), self.user)
                log_message(
                    f"Thunar custom action written to {self.uca_path}",
                    "success",
                    self.logger,
                    self.app_settings,
                )
        except OSError as e:
            log_message(
                f"{self.symbols.get('error', '')} Failed to configure Thunar: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        if self.app_settings.thunar.restart:
            self.restart()
        return True

    def restart(self) -> bool:
        """Stop the user's running Thunar and start a new detached instance."""
        if not command_exists("thunar"):
            log_message(
                f"{self.symbols.get('warning', '')} thunar not found, skipping restart.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return False

        try:
            # Exit status 1 only means no Thunar was running
            run_command(
                ["pkill", "-u", self.user.name, "-x", "thunar"],
                self.app_settings,
                check=False,
                current_logger=self.logger,
            )
        except FileNotFoundError:
            log_message(
                "pkill not found, cannot stop a running Thunar.",
                "warning",
                self.logger,
                self.app_settings,
            )

        process = spawn_detached_user_command(
            ["thunar"], self.user.name, self.app_settings, self.logger
        )
        if process is None:
            return False
        log_message("Thunar restarted.", "info", self.logger, self.app_settings)
        return True

    def is_installed(self) -> bool:
        return command_exists("thunar")

    def is_configured(self) -> bool:
        return file_contains_line(
            self.uca_path,
            f"{self.app_settings.thunar.terminal} --directory=%d",
            exact=False,
        )
