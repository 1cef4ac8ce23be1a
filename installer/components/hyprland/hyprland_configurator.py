"""
Hyprland configurator module.

Generates the theme variables file sourced by hyprland.conf and makes sure
hyprland.conf sources it and starts the desktop helpers with exec-once.
Appends are idempotent: a block is only added when its line is missing.
"""

from pathlib import Path
from typing import List, Tuple

from common.command_utils import command_exists, log_message
from common.file_utils import append_block_if_missing, file_contains_line, write_user_file
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry

VARS_HEADER = "# Theme variables, generated by the installer. Edits will be overwritten.\n"


@ComponentRegistry.register(
    name="hyprland",
    metadata={
        "dependencies": ["dotfiles"],
        "description": "Hyprland theme variables and autostart",
    },
)
class HyprlandConfigurator(BaseComponent):
    @property
    def hypr_dir(self) -> Path:
        return self.user.config_dir / "hypr"

    @property
    def hyprland_conf(self) -> Path:
        return self.hypr_dir / "hyprland.conf"

    @property
    def vars_path(self) -> Path:
        return self.hypr_dir / self.app_settings.hyprland.vars_file

    @property
    def source_line(self) -> str:
        return f"source = ~/.config/hypr/{self.app_settings.hyprland.vars_file}"

    def vars_content(self) -> str:
        env = {
            "GTK_THEME": self.app_settings.gtk_theme.name,
            "ICON_THEME": self.app_settings.icon_theme.name,
        }
        env.update(self.app_settings.hyprland.extra_env)
        return VARS_HEADER + "".join(
            f"env = {name},{value}\n" for name, value in env.items()
        )

    def blocks(self) -> List[Tuple[str, str]]:
        """(line, block) pairs appended to hyprland.conf when the line is missing."""
        blocks = [
            (
                self.source_line,
                f"\n# Source theme variables\n{self.source_line}\n",
            )
        ]
        for program, comment in self.app_settings.hyprland.exec_once.items():
            line = f"exec-once = {program}"
            blocks.append((line, f"\n# {comment}\n{line}\n"))
        return blocks

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        try:
            write_user_file(self.vars_path, self.vars_content(), self.user)
            log_message(
                f"Theme variables written to {self.vars_path}",
                "success",
                self.logger,
                self.app_settings,
            )

            if not self.hyprland_conf.is_file():
                log_message(
                    f"{self.symbols.get('warning', '')} {self.hyprland_conf} not found. Add '{self.source_line}' to your Hyprland config manually.",
                    "warning",
                    self.logger,
                    self.app_settings,
                )
                return True

            for line, block in self.blocks():
                if append_block_if_missing(
                    self.hyprland_conf, line, block, self.user
                ):
                    log_message(
                        f"Added '{line}' to hyprland.conf",
                        "info",
                        self.logger,
                        self.app_settings,
                    )
                else:
                    log_message(
                        f"'{line}' already present in hyprland.conf",
                        "debug",
                        self.logger,
                        self.app_settings,
                    )
        except OSError as e:
            log_message(
                f"{self.symbols.get('error', '')} Failed to update Hyprland config: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False
        return True

    def is_installed(self) -> bool:
        return command_exists("Hyprland")

    def is_configured(self) -> bool:
        return self.vars_path.is_file() and file_contains_line(
            self.hyprland_conf, self.source_line, exact=False
        )
