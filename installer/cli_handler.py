# installer/cli_handler.py
# -*- coding: utf-8 -*-
"""
Output of the informational commands: 'list', 'status' and 'view-config'.
"""

import datetime
import logging
from typing import Dict, Optional, Type

import yaml

from common.command_utils import log_message
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def list_components(
    components: Dict[str, Type[BaseComponent]],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    width = max((len(name) for name in components), default=0)

    lines = []
    for name, component_class in components.items():
        metadata = getattr(component_class, "metadata", {})
        dependencies = ", ".join(metadata.get("dependencies", [])) or "-"
        line = f"  {name.ljust(width)}  {metadata.get('description', '')}"
        line += f" (after: {dependencies})"
        if metadata.get("fatal"):
            line += " [required]"
        if metadata.get("opt_in"):
            line += " [opt-in]"
        lines.append(line)

    log_message("Available components:", "info", logger_to_use, app_settings)
    log_message("\n" + "\n".join(lines), "info", logger_to_use, app_settings)


def show_status(
    status: Dict[str, Dict[str, bool]],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = app_settings.symbols
    yes = symbols.get("success", "yes")
    no = symbols.get("error", "no")
    width = max((len(name) for name in status), default=0)

    lines = [f"  {'component'.ljust(width)}  installed  configured"]
    for name, state in status.items():
        lines.append(
            f"  {name.ljust(width)}  {(yes if state['installed'] else no):<9}  "
            f"{yes if state['configured'] else no}"
        )
    log_message("Component status:", "info", logger_to_use, app_settings)
    log_message("\n" + "\n".join(lines), "info", logger_to_use, app_settings)


def view_configuration(
    app_config: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Displays the current effective configuration: a summary of the most
    relevant values followed by the complete settings as YAML, which can be
    saved and edited as a profile.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = app_config.symbols

    config_text = f"{symbols.get('info', 'ℹ️')} Current effective configuration values (CLI > YAML > ENV > Defaults):\n\n"
    config_text += f"  Theme profile:                 {app_config.theme_name}\n"
    config_text += f"  No confirmation (auto mode):   {app_config.noconfirm}\n"
    config_text += f"  Auto elevate with sudo:        {app_config.auto_elevate}\n"
    config_text += f"  Official packages:             {len(app_config.packages.official)}\n"
    config_text += f"  AUR packages:                  {', '.join(app_config.aur.packages) or '(none)'}\n"
    config_text += f"  GTK theme:                     {app_config.gtk_theme.name} ({app_config.gtk_theme.kind.value})\n"
    config_text += f"  Icon theme:                    {app_config.icon_theme.name} ({app_config.icon_theme.kind.value})\n"
    config_text += f"  Selected components:           {', '.join(app_config.components) or '(all except opt-in)'}\n\n"
    config_text += f"  Project root (static):         {static_config.PROJECT_ROOT}\n"
    config_text += f"  Script Version (static):       {static_config.SCRIPT_VERSION}\n"
    config_text += f"  Timestamp (current view):      {datetime.datetime.now().strftime('%Y-%m-%d-%H%M%S')}\n\n"
    config_text += yaml.safe_dump(
        app_config.model_dump(mode="json", exclude={"symbols"}),
        sort_keys=False,
        allow_unicode=True,
    )

    log_message(
        "Displaying current configuration:", "info", logger_to_use, app_config
    )
    log_message(f"\n{config_text}", "info", logger_to_use, app_config)
