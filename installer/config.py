# installer/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants and definitions for the Hyprland rice installer.

This module defines truly static values, such as the script version, logging
symbols, the terminal palette and fixed project paths.

Mutable runtime configuration (package lists, theme sources, services) is
handled by 'installer/config_models.py' and 'installer/config_loader.py'.
"""

from pathlib import Path

SCRIPT_VERSION: str = "2.0.0"

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

CONFIGS_DIR: Path = PROJECT_ROOT / "configs"
ASSETS_DIR: Path = PROJECT_ROOT / "assets"

OS_RELEASE_PATH: Path = Path("/etc/os-release")

ENV_PREFIX: str = "HYPRRICE_"

SYMBOLS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}

# Dracula palette, 24-bit ANSI escapes.
COLORS: dict[str, str] = {
    "red": "\033[38;2;255;85;85m",
    "green": "\033[38;2;80;250;123m",
    "yellow": "\033[38;2;241;250;140m",
    "purple": "\033[38;2;189;147;249m",
    "cyan": "\033[38;2;139;233;253m",
    "bold": "\033[1m",
    "reset": "\033[0m",
}

# Component execution order for a full run.
DEFAULT_COMPONENT_ORDER: list[str] = [
    "packages",
    "gpu_drivers",
    "aur",
    "services",
    "dotfiles",
    "gtk_theme",
    "icon_theme",
    "hyprland",
    "wallpapers",
    "thunar",
]
