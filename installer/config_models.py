# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the installer, including
defaults, type annotations, and descriptions. The defaults describe the
Dracula profile; other themed variations are expressed as YAML profiles
that override these values.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from installer.config import ENV_PREFIX, SYMBOLS

SYMBOLS_DEFAULT: Dict[str, str] = dict(SYMBOLS)

LOG_PREFIX_DEFAULT: str = "[SETUP]"

OFFICIAL_PACKAGES_DEFAULT: List[str] = [
    "git", "base-devel", "pipewire", "wireplumber", "pamixer", "brightnessctl",
    "ttf-jetbrains-mono-nerd", "ttf-iosevka-nerd", "ttf-fira-code", "ttf-fira-mono",
    "sddm", "kitty", "nano", "tar", "unzip", "gnome-disk-utility", "code", "mpv",
    "dunst", "pacman-contrib", "exo", "firefox", "cava", "steam",
    "thunar", "thunar-archive-plugin", "thunar-volman", "tumbler",
    "ffmpegthumbnailer", "file-roller",
    "gvfs", "gvfs-mtp", "gvfs-gphoto2", "gvfs-smb", "polkit", "polkit-gnome",
    "waybar", "hyprland", "hyprpaper", "hypridle", "hyprlock", "starship",
    "fastfetch",
]

GPU_DRIVER_PACKAGES_DEFAULT: Dict[str, List[str]] = {
    "nvidia": ["nvidia", "nvidia-utils", "nvidia-settings"],
    "amd": ["xf86-video-amdgpu", "vulkan-radeon", "libva-mesa-driver", "mesa-vdpau"],
    "intel": ["mesa", "libva-intel-driver", "intel-media-driver", "vulkan-intel"],
}

HYPRPAPER_TEMPLATE_DEFAULT: str = """\
# Preload your wallpaper
# The path should be an absolute path to your wallpaper file
preload = {wallpaper}
# set the wallpaper for a workspace
wallpaper = ,{wallpaper}
# Or to use a specific wallpaper for a specific monitor:
# wallpaper = HDMI-A-1,{wallpaper}
"""

THUNAR_UCA_TEMPLATE_DEFAULT: str = """\
<?xml version="1.0" encoding="UTF-8"?>
<actions>
    <action>
        <icon>utilities-terminal</icon>
        <name>Open {terminal_title} Here</name>
        <command>{terminal} --directory=%d</command>
        <description>Open {terminal} terminal in the current folder</description>
        <patterns>*</patterns>
        <directories_only>true</directories_only>
        <startup_notify>true</startup_notify>
    </action>
</actions>
"""

# Per-application configs of the pywal profile, keyed by path relative to
# ~/.config. Placeholders: {home}, {config_dir}, {font}.
APP_CONFIG_TEMPLATES_DEFAULT: Dict[str, str] = {
    "hypr/hyprland.conf": """\
monitor=,preferred,auto,auto

# Autostart services
exec-once = swww-daemon
exec-once = ~/.config/scripts/apply-pywal.sh -R
exec-once = waybar
exec-once = dunst

# Keybinds
bind = SUPER, RETURN, exec, kitty
bind = SUPER, E, exec, ~/.config/scripts/switch-wallpaper.sh
bind = SUPER, R, exec, tofi-drun | xargs -r hyprctl dispatch exec --

# Basic look
general {{
  gaps_in = 6
  gaps_out = 10
  border_size = 2
}}

# Colors written by apply-pywal.sh
source = ~/.config/hypr/colors-hypr.conf
""",
    "waybar/config": """\
{{
  "layer": "top",
  "position": "top",
  "modules-left": ["clock"],
  "modules-right": ["cpu", "memory", "pulseaudio", "tray"]
}}
""",
    "waybar/style.css": """\
@import url("{config_dir}/waybar/colors.css");
* {{ font-family: "{font}"; }}
window#waybar {{ background: @background; color: @foreground; }}
""",
    "kitty/kitty.conf": """\
include ~/.cache/wal/colors-kitty.conf
font_family {font}
""",
    "dunst/dunstrc": """\
[global]
    font = {font} 10
    frame_width = 2
[urgency_low]
    background = "#222222"
    foreground = "#dddddd"
[urgency_normal]
    background = "#1e1e2e"
    foreground = "#cdd6f4"
[urgency_critical]
    background = "#ff5555"
    foreground = "#ffffff"
""",
    "tofi/config": """\
text-color="#ffffff"
background-color="#111111cc"
selection-color="#5e81ac"
selection-text-color="#ffffff"
""",
    "starship.toml": """\
format = "$directory$git_branch$character"
[directory]
truncation_length = 3
[character]
success_symbol = "➜ "
error_symbol = "✗ "
""",
}

# Placeholders: {wallpaper}, {wallpapers_dir}.
APPLY_PYWAL_SCRIPT_DEFAULT: str = r"""#!/bin/bash
# Regenerate the pywal scheme from the current wallpaper and push it to
# Waybar, Tofi and Hyprland. With -R the cached scheme is restored instead.
set -euo pipefail
FLAG="${{1:-}}"

WALL="{wallpaper}"
if [[ ! -f "$WALL" ]]; then
  CANDIDATE="$(find "{wallpapers_dir}" -type f 2>/dev/null | sort | head -n1)"
  if [[ -n "$CANDIDATE" ]]; then
    mkdir -p "$(dirname "$WALL")"
    cp "$CANDIDATE" "$WALL"
  fi
fi

if [[ "$FLAG" == "-R" ]]; then
  wal -R -n || true
else
  wal -i "$WALL" -n
fi

# Waybar
mkdir -p "$HOME/.config/waybar"
ln -sf "$HOME/.cache/wal/colors-waybar.css" "$HOME/.config/waybar/colors.css"

# Tofi colors
COLORS="$HOME/.cache/wal/colors.sh"
if [[ -f "$COLORS" ]]; then
  source "$COLORS"
  sed -i \
    -e "s/^text-color=.*/text-color=\"$foreground\"/" \
    -e "s/^background-color=.*/background-color=\"${{background}}cc\"/" \
    -e "s/^selection-color=.*/selection-color=\"$color3\"/" \
    -e "s/^selection-text-color=.*/selection-text-color=\"$foreground\"/" \
    "$HOME/.config/tofi/config" || true
fi

# Hyprland colors
mkdir -p "$HOME/.config/hypr"
{{
  echo "# Generated by apply-pywal.sh"
  if [[ -f "$COLORS" ]]; then
    echo "general:col.active_border = rgb(${{color4:1}})"
    echo "general:col.inactive_border = rgb(${{color8:1}})"
  else
    echo "general:col.active_border = 0xff89b4fa"
    echo "general:col.inactive_border = 0xff444444"
  fi
}} > "$HOME/.config/hypr/colors-hypr.conf"

# Restart Waybar and reload Hyprland if they are running
pkill -x waybar >/dev/null 2>&1 || true
(waybar >/dev/null 2>&1 &)
hyprctl reload >/dev/null 2>&1 || true
"""

# Placeholders: {wallpaper}, {wallpapers_dir}.
SWITCH_WALLPAPER_SCRIPT_DEFAULT: str = r"""#!/bin/bash
# Pick a wallpaper with tofi, show it with swww and recolour the desktop.
set -euo pipefail
WALLDIR="{wallpapers_dir}"
mkdir -p "$WALLDIR"

SEL="$(find "$WALLDIR" -type f | sort | tofi --prompt-text 'Choose wallpaper:' || true)"
if [[ -z "$SEL" ]]; then
  exit 0
fi

swww img "$SEL" --transition-type any --transition-duration 0.6
cp "$SEL" "{wallpaper}"
"$HOME/.config/scripts/apply-pywal.sh"
"""

# Fallback colour file until apply-pywal.sh has run once.
HYPR_COLORS_FALLBACK: str = """\
# Generated by the installer; apply-pywal.sh replaces this file.
general:col.active_border = 0xff89b4fa
general:col.inactive_border = 0xff444444
"""


class SourceKind(str, Enum):
    """Where a theme is fetched from."""

    ARCHIVE = "archive"
    GIT = "git"
    URL = "url"


class PackageSettings(BaseModel):
    """Official repository packages installed with pacman."""

    official: List[str] = Field(
        default_factory=lambda: list(OFFICIAL_PACKAGES_DEFAULT),
        description="Packages installed with 'pacman -Syu --needed'.",
    )
    upgrade_system: bool = Field(
        default=True,
        description="Perform a full system upgrade (-Syu) alongside the install.",
    )


class GpuSettings(BaseModel):
    """GPU driver selection."""

    driver_packages: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            vendor: list(pkgs)
            for vendor, pkgs in GPU_DRIVER_PACKAGES_DEFAULT.items()
        },
        description="Driver packages keyed by GPU vendor (nvidia, amd, intel).",
    )
    hybrid_packages: List[str] = Field(
        default_factory=lambda: ["nvidia-prime"],
        description="Extra packages for hybrid Intel + NVIDIA systems.",
    )
    nvidia_wayland_env: bool = Field(
        default=True,
        description="Export WLR_* variables in ~/.profile on NVIDIA systems.",
    )
    wlr_drm_devices: Optional[str] = Field(
        default="/dev/dri/card1",
        description="Value for WLR_DRM_DEVICES; None to leave it unset.",
    )
    offer_forced_nvidia: bool = Field(
        default=True,
        description="Offer NVIDIA drivers when no supported GPU is detected (interactive only).",
    )


class AurSettings(BaseModel):
    """AUR helper bootstrap and packages."""

    helper: str = Field(default="yay", description="AUR helper executable.")
    helper_repo_url: str = Field(
        default="https://aur.archlinux.org/yay.git",
        description="Git URL used to bootstrap the AUR helper.",
    )
    packages: List[str] = Field(
        default_factory=list,
        description="Packages installed from the AUR. Empty skips the step.",
    )


class ServiceUnit(BaseModel):
    """A systemd unit to enable."""

    name: str
    now: bool = Field(default=False, description="Also start the unit (--now).")


class ServicesSettings(BaseModel):
    units: List[ServiceUnit] = Field(
        default_factory=lambda: [
            ServiceUnit(name="polkit.service", now=True),
            ServiceUnit(name="sddm.service", now=False),
        ]
    )


class DotfileEntry(BaseModel):
    """A directory under 'configs/' copied into '~/.config'."""

    source: str
    destination: Optional[str] = None
    label: Optional[str] = None

    @property
    def dest_name(self) -> str:
        return self.destination or self.source

    @property
    def display_name(self) -> str:
        return self.label or self.source.capitalize()


class DotfilesSettings(BaseModel):
    entries: List[DotfileEntry] = Field(
        default_factory=lambda: [
            DotfileEntry(source="waybar", label="Waybar"),
            DotfileEntry(source="hypr", label="Hyprland"),
            DotfileEntry(source="kitty", label="Kitty"),
            DotfileEntry(source="dunst", label="Dunst"),
        ]
    )


class ThemeSource(BaseModel):
    """
    Describes how a GTK or icon theme is fetched and placed.

    For 'archive' sources, 'archive' names a zip/tar file under assets/.
    For 'git' sources, 'url' is cloned and 'subdirectory' (if any) inside the
    clone is used as the theme directory.
    For 'url' sources, 'url' is an archive downloaded over HTTP(S).
    """

    name: str = Field(description="Final directory name of the installed theme.")
    kind: SourceKind = Field(default=SourceKind.ARCHIVE)
    archive: Optional[str] = Field(
        default=None, description="Archive file name relative to assets/."
    )
    url: Optional[str] = Field(default=None, description="Git repository URL.")
    branch: Optional[str] = Field(default=None, description="Git branch or tag.")
    subdirectory: Optional[str] = Field(
        default=None, description="Directory inside the git clone holding the theme."
    )
    extracted_name: Optional[str] = Field(
        default=None,
        description="Expected top-level directory produced by the archive.",
    )
    extracted_glob: Optional[str] = Field(
        default=None,
        description="Glob used to find the extracted directory when its name varies.",
    )

    @model_validator(mode="after")
    def _check_source(self) -> "ThemeSource":
        if self.kind == SourceKind.ARCHIVE and not self.archive:
            raise ValueError(f"Theme '{self.name}': archive source requires 'archive'.")
        if self.kind in (SourceKind.GIT, SourceKind.URL) and not self.url:
            raise ValueError(
                f"Theme '{self.name}': {self.kind.value} source requires 'url'."
            )
        return self


class GtkSettings(BaseModel):
    """GTK settings.ini values and gsettings application."""

    font_name: str = Field(default="JetBrainsMono 10")
    versions: List[str] = Field(default_factory=lambda: ["gtk-3.0", "gtk-4.0"])
    apply_gsettings: bool = Field(default=True)


class HyprlandSettings(BaseModel):
    """Snippets written into the user's Hyprland configuration."""

    vars_file: str = Field(default="hypr-vars.conf")
    extra_env: Dict[str, str] = Field(
        default_factory=lambda: {"XDG_CURRENT_DESKTOP": "Hyprland"}
    )
    exec_once: Dict[str, str] = Field(
        default_factory=lambda: {
            "hyprpaper": "Launch hyprpaper for wallpaper management",
            "waybar": "Launch waybar, the status bar",
            "dunst": "Launch dunst, the notification daemon",
            "hypridle": "Launch hypridle for power management and locking",
        },
        description="Programs started with exec-once, mapped to their comment.",
    )


class WallpaperSettings(BaseModel):
    source_dir: str = Field(default="backgrounds", description="Relative to assets/.")
    destination_dir: str = Field(
        default="assets/backgrounds", description="Relative to ~/.config."
    )
    default_wallpaper: str = Field(default="~/.config/assets/backgrounds/default.png")
    hyprpaper_template: str = Field(default=HYPRPAPER_TEMPLATE_DEFAULT)


class ThunarSettings(BaseModel):
    terminal: str = Field(default="kitty")
    uca_template: str = Field(default=THUNAR_UCA_TEMPLATE_DEFAULT)
    restart: bool = Field(default=True)


class AppConfigSettings(BaseModel):
    """Per-application config files rendered into ~/.config."""

    font: str = Field(default="JetBrainsMono Nerd Font")
    templates: Dict[str, Optional[str]] = Field(
        default_factory=lambda: dict(APP_CONFIG_TEMPLATES_DEFAULT),
        description=(
            "Path relative to ~/.config -> template. Placeholders: {home}, "
            "{config_dir}, {font}. Set an entry to null to skip that file."
        ),
    )


class PywalSettings(BaseModel):
    """Wallpaper-driven colours: default wallpaper, GTK links and helper scripts."""

    wallpaper_url: Optional[str] = Field(
        default="https://picsum.photos/1920/1080",
        description="Downloaded when the wallpaper is missing; None to skip.",
    )
    wallpaper: str = Field(
        default="assets/wallpaper.jpg", description="Relative to ~/.config."
    )
    wallpapers_dir: str = Field(
        default="Pictures/wallpapers", description="Relative to the home directory."
    )
    gtk_versions: List[str] = Field(default_factory=lambda: ["gtk-3.0"])
    apply_script_template: str = Field(default=APPLY_PYWAL_SCRIPT_DEFAULT)
    switch_script_template: str = Field(default=SWITCH_WALLPAPER_SCRIPT_DEFAULT)
    apply_on_configure: bool = Field(
        default=True, description="Run apply-pywal.sh once the files are in place."
    )


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, env_nested_delimiter="__", extra="ignore"
    )

    noconfirm: bool = Field(
        default=False, description="Disable every interactive prompt."
    )
    auto_elevate: bool = Field(
        default=False,
        description="Re-execute through 'sudo -E' instead of aborting when not root.",
    )
    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT)
    theme_name: str = Field(default="dracula", description="Human name of the profile.")
    required_tools: List[str] = Field(default_factory=lambda: ["git", "curl"])
    components: List[str] = Field(
        default_factory=list,
        description="Components to run; empty means every registered component that is not opt-in.",
    )

    packages: PackageSettings = Field(default_factory=PackageSettings)
    gpu: GpuSettings = Field(default_factory=GpuSettings)
    aur: AurSettings = Field(default_factory=AurSettings)
    services: ServicesSettings = Field(default_factory=ServicesSettings)
    dotfiles: DotfilesSettings = Field(default_factory=DotfilesSettings)
    gtk_theme: ThemeSource = Field(
        default_factory=lambda: ThemeSource(
            name="dracula-gtk",
            kind=SourceKind.ARCHIVE,
            archive="dracula-gtk-master.zip",
            extracted_name="gtk-master",
        )
    )
    icon_theme: ThemeSource = Field(
        default_factory=lambda: ThemeSource(
            name="Dracula",
            kind=SourceKind.ARCHIVE,
            archive="Dracula.zip",
            extracted_glob="*Dracula*",
        )
    )
    gtk: GtkSettings = Field(default_factory=GtkSettings)
    hyprland: HyprlandSettings = Field(default_factory=HyprlandSettings)
    wallpapers: WallpaperSettings = Field(default_factory=WallpaperSettings)
    thunar: ThunarSettings = Field(default_factory=ThunarSettings)
    app_configs: AppConfigSettings = Field(default_factory=AppConfigSettings)
    pywal: PywalSettings = Field(default_factory=PywalSettings)

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))
