# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the installer.

This module includes functions for resolving the desktop user behind sudo,
privilege checks, OS detection from /etc/os-release, GPU vendor detection
and systemd unit handling.
"""

import logging
import os
import pwd
import re
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from common.command_utils import (
    get_symbols,
    log_message,
    run_command,
)
from installer.config import OS_RELEASE_PATH
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

_GPU_LINE_PATTERN = re.compile(r"VGA|3D", re.IGNORECASE)


class GpuVendor(str, Enum):
    NVIDIA = "nvidia"
    AMD = "amd"
    INTEL = "intel"
    UNKNOWN = "unknown"


# Checked in this order; the first match is the primary vendor.
GPU_VENDOR_KEYWORDS: List[Tuple[GpuVendor, Tuple[str, ...]]] = [
    (GpuVendor.NVIDIA, ("nvidia",)),
    (GpuVendor.AMD, ("amd", "radeon", "advanced micro devices")),
    (GpuVendor.INTEL, ("intel",)),
]


@dataclass(frozen=True)
class TargetUser:
    """The account whose home directory receives the desktop configuration."""

    name: str
    uid: int
    gid: int
    home: Path

    @property
    def config_dir(self) -> Path:
        return self.home / ".config"


@dataclass
class GpuInfo:
    """Result of GPU detection."""

    raw: str
    vendors: Set[GpuVendor]

    @property
    def primary(self) -> GpuVendor:
        for vendor, _ in GPU_VENDOR_KEYWORDS:
            if vendor in self.vendors:
                return vendor
        return GpuVendor.UNKNOWN

    @property
    def is_hybrid_intel_nvidia(self) -> bool:
        return {GpuVendor.NVIDIA, GpuVendor.INTEL} <= self.vendors


def is_root() -> bool:
    return os.geteuid() == 0


def resolve_target_user(environ: Optional[Dict[str, str]] = None) -> TargetUser:
    """
    Resolve the real desktop user.

    When running under sudo, SUDO_USER names the invoking account; otherwise
    the current account is used. Home, uid and gid come from the password
    database, never from $HOME, since sudo may preserve the caller's HOME.

    Raises:
        KeyError: The user does not exist in the password database.
    """
    env = os.environ if environ is None else environ
    name = env.get("SUDO_USER") or env.get("USER")
    if name:
        entry = pwd.getpwnam(name)
    else:
        entry = pwd.getpwuid(os.geteuid())
    return TargetUser(
        name=entry.pw_name,
        uid=entry.pw_uid,
        gid=entry.pw_gid,
        home=Path(entry.pw_dir),
    )


def reexec_with_sudo(argv: Optional[List[str]] = None) -> None:
    """
    Replace the current process with the same invocation under 'sudo -E'.
    Does not return.
    """
    args = list(sys.argv if argv is None else argv)
    os.execvp("sudo", ["sudo", "-E", sys.executable] + args)


def read_os_release(path: Path = OS_RELEASE_PATH) -> Optional[Dict[str, str]]:
    """
    Parse an os-release file into a dict. Returns None if the file is missing.

    Values may be quoted with single or double quotes; comments and blank
    lines are ignored.
    """
    if not path.is_file():
        return None
    data: Dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        data[key.strip()] = value
    return data


def is_arch_linux(os_release: Dict[str, str]) -> bool:
    if os_release.get("ID") == "arch":
        return True
    return "arch" in os_release.get("ID_LIKE", "").split()


def get_gpu_info(
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> GpuInfo:
    """
    Detect GPU vendors from the VGA/3D controller lines of 'lspci'.

    Returns an empty vendor set (primary UNKNOWN) when lspci is missing or
    fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    try:
        result = run_command(
            ["lspci"],
            app_settings,
            capture_output=True,
            check=True,
            current_logger=logger_to_use,
        )
    except FileNotFoundError:
        log_message(
            f"{symbols.get('warning', '!')} lspci command not found. Install 'pciutils' for GPU detection.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return GpuInfo(raw="", vendors=set())
    except subprocess.CalledProcessError:
        return GpuInfo(raw="", vendors=set())

    gpu_lines = [
        line
        for line in (result.stdout or "").splitlines()
        if _GPU_LINE_PATTERN.search(line)
    ]
    raw = "\n".join(gpu_lines)
    lowered = raw.lower()
    vendors = {
        vendor
        for vendor, keywords in GPU_VENDOR_KEYWORDS
        if any(keyword in lowered for keyword in keywords)
    }
    return GpuInfo(raw=raw, vendors=vendors)


def systemctl_enable_command(unit: str, now: bool = False) -> List[str]:
    """Build 'systemctl enable [--now] <unit>'."""
    command = ["systemctl", "enable"]
    if now:
        command.append("--now")
    command.append(unit)
    return command


def is_service_enabled(
    unit: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    try:
        result = run_command(
            ["systemctl", "is-enabled", unit],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=current_logger,
        )
    except FileNotFoundError:
        return False
    return result.returncode == 0 and result.stdout.strip() == "enabled"
