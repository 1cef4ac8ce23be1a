"""
GPU driver installer module.

Detects the graphics hardware with lspci and installs the matching driver
packages. NVIDIA systems also get the wlroots environment variables Hyprland
needs, exported from the user's ~/.profile.
"""

import logging
from typing import List, Optional

from common.arch.pacman_manager import PacmanManager
from common.command_utils import check_package_installed, log_message
from common.file_utils import ensure_lines, file_contains_line
from common.prompt_utils import ask_confirmation, run_confirmed_command
from common.system_utils import GpuInfo, GpuVendor, TargetUser, get_gpu_info
from installer.base_component import BaseComponent
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry

VENDOR_LABELS = {
    GpuVendor.NVIDIA: "NVIDIA",
    GpuVendor.AMD: "AMD",
    GpuVendor.INTEL: "Intel",
}


@ComponentRegistry.register(
    name="gpu_drivers",
    metadata={
        "dependencies": ["packages"],
        "description": "GPU detection and driver installation",
    },
)
class GpuDriversInstaller(BaseComponent):
    """
    Installer for GPU drivers.

    Vendors are handled in the order NVIDIA, AMD, Intel: the first detected
    vendor decides which package list is installed. Hybrid Intel + NVIDIA
    laptops additionally get PRIME offloading support.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app_settings, user, logger)
        self._gpu_info: Optional[GpuInfo] = None
        self.selected_vendor: Optional[GpuVendor] = None

    @property
    def gpu_info(self) -> GpuInfo:
        if self._gpu_info is None:
            self._gpu_info = get_gpu_info(self.app_settings, self.logger)
        return self._gpu_info

    @property
    def profile_path(self):
        return self.user.home / ".profile"

    def _wayland_env_lines(self) -> List[str]:
        lines = ["export WLR_NO_HARDWARE_CURSORS=1"]
        if self.app_settings.gpu.wlr_drm_devices:
            lines.append(
                f"export WLR_DRM_DEVICES={self.app_settings.gpu.wlr_drm_devices}"
            )
        return lines

    def _select_vendor(self) -> Optional[GpuVendor]:
        info = self.gpu_info
        if info.raw:
            log_message(
                f"Detected graphics hardware:\n{info.raw}",
                "info",
                self.logger,
                self.app_settings,
            )

        vendor = info.primary
        if vendor != GpuVendor.UNKNOWN:
            log_message(
                f"{VENDOR_LABELS[vendor]} GPU detected.",
                "info",
                self.logger,
                self.app_settings,
            )
            return vendor

        log_message(
            f"{self.symbols.get('warning', '')} No supported GPU detected. lspci reported: {info.raw or 'nothing'}",
            "warning",
            self.logger,
            self.app_settings,
        )
        if self.app_settings.gpu.offer_forced_nvidia and ask_confirmation(
            "Try installing NVIDIA drivers anyway?",
            self.app_settings,
            self.logger,
            default_when_noconfirm=False,
        ):
            return GpuVendor.NVIDIA
        return None

    def install(self) -> bool:
        self.selected_vendor = self._select_vendor()
        if self.selected_vendor is None:
            log_message(
                "Skipping GPU driver installation.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return True

        packages = self.app_settings.gpu.driver_packages.get(
            self.selected_vendor.value, []
        )
        if not packages:
            log_message(
                f"No driver packages configured for {self.selected_vendor.value}.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return True

        if not run_confirmed_command(
            PacmanManager.install_command(packages),
            f"Install {VENDOR_LABELS[self.selected_vendor]} drivers",
            self.app_settings,
            current_logger=self.logger,
        ):
            return False

        hybrid_packages = self.app_settings.gpu.hybrid_packages
        if self.gpu_info.is_hybrid_intel_nvidia and hybrid_packages:
            log_message(
                f"{self.symbols.get('warning', '')} Hybrid Intel + NVIDIA graphics detected.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return run_confirmed_command(
                PacmanManager.install_command(hybrid_packages),
                "Install hybrid graphics support",
                self.app_settings,
                current_logger=self.logger,
            )
        return True

    def configure(self) -> bool:
        """Export the wlroots NVIDIA workarounds from ~/.profile."""
        vendor = self.selected_vendor or self.gpu_info.primary
        if vendor != GpuVendor.NVIDIA or not self.app_settings.gpu.nvidia_wayland_env:
            return True

        try:
            added = ensure_lines(
                self.profile_path, self._wayland_env_lines(), self.user
            )
        except OSError as e:
            log_message(
                f"{self.symbols.get('error', '')} Could not update {self.profile_path}: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        for line in added:
            log_message(
                f"Added '{line}' to {self.profile_path}",
                "success",
                self.logger,
                self.app_settings,
            )
        if not added:
            log_message(
                "NVIDIA Wayland environment already present in ~/.profile.",
                "info",
                self.logger,
                self.app_settings,
            )
        return True

    def is_installed(self) -> bool:
        vendor = self.gpu_info.primary
        if vendor == GpuVendor.UNKNOWN:
            return False
        packages = self.app_settings.gpu.driver_packages.get(vendor.value, [])
        return all(
            check_package_installed(pkg, self.app_settings, self.logger)
            for pkg in packages
        )

    def is_configured(self) -> bool:
        if (
            self.gpu_info.primary != GpuVendor.NVIDIA
            or not self.app_settings.gpu.nvidia_wayland_env
        ):
            return True
        return all(
            file_contains_line(self.profile_path, line)
            for line in self._wayland_env_lines()
        )
