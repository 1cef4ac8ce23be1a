"""
AUR packages installer module.

Bootstraps the AUR helper for the target user when needed and installs the
configured AUR packages with it.
"""

from common.arch.aur_helper import AurHelper
from common.command_utils import check_package_installed, log_message
from common.prompt_utils import run_confirmed_command
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="aur",
    metadata={
        "dependencies": ["packages"],
        "description": "AUR helper and AUR packages",
    },
)
class AurInstaller(BaseComponent):
    """Installer for packages from the Arch User Repository."""

    @property
    def helper(self) -> AurHelper:
        return AurHelper(self.user, self.app_settings, self.logger)

    def install(self) -> bool:
        packages = self.app_settings.aur.packages
        if not packages:
            log_message(
                "No AUR packages configured, skipping.",
                "info",
                self.logger,
                self.app_settings,
            )
            return True

        helper = self.helper
        if not helper.bootstrap():
            return False

        return run_confirmed_command(
            helper.install_command(packages),
            "Install AUR packages",
            self.app_settings,
            user=self.user.name,
            current_logger=self.logger,
        )

    def configure(self) -> bool:
        """Nothing to configure."""
        return True

    def is_installed(self) -> bool:
        packages = self.app_settings.aur.packages
        if not packages:
            return True
        if not self.helper.is_available():
            return False
        return all(
            check_package_installed(pkg, self.app_settings, self.logger)
            for pkg in packages
        )

    def is_configured(self) -> bool:
        return True
