"""
Systemd services configurator module.
"""

from common.prompt_utils import run_confirmed_command, wait_for_enter
from common.system_utils import is_service_enabled, systemctl_enable_command
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="services",
    metadata={
        "dependencies": ["packages"],
        "description": "Enable system services",
    },
)
class ServicesConfigurator(BaseComponent):
    """
    Enables the configured systemd units. Units flagged 'now' are started
    immediately; the display manager is only enabled so it takes over on the
    next boot.
    """

    def install(self) -> bool:
        """Services come with their packages."""
        return True

    def configure(self) -> bool:
        # One pause for the whole group, then each unit runs unprompted
        wait_for_enter("Enable system services", self.app_settings)

        all_ok = True
        for unit in self.app_settings.services.units:
            if not run_confirmed_command(
                systemctl_enable_command(unit.name, now=unit.now),
                f"Enable {unit.name}",
                self.app_settings,
                ask_confirm=False,
                current_logger=self.logger,
            ):
                all_ok = False
        return all_ok

    def is_installed(self) -> bool:
        return True

    def is_configured(self) -> bool:
        return all(
            is_service_enabled(unit.name, self.app_settings, self.logger)
            for unit in self.app_settings.services.units
        )
