"""
Orchestrator for the component framework.

This module provides the ComponentOrchestrator class, which is responsible for
importing the component modules, resolving dependencies, and executing the
components in the correct order.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from typing import Dict, List, Optional, Type

from common.core_utils import log_header
from common.system_utils import TargetUser
from installer.base_component import BaseComponent
from installer.config import DEFAULT_COMPONENT_ORDER
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry

COMPONENTS_PACKAGE = "installer.components"


class ComponentOrchestrator:
    """
    Orchestrator for the component framework.

    Components are run strictly one after another. A failing component is
    logged and the run continues, unless the component is marked fatal.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            app_settings: The application settings.
            user: The desktop user receiving the configuration.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.user = user
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.results: Dict[str, bool] = {}

        # Import all component modules to ensure they are registered
        import_component_modules(self.logger)

    def get_available_components(self) -> Dict[str, Type[BaseComponent]]:
        return ComponentRegistry.get_all_components()

    def default_component_names(self) -> List[str]:
        """
        Every registered component that is not opt-in, in the canonical run
        order. Components missing from that order are appended alphabetically.
        """
        available = {
            name: cls
            for name, cls in self.get_available_components().items()
            if not cls.metadata.get("opt_in", False)
        }
        ordered = [name for name in DEFAULT_COMPONENT_ORDER if name in available]
        ordered += sorted(name for name in available if name not in ordered)
        return ordered

    def resolve_dependencies(self, component_names: List[str]) -> List[str]:
        """
        Resolve dependencies for a list of components.

        Args:
            component_names: A list of component names.

        Returns:
            A list of component names in the order they should be processed.
        """
        return ComponentRegistry.resolve_dependencies(component_names)

    def _create(self, name: str) -> BaseComponent:
        return ComponentRegistry.get_component(name)(
            self.app_settings, self.user, self.logger
        )

    def apply(self, component_names: Optional[List[str]] = None) -> bool:
        """
        Install and then configure each component.

        Args:
            component_names: Components to run; None or empty runs all of them.

        Returns:
            True if every component succeeded, False otherwise.

        Raises:
            KeyError: An unknown component was requested.
            ValueError: The dependencies contain a cycle.
        """
        requested = component_names or self.default_component_names()
        resolved_names = self.resolve_dependencies(requested)
        self.results = {}

        self.logger.info(
            f"Processing components in order: {', '.join(resolved_names)}"
        )

        for name in resolved_names:
            component = self._create(name)
            log_header(component.get_description() or name, self.logger)

            ok = self._run_component(name, component)
            self.results[name] = ok

            if not ok and component.is_fatal():
                self.logger.critical(
                    f"Component '{name}' failed and is required by the remaining steps. Aborting."
                )
                return False

        failed = [name for name, ok in self.results.items() if not ok]
        if failed:
            self.logger.error(
                f"Completed with failures in: {', '.join(failed)}"
            )
            return False

        self.logger.info("All components completed successfully")
        return True

    def _run_component(self, name: str, component: BaseComponent) -> bool:
        try:
            if not component.install():
                self.logger.error(f"Failed to install component: {name}")
                return False
            if not component.configure():
                self.logger.error(f"Failed to configure component: {name}")
                return False
        except Exception as e:
            self.logger.exception(f"Error while processing component {name}: {e}")
            return False

        self.logger.info(f"Successfully processed component: {name}")
        return True

    def check_status(
        self, component_names: Optional[List[str]] = None
    ) -> Dict[str, Dict[str, bool]]:
        """
        Check the status of the specified components.

        Args:
            component_names: A list of component names; None checks all of them.

        Returns:
            A dictionary mapping component names to their status (installed and configured).
        """
        names = component_names or self.default_component_names()
        status = {}
        for name in names:
            component = self._create(name)
            try:
                installed = component.is_installed()
                configured = component.is_configured()
            except Exception as e:
                self.logger.error(f"Error checking status of {name}: {e}")
                installed = configured = False

            status[name] = {"installed": installed, "configured": configured}
            self.logger.debug(
                f"Component {name}: installed={installed}, configured={configured}"
            )
        return status


def import_component_modules(logger: Optional[logging.Logger] = None) -> None:
    """
    Import every module under installer/components/<name>/ so that the
    component classes register themselves.
    """
    logger = logger or logging.getLogger(__name__)
    package = importlib.import_module(COMPONENTS_PACKAGE)
    components_path = Path(package.__file__).parent

    for component_dir in sorted(p for p in components_path.iterdir() if p.is_dir()):
        if component_dir.name.startswith(("_", ".")):
            continue
        for _, module_name, _ in pkgutil.iter_modules([str(component_dir)]):
            if module_name == "__init__":
                continue
            importlib.import_module(
                f"{COMPONENTS_PACKAGE}.{component_dir.name}.{module_name}"
            )
            logger.debug(
                f"Imported component module: {component_dir.name}.{module_name}"
            )
