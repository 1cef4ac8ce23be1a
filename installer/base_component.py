"""
Base component class for all component modules.

This module provides the base class that all component modules must inherit from.
It defines the common interface that all components must implement.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from common.system_utils import TargetUser
from installer.config_models import AppSettings


class BaseComponent(ABC):
    """
    Base class for all component modules.

    A component has two phases: install (packages and other system-level
    work) and configure (files in the target user's home). Both return True
    on success. The status checks are used by the 'status' command and to
    skip configuration that is already in place.
    """

    # Class-level metadata that can be overridden by subclasses or set by the registry decorator
    metadata: Dict[str, Any] = {
        "dependencies": [],  # Components that must run first
        "description": "",  # Description of the component
        "fatal": False,  # Abort the whole run if this component fails
        "opt_in": False,  # Only run when named explicitly or in a profile
    }

    def __init__(
        self,
        app_settings: AppSettings,
        user: TargetUser,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the component.

        Args:
            app_settings: The application settings.
            user: The desktop user receiving the configuration.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.user = user
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def symbols(self) -> Dict[str, str]:
        return self.app_settings.symbols

    @abstractmethod
    def install(self) -> bool:
        """
        Install the component.

        Returns:
            True if the installation was successful, False otherwise.
        """

    @abstractmethod
    def configure(self) -> bool:
        """
        Configure the component.

        Returns:
            True if the configuration was successful, False otherwise.
        """

    @abstractmethod
    def is_installed(self) -> bool:
        """Check if the component is installed."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the component is configured."""

    def is_fatal(self) -> bool:
        return bool(self.metadata.get("fatal", False))

    def get_description(self) -> str:
        """
        Get the description of the component.

        Returns:
            The description of the component.
        """
        return str(self.metadata.get("description", ""))
