"""
Hyprland rice installer framework.

This package provides a component framework for installing and configuring
a themed Hyprland desktop on Arch Linux. Components subclass
`installer.base_component.BaseComponent` and register through
`installer.registry.ComponentRegistry`.
"""
