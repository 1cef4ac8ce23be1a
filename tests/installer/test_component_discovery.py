from installer.config import DEFAULT_COMPONENT_ORDER
from installer.orchestrator import import_component_modules
from installer.registry import ComponentRegistry


def test_import_component_modules_registers_every_component():
    import_component_modules()

    assert set(DEFAULT_COMPONENT_ORDER) <= set(ComponentRegistry.get_all_components())


def test_component_dependencies_resolve_without_cycles():
    import_component_modules()

    order = ComponentRegistry.resolve_dependencies(DEFAULT_COMPONENT_ORDER)

    assert sorted(order) == sorted(DEFAULT_COMPONENT_ORDER)
    assert order.index("packages") < order.index("gpu_drivers")
    assert order.index("dotfiles") < order.index("hyprland")
    assert order.index("dotfiles") < order.index("wallpapers")


def test_only_packages_is_fatal():
    import_component_modules()

    fatal = [
        name
        for name, cls in ComponentRegistry.get_all_components().items()
        if cls.metadata.get("fatal")
    ]
    assert fatal == ["packages"]


def test_pywal_components_are_opt_in():
    import_component_modules()

    components = ComponentRegistry.get_all_components()
    opt_in = sorted(name for name, cls in components.items() if cls.metadata.get("opt_in"))
    assert opt_in == ["app_configs", "pywal"]
    assert ComponentRegistry.resolve_dependencies(["pywal"]) == ["app_configs", "pywal"]
