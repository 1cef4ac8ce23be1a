import pytest

from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


class _Dummy(BaseComponent):
    def install(self):
        return True

    def configure(self):
        return True

    def is_installed(self):
        return True

    def is_configured(self):
        return True


def _register(name, dependencies=(), fatal=False):
    cls = type(name.title(), (_Dummy,), {})
    return ComponentRegistry.register(
        name=name,
        metadata={
            "dependencies": list(dependencies),
            "description": f"{name} component",
            "fatal": fatal,
        },
    )(cls)


@pytest.fixture(autouse=True)
def empty_registry(mocker):
    mocker.patch.object(ComponentRegistry, "_registry", {})


def test_register_and_get():
    cls = _register("dotfiles")

    assert ComponentRegistry.get_component("dotfiles") is cls
    assert ComponentRegistry.get_all_components() == {"dotfiles": cls}


def test_register_duplicate_name():
    _register("dotfiles")

    with pytest.raises(ValueError, match="already taken by Dotfiles"):
        _register("dotfiles")


def test_get_unknown_component_lists_known_names():
    _register("dotfiles")
    _register("aur")

    with pytest.raises(KeyError, match="known components: aur, dotfiles"):
        ComponentRegistry.get_component("missing")


def test_resolve_dependencies_orders_dependencies_first():
    _register("packages")
    _register("dotfiles")
    _register("hyprland", ["dotfiles"])
    _register("gpu_drivers", ["packages"])

    assert ComponentRegistry.resolve_dependencies(["hyprland", "gpu_drivers"]) == [
        "dotfiles",
        "hyprland",
        "packages",
        "gpu_drivers",
    ]


def test_resolve_dependencies_keeps_requested_order_without_duplicates():
    _register("packages")
    _register("aur", ["packages"])
    _register("services", ["packages"])

    assert ComponentRegistry.resolve_dependencies(
        ["packages", "aur", "services"]
    ) == ["packages", "aur", "services"]


def test_resolve_dependencies_detects_cycles():
    _register("a", ["b"])
    _register("b", ["a"])

    with pytest.raises(ValueError, match="a -> b -> a"):
        ComponentRegistry.resolve_dependencies(["a"])


def test_resolve_dependencies_unknown_dependency():
    _register("hyprland", ["dotfiles"])

    with pytest.raises(KeyError):
        ComponentRegistry.resolve_dependencies(["hyprland"])
