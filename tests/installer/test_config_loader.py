import argparse

import pytest

from installer.config import PROJECT_ROOT
from installer.config_loader import _deep_update, load_app_settings, load_yaml_file
from installer.config_models import SourceKind


def _cli(**kwargs):
    defaults = {
        "noconfirm": False,
        "auto_elevate": False,
        "verbose": False,
        "config": "config.yaml",
        "log_file": None,
        "command": "apply",
        "components": [],
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


def test_deep_update_merges_nested_dicts():
    source = {"gpu": {"wlr_drm_devices": "/dev/dri/card1", "nvidia_wayland_env": True}}

    result = _deep_update(source, {"gpu": {"wlr_drm_devices": "/dev/dri/card0"}})

    assert result == {
        "gpu": {"wlr_drm_devices": "/dev/dri/card0", "nvidia_wayland_env": True}
    }


def test_deep_update_none_replaces_value():
    assert _deep_update({"a": 1}, {"a": None, "b": None}) == {"a": None, "b": None}


def test_defaults_without_config_file(tmp_path, mock_logger):
    settings = load_app_settings(
        None, tmp_path / "missing.yaml", current_logger=mock_logger
    )

    assert settings.noconfirm is False
    assert settings.gtk_theme.name == "dracula-gtk"
    assert settings.icon_theme.extracted_glob == "*Dracula*"
    assert [unit.name for unit in settings.services.units] == [
        "polkit.service",
        "sddm.service",
    ]


def test_yaml_overrides_defaults(tmp_path, mock_logger):
    config = tmp_path / "profile.yaml"
    config.write_text(
        "theme_name: pywal\n"
        "aur:\n"
        "  packages: [tofi]\n"
        "gpu:\n"
        "  driver_packages:\n"
        "    nvidia: [nvidia, lib32-nvidia-utils]\n"
        "gtk_theme:\n"
        "  kind: git\n"
        "  url: https://github.com/dracula/gtk.git\n",
        encoding="utf-8",
    )

    settings = load_app_settings(None, config, current_logger=mock_logger)

    assert settings.theme_name == "pywal"
    assert settings.aur.packages == ["tofi"]
    assert settings.gpu.driver_packages["nvidia"] == ["nvidia", "lib32-nvidia-utils"]
    # Vendors not mentioned keep their defaults
    assert "vulkan-intel" in settings.gpu.driver_packages["intel"]
    assert settings.gtk_theme.kind == SourceKind.GIT
    assert settings.gtk_theme.name == "dracula-gtk"


def test_environment_is_overridden_by_yaml(tmp_path, monkeypatch, mock_logger):
    monkeypatch.setenv("HYPRRICE_THEME_NAME", "from-env")
    monkeypatch.setenv("HYPRRICE_GPU__WLR_DRM_DEVICES", "/dev/dri/card0")
    config = tmp_path / "profile.yaml"
    config.write_text("theme_name: from-yaml\n", encoding="utf-8")

    settings = load_app_settings(None, config, current_logger=mock_logger)

    assert settings.theme_name == "from-yaml"
    assert settings.gpu.wlr_drm_devices == "/dev/dri/card0"


def test_cli_overrides_yaml(tmp_path, mock_logger):
    config = tmp_path / "profile.yaml"
    config.write_text(
        "noconfirm: false\ncomponents: [packages]\n", encoding="utf-8"
    )

    settings = load_app_settings(
        _cli(noconfirm=True, components=["dotfiles", "thunar"]),
        config,
        current_logger=mock_logger,
    )

    assert settings.noconfirm is True
    assert settings.components == ["dotfiles", "thunar"]


def test_yaml_null_unsets_optional_value(tmp_path, mock_logger):
    config = tmp_path / "profile.yaml"
    config.write_text("gpu:\n  wlr_drm_devices: null\n", encoding="utf-8")

    settings = load_app_settings(_cli(), config, current_logger=mock_logger)

    assert settings.gpu.wlr_drm_devices is None
    assert settings.gpu.nvidia_wayland_env is True


def test_unset_cli_value_keeps_yaml_value(tmp_path, mock_logger):
    config = tmp_path / "profile.yaml"
    config.write_text("log_prefix: \"[rice] \"\n", encoding="utf-8")

    settings = load_app_settings(
        _cli(log_prefix=None), config, current_logger=mock_logger
    )

    assert settings.log_prefix == "[rice] "


def test_unset_cli_flags_keep_yaml_values(tmp_path, mock_logger):
    config = tmp_path / "profile.yaml"
    config.write_text("noconfirm: true\ncomponents: [packages]\n", encoding="utf-8")

    settings = load_app_settings(_cli(), config, current_logger=mock_logger)

    assert settings.noconfirm is True
    assert settings.components == ["packages"]


def test_invalid_configuration_exits(tmp_path, mock_logger):
    config = tmp_path / "profile.yaml"
    config.write_text("icon_theme:\n  kind: carrier-pigeon\n", encoding="utf-8")

    with pytest.raises(SystemExit, match="Configuration error"):
        load_app_settings(None, config, current_logger=mock_logger)
    mock_logger.error.assert_called_once()


def test_git_source_without_url_is_rejected(tmp_path, mock_logger):
    config = tmp_path / "profile.yaml"
    config.write_text("gtk_theme:\n  kind: git\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        load_app_settings(None, config, current_logger=mock_logger)


def test_load_yaml_file_ignores_non_mapping(tmp_path, mock_logger):
    config = tmp_path / "list.yaml"
    config.write_text("- just\n- a list\n", encoding="utf-8")

    assert load_yaml_file(config, mock_logger) == {}
    mock_logger.warning.assert_called_once()


def test_load_yaml_file_parse_error(tmp_path, mock_logger):
    config = tmp_path / "broken.yaml"
    config.write_text("key: [unclosed\n", encoding="utf-8")

    assert load_yaml_file(config, mock_logger) == {}
    mock_logger.warning.assert_called_once()


def test_shipped_pywal_profile(mock_logger):
    settings = load_app_settings(
        None, PROJECT_ROOT / "profiles" / "pywal.yaml", current_logger=mock_logger
    )

    assert settings.components[-2:] == ["app_configs", "pywal"]
    assert "python-pywal" in settings.packages.official
    assert "hypr/hyprland.conf" in settings.app_configs.templates
    assert settings.pywal.wallpaper_url == "https://picsum.photos/1920/1080"
