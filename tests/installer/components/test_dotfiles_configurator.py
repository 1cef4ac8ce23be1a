import pytest

from installer.components.dotfiles.dotfiles_configurator import DotfilesConfigurator
from installer.config_models import AppSettings, DotfileEntry, DotfilesSettings


@pytest.fixture
def configs_dir(tmp_path):
    configs = tmp_path / "configs"
    (configs / "waybar").mkdir(parents=True)
    (configs / "waybar" / "config.jsonc").write_text("{}")
    (configs / "hypr").mkdir()
    (configs / "hypr" / "hyprland.conf").write_text("monitor=,preferred,auto,1\n")
    return configs


@pytest.fixture
def settings():
    return AppSettings(
        noconfirm=True,
        dotfiles=DotfilesSettings(
            entries=[
                DotfileEntry(source="waybar", label="Waybar"),
                DotfileEntry(source="hypr", label="Hyprland"),
            ]
        ),
    )


def test_configure_copies_entries(settings, target_user, mock_logger, configs_dir):
    existing = target_user.config_dir / "waybar"
    existing.mkdir(parents=True)
    (existing / "style.css").write_text("* {}")
    (existing / "config.jsonc").write_text("old")

    component = DotfilesConfigurator(
        settings, target_user, mock_logger, configs_dir=configs_dir
    )

    assert component.configure() is True
    assert (existing / "config.jsonc").read_text() == "{}"
    assert (existing / "style.css").exists()
    assert (target_user.config_dir / "hypr" / "hyprland.conf").is_file()
    assert component.is_configured() is True


def test_missing_source_warns_and_continues(
    mocker, target_user, mock_logger, configs_dir
):
    mock_log = mocker.patch(
        "installer.components.dotfiles.dotfiles_configurator.log_message"
    )
    settings = AppSettings(
        dotfiles=DotfilesSettings(
            entries=[
                DotfileEntry(source="kitty", label="Kitty"),
                DotfileEntry(source="hypr", label="Hyprland"),
            ]
        )
    )
    component = DotfilesConfigurator(
        settings, target_user, mock_logger, configs_dir=configs_dir
    )

    assert component.configure() is False
    assert (target_user.config_dir / "hypr" / "hyprland.conf").is_file()
    warnings = [c.args[0] for c in mock_log.call_args_list if c.args[1] == "warning"]
    assert len(warnings) == 1
    assert "Failed to copy Kitty config" in warnings[0]
    assert component.is_configured() is False


def test_destination_name_override(target_user, mock_logger, configs_dir):
    settings = AppSettings(
        dotfiles=DotfilesSettings(
            entries=[DotfileEntry(source="waybar", destination="waybar-dracula")]
        )
    )

    DotfilesConfigurator(
        settings, target_user, mock_logger, configs_dir=configs_dir
    ).configure()

    assert (target_user.config_dir / "waybar-dracula" / "config.jsonc").is_file()
