import stat

from installer.components.thunar.thunar_configurator import ThunarConfigurator
from installer.config_models import AppSettings, ThunarSettings

MODULE = "installer.components.thunar.thunar_configurator"


def _settings(**thunar):
    return AppSettings(noconfirm=True, thunar=ThunarSettings(**thunar))


def test_configure_writes_uca_with_private_dir(target_user, mock_logger):
    component = ThunarConfigurator(_settings(restart=False), target_user, mock_logger)

    assert component.configure() is True

    content = component.uca_path.read_text()
    assert "<name>Open Kitty Here</name>" in content
    assert "<command>kitty --directory=%d</command>" in content
    assert stat.S_IMODE(component.thunar_dir.stat().st_mode) == 0o700
    assert component.is_configured() is True


def test_existing_uca_is_left_alone(target_user, mock_logger):
    component = ThunarConfigurator(_settings(restart=False), target_user, mock_logger)
    component.thunar_dir.mkdir(parents=True)
    component.uca_path.write_text("<actions/>")

    assert component.configure() is True
    assert component.uca_path.read_text() == "<actions/>"
    assert component.is_configured() is False


def test_configure_restarts_thunar(mocker, target_user, mock_logger):
    component = ThunarConfigurator(_settings(terminal="alacritty"), target_user, mock_logger)
    mock_restart = mocker.patch.object(component, "restart")

    assert component.configure() is True
    mock_restart.assert_called_once_with()
    assert "alacritty --directory=%d" in component.uca_path.read_text()


def test_restart_kills_and_relaunches_as_user(mocker, target_user, mock_logger):
    settings = _settings()
    mocker.patch(f"{MODULE}.command_exists", return_value=True)
    mock_run = mocker.patch(f"{MODULE}.run_command")
    mock_spawn = mocker.patch(f"{MODULE}.spawn_detached_user_command")

    assert ThunarConfigurator(settings, target_user, mock_logger).restart() is True
    mock_run.assert_called_once_with(
        ["pkill", "-u", target_user.name, "-x", "thunar"],
        settings,
        check=False,
        current_logger=mock_logger,
    )
    mock_spawn.assert_called_once_with(
        ["thunar"], target_user.name, settings, mock_logger
    )


def test_restart_without_thunar(mocker, target_user, mock_logger):
    mocker.patch(f"{MODULE}.command_exists", return_value=False)
    mock_spawn = mocker.patch(f"{MODULE}.spawn_detached_user_command")

    assert ThunarConfigurator(_settings(), target_user, mock_logger).restart() is False
    mock_spawn.assert_not_called()


def test_restart_launch_failure(mocker, target_user, mock_logger):
    mocker.patch(f"{MODULE}.command_exists", return_value=True)
    mocker.patch(f"{MODULE}.run_command")
    mocker.patch(f"{MODULE}.spawn_detached_user_command", return_value=None)

    assert ThunarConfigurator(_settings(), target_user, mock_logger).restart() is False
