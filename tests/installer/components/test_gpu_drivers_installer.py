import pytest

from common.system_utils import GpuInfo, GpuVendor
from installer.components.gpu_drivers.gpu_drivers_installer import GpuDriversInstaller
from installer.config_models import AppSettings, GpuSettings

MODULE = "installer.components.gpu_drivers.gpu_drivers_installer"


def _component(settings, user, logger, vendors, raw="VGA compatible controller"):
    component = GpuDriversInstaller(settings, user, logger)
    component._gpu_info = GpuInfo(raw=raw, vendors=set(vendors))
    return component


@pytest.fixture
def mock_run(mocker):
    return mocker.patch(f"{MODULE}.run_confirmed_command", return_value=True)


def test_installs_amd_drivers(mock_run, app_settings, target_user, mock_logger):
    component = _component(app_settings, target_user, mock_logger, [GpuVendor.AMD])

    assert component.install() is True
    mock_run.assert_called_once_with(
        ["pacman", "-S", "--needed", "--noconfirm"]
        + app_settings.gpu.driver_packages["amd"],
        "Install AMD drivers",
        app_settings,
        current_logger=mock_logger,
    )


def test_nvidia_takes_precedence_and_hybrid_gets_prime(
    mock_run, app_settings, target_user, mock_logger
):
    component = _component(
        app_settings, target_user, mock_logger, [GpuVendor.INTEL, GpuVendor.NVIDIA]
    )

    assert component.install() is True
    descriptions = [call.args[1] for call in mock_run.call_args_list]
    assert descriptions == ["Install NVIDIA drivers", "Install hybrid graphics support"]
    assert mock_run.call_args.args[0][-1] == "nvidia-prime"


def test_driver_failure_skips_hybrid_step(
    mock_run, app_settings, target_user, mock_logger
):
    mock_run.return_value = False
    component = _component(
        app_settings, target_user, mock_logger, [GpuVendor.INTEL, GpuVendor.NVIDIA]
    )

    assert component.install() is False
    mock_run.assert_called_once()


def test_unknown_gpu_declined_is_skipped(
    mocker, mock_run, interactive_settings, target_user, mock_logger
):
    mock_ask = mocker.patch(f"{MODULE}.ask_confirmation", return_value=False)
    component = _component(interactive_settings, target_user, mock_logger, [], raw="")

    assert component.install() is True
    mock_ask.assert_called_once()
    assert mock_ask.call_args.kwargs["default_when_noconfirm"] is False
    mock_run.assert_not_called()


def test_unknown_gpu_forced_nvidia(
    mocker, mock_run, interactive_settings, target_user, mock_logger
):
    mocker.patch(f"{MODULE}.ask_confirmation", return_value=True)
    component = _component(interactive_settings, target_user, mock_logger, [], raw="")

    assert component.install() is True
    assert mock_run.call_args.args[1] == "Install NVIDIA drivers"
    assert component.selected_vendor == GpuVendor.NVIDIA


def test_configure_nvidia_writes_profile_once(app_settings, target_user, mock_logger):
    component = _component(app_settings, target_user, mock_logger, [GpuVendor.NVIDIA])

    assert component.configure() is True
    assert component.configure() is True

    lines = (target_user.home / ".profile").read_text().splitlines()
    assert lines == [
        "export WLR_NO_HARDWARE_CURSORS=1",
        "export WLR_DRM_DEVICES=/dev/dri/card1",
    ]
    assert component.is_configured() is True


def test_configure_other_vendors_leaves_profile_alone(
    app_settings, target_user, mock_logger
):
    component = _component(app_settings, target_user, mock_logger, [GpuVendor.INTEL])

    assert component.configure() is True
    assert not (target_user.home / ".profile").exists()
    assert component.is_configured() is True


def test_is_installed(mocker, app_settings, target_user, mock_logger):
    mock_check = mocker.patch(f"{MODULE}.check_package_installed", return_value=True)
    component = _component(app_settings, target_user, mock_logger, [GpuVendor.INTEL])

    assert component.is_installed() is True
    assert mock_check.call_count == len(app_settings.gpu.driver_packages["intel"])

    unknown = _component(app_settings, target_user, mock_logger, [])
    assert unknown.is_installed() is False


def test_configure_nvidia_without_drm_device(target_user, mock_logger):
    settings = AppSettings(noconfirm=True, gpu=GpuSettings(wlr_drm_devices=None))
    component = _component(settings, target_user, mock_logger, [GpuVendor.NVIDIA])

    assert component.configure() is True

    lines = (target_user.home / ".profile").read_text().splitlines()
    assert lines == ["export WLR_NO_HARDWARE_CURSORS=1"]
    assert component.is_configured() is True
