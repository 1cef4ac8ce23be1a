import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from common.system_utils import (
    GpuInfo,
    GpuVendor,
    get_gpu_info,
    is_arch_linux,
    is_service_enabled,
    read_os_release,
    reexec_with_sudo,
    resolve_target_user,
    systemctl_enable_command,
)

LSPCI_HYBRID = """\
00:00.0 Host bridge: Intel Corporation Device 9b61
00:02.0 VGA compatible controller: Intel Corporation CometLake-U GT2 [UHD Graphics]
01:00.0 3D controller: NVIDIA Corporation GP108M [GeForce MX250] (rev a1)
00:1f.3 Audio device: Intel Corporation Comet Lake PCH-LP cAVS
"""

LSPCI_AMD = """\
0a:00.0 VGA compatible controller: Advanced Micro Devices, Inc. [AMD/ATI] Navi 23
0a:00.1 Audio device: Advanced Micro Devices, Inc. [AMD/ATI] Navi 21/23
"""


def _pw_entry(name, uid, gid, home):
    return MagicMock(pw_name=name, pw_uid=uid, pw_gid=gid, pw_dir=home)


def test_resolve_target_user_prefers_sudo_user(mocker):
    mock_getpwnam = mocker.patch(
        "common.system_utils.pwd.getpwnam",
        return_value=_pw_entry("alice", 1000, 1000, "/home/alice"),
    )

    user = resolve_target_user({"SUDO_USER": "alice", "USER": "root"})

    mock_getpwnam.assert_called_once_with("alice")
    assert user.name == "alice"
    assert user.home == Path("/home/alice")
    assert user.config_dir == Path("/home/alice/.config")


def test_resolve_target_user_falls_back_to_uid(mocker):
    mocker.patch("common.system_utils.os.geteuid", return_value=1001)
    mock_getpwuid = mocker.patch(
        "common.system_utils.pwd.getpwuid",
        return_value=_pw_entry("bob", 1001, 1001, "/home/bob"),
    )

    user = resolve_target_user({})

    mock_getpwuid.assert_called_once_with(1001)
    assert user.uid == 1001


def test_reexec_with_sudo(mocker):
    mock_execvp = mocker.patch("common.system_utils.os.execvp")
    mocker.patch("common.system_utils.sys.executable", "/usr/bin/python3")

    reexec_with_sudo(["install.py", "--noconfirm"])

    mock_execvp.assert_called_once_with(
        "sudo", ["sudo", "-E", "/usr/bin/python3", "install.py", "--noconfirm"]
    )


def test_read_os_release(tmp_path):
    os_release = tmp_path / "os-release"
    os_release.write_text(
        '# comment\nNAME="Arch Linux"\nID=arch\nPRETTY_NAME=\'Arch Linux\'\n\n',
        encoding="utf-8",
    )

    data = read_os_release(os_release)

    assert data == {"NAME": "Arch Linux", "ID": "arch", "PRETTY_NAME": "Arch Linux"}


def test_read_os_release_missing(tmp_path):
    assert read_os_release(tmp_path / "missing") is None


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"ID": "arch"}, True),
        ({"ID": "endeavouros", "ID_LIKE": "arch"}, True),
        ({"ID": "ubuntu", "ID_LIKE": "debian"}, False),
        ({}, False),
    ],
)
def test_is_arch_linux(data, expected):
    assert is_arch_linux(data) is expected


def test_get_gpu_info_hybrid(mocker, app_settings):
    mocker.patch(
        "common.system_utils.run_command",
        return_value=subprocess.CompletedProcess(["lspci"], 0, stdout=LSPCI_HYBRID),
    )

    info = get_gpu_info(app_settings)

    assert info.vendors == {GpuVendor.INTEL, GpuVendor.NVIDIA}
    assert info.primary == GpuVendor.NVIDIA
    assert info.is_hybrid_intel_nvidia
    # Only VGA/3D lines are kept
    assert "Audio" not in info.raw
    assert "Host bridge" not in info.raw


def test_get_gpu_info_amd(mocker, app_settings):
    mocker.patch(
        "common.system_utils.run_command",
        return_value=subprocess.CompletedProcess(["lspci"], 0, stdout=LSPCI_AMD),
    )

    info = get_gpu_info(app_settings)

    assert info.primary == GpuVendor.AMD
    assert not info.is_hybrid_intel_nvidia


def test_get_gpu_info_without_lspci(mocker, app_settings, mock_logger):
    mocker.patch(
        "common.system_utils.run_command", side_effect=FileNotFoundError()
    )
    mock_log = mocker.patch("common.system_utils.log_message")

    info = get_gpu_info(app_settings, mock_logger)

    assert info.primary == GpuVendor.UNKNOWN
    mock_log.assert_called_once_with(
        "⚠️ lspci command not found. Install 'pciutils' for GPU detection.",
        "warning",
        mock_logger,
        app_settings,
    )


def test_gpu_info_primary_unknown():
    assert GpuInfo(raw="", vendors=set()).primary == GpuVendor.UNKNOWN


def test_systemctl_enable_command():
    assert systemctl_enable_command("sddm.service") == [
        "systemctl", "enable", "sddm.service",
    ]
    assert systemctl_enable_command("polkit.service", now=True) == [
        "systemctl", "enable", "--now", "polkit.service",
    ]


@pytest.mark.parametrize(
    "returncode, stdout, expected",
    [(0, "enabled\n", True), (1, "disabled\n", False), (0, "static\n", False)],
)
def test_is_service_enabled(mocker, app_settings, returncode, stdout, expected):
    mocker.patch(
        "common.system_utils.run_command",
        return_value=subprocess.CompletedProcess([], returncode, stdout=stdout),
    )

    assert is_service_enabled("sddm.service", app_settings) is expected
