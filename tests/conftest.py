# tests/conftest.py
import logging
import os
import pwd
from unittest.mock import MagicMock

import pytest

from common.system_utils import TargetUser
from installer.config_models import AppSettings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep HYPRRICE_* variables of the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("HYPRRICE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def app_settings():
    """Settings in auto mode: no prompt is ever shown."""
    return AppSettings(noconfirm=True)


@pytest.fixture
def interactive_settings():
    return AppSettings(noconfirm=False)


@pytest.fixture
def target_user(tmp_path):
    """The current account, with a throwaway home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return TargetUser(
        name=pwd.getpwuid(os.getuid()).pw_name,
        uid=os.getuid(),
        gid=os.getgid(),
        home=home,
    )
