import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.mark.parametrize(
    "module_name",
    [
        "common.archive_utils",
        "common.command_utils",
        "common.core_utils",
        "common.file_utils",
        "common.prompt_utils",
        "common.system_utils",
        "common.arch.aur_helper",
        "common.arch.pacman_manager",
        "installer.base_component",
        "installer.config_models",
    ],
)
def test_module_imports_first_in_fresh_interpreter(module_name):
    """Each module must import cleanly when it is the first one loaded."""
    result = subprocess.run(
        [sys.executable, "-c", f"import {module_name}"],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
