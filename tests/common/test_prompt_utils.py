import subprocess

import pytest

from common.prompt_utils import ask_confirmation, run_confirmed_command, wait_for_enter

COMMAND = ["systemctl", "enable", "sddm.service"]
FAILURE = subprocess.CalledProcessError(1, COMMAND)


@pytest.fixture
def mock_elevated(mocker):
    return mocker.patch("common.prompt_utils.run_elevated_command")


@pytest.fixture
def mock_log(mocker):
    return mocker.patch("common.prompt_utils.log_message")


def test_ask_confirmation_accepts_upper_case(mocker, interactive_settings):
    mocker.patch("builtins.input", return_value="Y")

    assert ask_confirmation("Proceed?", interactive_settings) is True


def test_ask_confirmation_reprompts_on_invalid_input(
    mocker, interactive_settings, mock_logger, mock_log
):
    mock_input = mocker.patch("builtins.input", side_effect=["maybe", "", "n"])

    assert ask_confirmation("Proceed?", interactive_settings, mock_logger) is False
    assert mock_input.call_count == 3
    mock_log.assert_any_call(
        "Invalid input. Please answer y or n.",
        "error",
        mock_logger,
        interactive_settings,
    )
    mock_log.assert_called_with(
        "Operation cancelled.", "error", mock_logger, interactive_settings
    )


def test_ask_confirmation_eof_means_no(mocker, interactive_settings):
    mocker.patch("builtins.input", side_effect=EOFError)

    assert ask_confirmation("Proceed?", interactive_settings) is False


def test_ask_confirmation_noconfirm_uses_default(mocker, app_settings):
    mock_input = mocker.patch("builtins.input")

    assert ask_confirmation("Proceed?", app_settings) is True
    assert (
        ask_confirmation("Proceed?", app_settings, default_when_noconfirm=False)
        is False
    )
    mock_input.assert_not_called()


def test_wait_for_enter_skipped_in_auto_mode(mocker, app_settings):
    mock_input = mocker.patch("builtins.input")

    wait_for_enter("Install packages", app_settings)

    mock_input.assert_not_called()


def test_wait_for_enter_prompts(mocker, interactive_settings):
    mock_input = mocker.patch("builtins.input", return_value="")

    wait_for_enter("Install packages", interactive_settings)

    mock_input.assert_called_once_with(
        "Install packages? Press Enter to continue..."
    )


def test_confirmed_command_runs_after_yes(
    mocker, interactive_settings, mock_logger, mock_elevated, mock_log
):
    mocker.patch("builtins.input", side_effect=["what", "y"])

    result = run_confirmed_command(
        COMMAND, "Enable sddm", interactive_settings, current_logger=mock_logger
    )

    assert result is True
    mock_elevated.assert_called_once_with(
        COMMAND, interactive_settings, current_logger=mock_logger
    )
    mock_log.assert_any_call(
        "Invalid input. Please answer y or n.",
        "error",
        mock_logger,
        interactive_settings,
    )
    mock_log.assert_called_with(
        "✅ Enable sddm completed successfully.",
        "success",
        mock_logger,
        interactive_settings,
    )


def test_confirmed_command_declined(
    mocker, interactive_settings, mock_logger, mock_elevated, mock_log
):
    mocker.patch("builtins.input", return_value="n")

    result = run_confirmed_command(
        COMMAND, "Enable sddm", interactive_settings, current_logger=mock_logger
    )

    assert result is False
    mock_elevated.assert_not_called()
    mock_log.assert_any_call(
        "Operation cancelled.", "error", mock_logger, interactive_settings
    )


def test_confirmed_command_retries_after_failure(
    mocker, interactive_settings, mock_logger, mock_elevated, mock_log
):
    mock_input = mocker.patch("builtins.input", side_effect=["y", "y"])
    mock_elevated.side_effect = [FAILURE, None]

    result = run_confirmed_command(
        COMMAND, "Enable sddm", interactive_settings, current_logger=mock_logger
    )

    assert result is True
    assert mock_elevated.call_count == 2
    assert "Retry Enable sddm?" in mock_input.call_args_list[1].args[0]


def test_confirmed_command_retry_declined(
    mocker, interactive_settings, mock_logger, mock_elevated, mock_log
):
    mocker.patch("builtins.input", side_effect=["y", "n"])
    mock_elevated.side_effect = FAILURE

    result = run_confirmed_command(
        COMMAND, "Enable sddm", interactive_settings, current_logger=mock_logger
    )

    assert result is False
    assert mock_elevated.call_count == 1
    mock_log.assert_called_with(
        "Enable sddm not completed.", "warning", mock_logger, interactive_settings
    )


def test_confirmed_command_auto_mode_does_not_retry(
    mocker, app_settings, mock_logger, mock_elevated, mock_log
):
    mock_input = mocker.patch("builtins.input")
    mock_elevated.side_effect = FAILURE

    result = run_confirmed_command(
        COMMAND, "Enable sddm", app_settings, current_logger=mock_logger
    )

    assert result is False
    mock_input.assert_not_called()
    assert mock_elevated.call_count == 1
    mock_log.assert_any_call(
        "❌ Command failed: systemctl enable sddm.service",
        "error",
        mock_logger,
        app_settings,
    )
    mock_log.assert_called_with(
        "Enable sddm failed, no retry (auto mode).",
        "warning",
        mock_logger,
        app_settings,
    )


def test_confirmed_command_ask_confirm_false_skips_prompt(
    mocker, interactive_settings, mock_logger, mock_elevated, mock_log
):
    mock_input = mocker.patch("builtins.input")

    assert run_confirmed_command(
        COMMAND,
        "Enable sddm",
        interactive_settings,
        ask_confirm=False,
        current_logger=mock_logger,
    )
    mock_input.assert_not_called()
    mock_log.assert_any_call(
        "Enable sddm", "info", mock_logger, interactive_settings
    )


def test_confirmed_command_missing_executable_is_a_failure(
    app_settings, mock_logger, mock_elevated, mock_log
):
    mock_elevated.side_effect = FileNotFoundError(2, "No such file", "systemctl")

    assert (
        run_confirmed_command(
            COMMAND, "Enable sddm", app_settings, current_logger=mock_logger
        )
        is False
    )


def test_confirmed_command_as_user(mocker, app_settings, mock_logger, mock_log):
    mock_user = mocker.patch("common.prompt_utils.run_user_command")

    assert run_confirmed_command(
        ["yay", "-S", "tofi"],
        "Install AUR packages",
        app_settings,
        user="alice",
        current_logger=mock_logger,
    )
    mock_user.assert_called_once_with(
        ["yay", "-S", "tofi"], "alice", app_settings, current_logger=mock_logger
    )
