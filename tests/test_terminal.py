import subprocess
from pathlib import Path

import pytest
from returns.io import IOSuccess

from crun.errors import TerminalUnavailable
from crun.terminal import (
    BATCH_FILE_NAME,
    EXIT_PROMPT,
    AppleScriptBridge,
    BatchScriptFile,
    EmulatorProbe,
    Unsupported,
    command_line,
    launcher_for,
    pause_command,
    quote,
)

from tests.helpers import failure, value

EXE = Path("/home/me/.crun/main.exe")


@pytest.fixture
def spawned(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, ...]]:
    calls: list[tuple[str, ...]] = []

    class _Popen:
        def __init__(self, cmd):
            calls.append(tuple(cmd))

    monkeypatch.setattr(subprocess, "Popen", _Popen)
    return calls


def test_quote_is_naive() -> None:
    assert quote("a b") == '"a b"'
    assert quote('say "hi"') == '"say "hi""'


def test_command_line_quotes_everything() -> None:
    assert command_line(EXE, ("1", "two words")) == f'"{EXE}" "1" "two words"'
    assert command_line(EXE) == f'"{EXE}"'


def test_pause_command_waits_for_a_key() -> None:
    cmd = pause_command(EXE, ("x",))
    assert cmd.startswith(f'"{EXE}" "x"; ')
    assert EXIT_PROMPT in cmd
    assert cmd.endswith("read -n 1")


@pytest.mark.parametrize(
    ("system", "kind"),
    [
        ("Windows", BatchScriptFile),
        ("Darwin", AppleScriptBridge),
        ("Linux", EmulatorProbe),
        ("Haiku", Unsupported),
    ],
)
def test_launcher_selection(system: str, kind: type) -> None:
    assert isinstance(launcher_for(system), kind)


def test_emulator_probe_uses_first_installed(installed, spawned) -> None:
    installed("xterm", "xfce4-terminal")
    result = EmulatorProbe().launch(EXE, ("a",))

    assert result == IOSuccess(EXE)
    assert spawned == [("xterm", "-e", "bash", "-c", pause_command(EXE, ("a",)))]


@pytest.mark.parametrize(
    ("term", "flag"),
    [("gnome-terminal", "--"), ("konsole", "-e"), ("lxterminal", "--")],
)
def test_emulator_argument_conventions(installed, spawned, term, flag) -> None:
    installed(term)
    EmulatorProbe().launch(EXE)

    assert spawned[0][:4] == (term, flag, "bash", "-c")


def test_emulator_probe_without_terminal(installed, spawned) -> None:
    installed()
    error = failure(EmulatorProbe().launch(EXE))

    assert isinstance(error, TerminalUnavailable)
    assert "gnome-terminal" in str(error)
    assert spawned == []


def test_applescript_escapes_for_do_script(spawned) -> None:
    AppleScriptBridge().launch(EXE, ("x",))

    (cmd,) = spawned
    assert cmd[:2] == ("osascript", "-e")
    assert 'tell application "Terminal"' in cmd[2]
    assert f'do script "\\"{EXE}\\" \\"x\\";' in cmd[2]


def test_batch_file_is_written_and_started(tmp_path: Path, spawned) -> None:
    result = BatchScriptFile(tmp_path).launch(EXE, ("a", "b"))
    bat = tmp_path / BATCH_FILE_NAME

    assert value(result) == EXE
    assert spawned == [("cmd.exe", "/C", str(bat))]
    assert bat.read_text() == (
        "@echo off\n"
        f'start "" cmd /c ""{EXE}" "a" "b" & echo {EXIT_PROMPT} & pause > nul"\n'
    )


def test_spawn_failure_is_a_failure(installed, monkeypatch) -> None:
    installed("xterm")

    def _broken(cmd):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "Popen", _broken)
    assert isinstance(failure(EmulatorProbe().launch(EXE)), FileNotFoundError)


def test_unsupported_never_spawns(spawned) -> None:
    error = failure(Unsupported("Haiku").launch(EXE))

    assert isinstance(error, TerminalUnavailable)
    assert "Haiku" in str(error)
    assert spawned == []
