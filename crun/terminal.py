"""Running the artifact in a new terminal window.

Every launcher starts the window and returns at once: the launcher process may
exit long before the user closes the window. Quoting is naive, arguments are
wrapped in double quotes and embedded double quotes are not escaped.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path
import platform
import shutil
import subprocess
import tempfile

from returns.io import IOFailure, IOResultE, impure_safe

from crun.errors import TerminalUnavailable

DIVIDER = "-" * 40
EXIT_PROMPT = "Press any key to exit..."

# Probe order and each emulator's "run this in a new window" convention.
TERMINAL_EMULATORS: dict[str, tuple[str, ...]] = {
    "gnome-terminal": ("--",),
    "konsole": ("-e",),
    "xterm": ("-e",),
    "lxterminal": ("--",),
    "xfce4-terminal": ("--",),
}

BATCH_FILE_NAME = "launch_external_terminal.bat"


def quote(arg: str | Path) -> str:
    return f'"{arg}"'


def command_line(exe: Path, args: Iterable[str] = ()) -> str:
    return " ".join((quote(exe), *map(quote, args)))


def pause_command(exe: Path, args: Iterable[str] = ()) -> str:
    """Shell command that runs the binary and waits for one key."""
    return (
        f"{command_line(exe, args)}; echo; echo {DIVIDER}; "
        f"echo {EXIT_PROMPT}; read -n 1"
    )


@impure_safe
def _spawn(cmd: Sequence[str]) -> subprocess.Popen:
    return subprocess.Popen(cmd)


class TerminalLauncher:
    name = "none"

    def command(self, exe: Path, args: Sequence[str]) -> IOResultE[tuple[str, ...]]:
        raise NotImplementedError

    def launch(self, exe: Path, args: Sequence[str] = ()) -> IOResultE[Path]:
        """Starts 'exe' in a new window without waiting for it."""
        return self.command(exe, args).bind(_spawn).map(lambda _: exe)


class AppleScriptBridge(TerminalLauncher):
    name = "osascript"

    @staticmethod
    def script(exe: Path, args: Sequence[str]) -> str:
        shell = pause_command(exe, args).replace("\\", "\\\\").replace('"', '\\"')
        return (
            'tell application "Terminal"\n'
            "    activate\n"
            f'    do script "{shell}"\n'
            "end tell"
        )

    def command(self, exe, args):
        return IOResultE.from_value(("osascript", "-e", self.script(exe, args)))


class EmulatorProbe(TerminalLauncher):
    name = "emulator"

    def __init__(self, candidates: dict[str, tuple[str, ...]] = TERMINAL_EMULATORS):
        self.candidates = candidates

    def find(self) -> str | None:
        return next(filter(shutil.which, self.candidates), None)

    def command(self, exe, args):
        term = self.find()
        if term is None:
            return IOFailure(
                TerminalUnavailable(
                    "no supported terminal emulator found, tried: "
                    + ", ".join(self.candidates)
                )
            )
        return IOResultE.from_value(
            (term, *self.candidates[term], "bash", "-c", pause_command(exe, args))
        )


class BatchScriptFile(TerminalLauncher):
    name = "cmd"

    def __init__(self, directory: Path | None = None):
        self.directory = Path(directory or tempfile.gettempdir())

    @staticmethod
    def script(exe: Path, args: Sequence[str]) -> str:
        return (
            "@echo off\n"
            f'start "" cmd /c "{command_line(exe, args)} & echo {EXIT_PROMPT} & pause > nul"\n'
        )

    @impure_safe
    def write(self, exe: Path, args: Sequence[str]) -> Path:
        bat = self.directory / BATCH_FILE_NAME
        bat.write_text(self.script(exe, args))
        return bat

    def command(self, exe, args):
        return self.write(exe, args).map(lambda bat: ("cmd.exe", "/C", str(bat)))


class Unsupported(TerminalLauncher):
    def __init__(self, system: str = ""):
        self.system = system

    def command(self, exe, args):
        return IOFailure(
            TerminalUnavailable(
                f"running in a new terminal is not supported on '{self.system}'"
            )
        )


def launcher_for(system: str | None = None) -> TerminalLauncher:
    system = system if system is not None else platform.system()
    match system:
        case "Windows":
            return BatchScriptFile()
        case "Darwin":
            return AppleScriptBridge()
        case "Linux" | "FreeBSD" | "OpenBSD" | "NetBSD":
            return EmulatorProbe()
        case other:
            return Unsupported(other)
