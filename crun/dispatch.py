from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
import subprocess

from returns.io import IOFailure, IOResultE, IOSuccess

from crun.errors import ProcessFailed
from crun.terminal import TerminalLauncher
from crun.types import Args


@dataclass(frozen=True)
class RunSpec:
    exe: Path
    args: Args = ()
    detached: bool = False


def run_command(cmd: Sequence[str]) -> IOResultE[int]:
    """Runs 'cmd' attached to our own stdin, stdout and stderr.

    Blocks until the child exits. Spawn errors and non-zero exit codes come
    back as failures, never as exceptions.
    """
    cmd = tuple(map(str, cmd))
    try:
        res = subprocess.run(cmd)
    except OSError as e:
        e.add_note(f"Command '{cmd[0]}' could not be started!")
        return IOFailure(e)
    if res.returncode:
        return IOFailure(ProcessFailed(cmd, res.returncode))
    return IOSuccess(res.returncode)


class Dispatcher:
    def __init__(self, terminal: TerminalLauncher):
        self.terminal = terminal

    def run(self, spec: RunSpec) -> IOResultE[int]:
        if spec.detached:
            return self.terminal.launch(spec.exe, spec.args).map(lambda _: 0)
        return run_command((str(spec.exe), *spec.args))
