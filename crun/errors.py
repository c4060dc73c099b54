"""Failures that end a crun invocation.

Every pipeline step reports one of these inside an ``IOFailure``; ``main`` turns
them into a message and an exit status.
"""

from collections.abc import Sequence


class CrunError(Exception):
    """Base class of every error crun reports to the user."""

    exit_code = 1


class UsageError(CrunError):
    exit_code = 2


class ConfigError(CrunError):
    pass


class ToolchainUnavailable(CrunError):
    pass


class SourceNotFound(CrunError):
    pass


class CompileFailure(CrunError):
    pass


class RunFailure(CrunError):
    # A failing child is not a launcher crash.
    exit_code = 0


class TerminalUnavailable(RunFailure):
    pass


class ProcessFailed(CrunError):
    def __init__(self, command: Sequence[str], returncode: int):
        super().__init__(f"'{' '.join(command)}' exited with status {returncode}")
        self.command = tuple(command)
        self.returncode = returncode
