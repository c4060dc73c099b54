from collections.abc import Iterable, Sequence
from enum import StrEnum
import shutil

from returns.maybe import Maybe, Nothing, Some

from crun.errors import ToolchainUnavailable


class ToolchainId(StrEnum):
    CLANG = "clang"
    GCC = "gcc"
    ZIG = "zig"
    CL = "cl"
    BYTES = "bytes"


SUPPORTED_TOOLCHAINS: tuple[str, ...] = tuple(ToolchainId)


def command_exists(command: str) -> bool:
    return shutil.which(command) is not None


def available(priority: Iterable[str] = SUPPORTED_TOOLCHAINS) -> tuple[str, ...]:
    """All toolchains of 'priority' found on the search path, in order."""
    return tuple(filter(command_exists, priority))


def resolve(
    explicit: str | None, priority: Sequence[str] = SUPPORTED_TOOLCHAINS
) -> Maybe[str]:
    """Picks the compiler for this run.

    An explicit choice is a hard constraint: it is returned if it is on the
    search path and raises 'ToolchainUnavailable' otherwise. Without one the
    first entry of 'priority' found on the search path wins, and 'Nothing' is
    returned when none is installed.
    """
    if explicit:
        if command_exists(explicit):
            return Some(explicit)
        raise ToolchainUnavailable(f"requested toolchain '{explicit}' unavailable")

    for toolchain in priority:
        if command_exists(toolchain):
            return Some(toolchain)
    return Nothing
