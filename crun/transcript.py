import sys
from typing import TextIO

CURSOR_UP = "\033[1A"
CLEAR_LINE = "\033[2K"


class Transcript:
    """Status lines printed before the compiler or the binary takes over.

    'collapse' erases everything emitted so far, so that in non-verbose mode
    the binary's own output starts on a clean screen.
    """

    def __init__(self, verbose: bool = False, stream: TextIO | None = None):
        self.verbose = verbose
        self.stream = stream if stream is not None else sys.stdout
        self.count = 0

    def emit(self, line: str) -> None:
        self.count += 1
        self.stream.write(f"{line}\n")
        self.stream.flush()

    def _interactive(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def collapse(self) -> None:
        if self.verbose or self.count == 0:
            return
        if self._interactive():
            self.stream.write((CURSOR_UP + CLEAR_LINE) * self.count)
            self.stream.flush()
        self.count = 0
