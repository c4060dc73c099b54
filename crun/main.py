import sys

from returns.io import IOResultE
from returns.result import Failure, Success
from returns.unsafe import unsafe_perform_io

from crun.args import args_parse
from crun.config import config_load
from crun.errors import CrunError, UsageError
from crun.launcher import LaunchContext, launch
from crun.terminal import launcher_for
from crun.transcript import Transcript


def crun(argv: list[str]) -> IOResultE[int]:
    try:
        args = args_parse(argv)
    except UsageError as e:
        return IOResultE.from_failure(e)

    return config_load(args).bind(
        lambda config: launch(
            LaunchContext(
                config=config,
                transcript=Transcript(verbose=config.verbose),
                terminal=launcher_for(),
            )
        )
    )


def exit_code(error: Exception) -> int:
    if isinstance(error, CrunError):
        return error.exit_code
    return 1


def main(argv: list[str] | None = None) -> int:
    match unsafe_perform_io(crun(sys.argv[1:] if argv is None else argv)):
        case Success(code):
            return code
        case Failure(error):
            print(f"[crun] Error: {error}")
            return exit_code(error)


if __name__ == "__main__":
    sys.exit(main())
