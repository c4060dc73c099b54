from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import NoReturn, Protocol
import argparse
import platform

from crun.errors import UsageError
from crun.toolchain import SUPPORTED_TOOLCHAINS, available


class ArgsConfig(Protocol):
    filename: str
    verbose: bool
    recompile: bool
    compiler: str | None
    extra: str | None
    output: str | None
    directory: Path | None
    run_args: str | None
    detached: bool


def _version() -> str:
    try:
        return version("crun")
    except PackageNotFoundError:
        return "0.0.0"


def _examples(system: str) -> str:
    examples = [
        "crun main.c",
        "crun -v main.cpp",
        "crun --verbose --recompile main.c",
        'crun -c gcc -e "-O2 -Wall" main.c',
        'crun --compiler clang --extra "-g -fsanitize=address" main.c',
        "crun -o myprogram -d ./bin main.c",
        'crun -r "arg1 arg2" main.c',
    ]
    if system == "Windows":
        examples.append("crun -std main.c")
    elif system in ("Darwin", "Linux"):
        examples.append("crun -t main.c")
    return (
        f"supported compilers: {', '.join(SUPPORTED_TOOLCHAINS)}\n"
        f"installed compilers: {', '.join(available()) or 'none'}\n\n"
        "examples:\n" + "\n".join(f"  {example}" for example in examples)
    )


VALUE_FLAGS = {
    "-c": "--compiler",
    "-e": "--extra",
    "-o": "--output",
    "-d": "--directory",
    "-r": "--run-args",
}


def _attach_values(argv: list[str]) -> list[str]:
    """Glues every value flag to the token after it, as in '--extra=-g'.

    The next token is always the value, even when it starts with '-'. A value
    flag in last position is left alone so argparse reports it as missing.
    """
    args: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        flag = VALUE_FLAGS.get(token, token)
        if flag in VALUE_FLAGS.values():
            value = next(tokens, None)
            if value is not None:
                token = f"{flag}={value}"
        elif token == "--":
            args.append(token)
            args.extend(tokens)
            break
        args.append(token)
    return args


class _ArgumentParser(argparse.ArgumentParser):
    def __init__(self, system: str, **kwargs):
        super().__init__(**kwargs)
        self.system = system

    def format_help(self) -> str:
        # Probing for installed compilers is only worth it when help is shown.
        self.epilog = _examples(self.system)
        return super().format_help()

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{message}\n{self.format_usage().rstrip()}")


def args_parse(argv: list[str], system: str | None = None) -> ArgsConfig:
    system = system if system is not None else platform.system()
    parser = _ArgumentParser(
        system,
        prog="crun",
        description="Compile and run C/C++ files quickly",
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("filename", help="source file, the extension may be omitted")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="don't clear the status output"
    )
    parser.add_argument(
        "-n", "--recompile", action="store_true", help="always recompile the source"
    )
    parser.add_argument(
        "-c",
        "--compiler",
        metavar="NAME",
        help=f"use this compiler ({', '.join(SUPPORTED_TOOLCHAINS)})",
    )
    parser.add_argument("-e", "--extra", metavar="FLAGS", help="extra compiler flags")
    parser.add_argument("-o", "--output", metavar="NAME", help="output binary name")
    parser.add_argument(
        "-d", "--directory", type=Path, metavar="DIR", help="directory for the binary"
    )
    parser.add_argument(
        "-r", "--run-args", metavar="ARGS", help="arguments passed to the binary"
    )
    parser.add_argument("--version", action="version", version=_version())

    match system:
        case "Windows":
            parser.add_argument(
                "-std",
                "--no-new-terminal",
                dest="detached",
                action="store_false",
                default=True,
                help="run in this console instead of a new terminal window",
            )
        case "Darwin" | "Linux":
            parser.add_argument(
                "-t",
                "--new-terminal",
                dest="detached",
                action="store_true",
                default=False,
                help="run the binary in a new terminal window",
            )
        case _:
            parser.set_defaults(detached=False)

    return parser.parse_args(_attach_values(argv))  # type: ignore
