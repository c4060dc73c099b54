from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypedDict

import toml
from returns.io import IOFailure, IOResultE, IOSuccess, impure_safe

from crun.args import ArgsConfig
from crun.errors import ConfigError
from crun.toolchain import SUPPORTED_TOOLCHAINS

CONFIG_FILE = "crun.toml"


class FileConfig(TypedDict, total=False):
    compiler: str
    compilers: list[str]
    extra: str
    directory: str
    verbose: bool


_KEYS: dict[str, type] = {
    "compiler": str,
    "compilers": list,
    "extra": str,
    "directory": str,
    "verbose": bool,
}


@dataclass(frozen=True)
class RunConfig:
    """Everything one invocation needs, validated once and never mutated."""

    filename: Path
    verbose: bool = False
    recompile: bool = False
    compiler: str | None = None
    compilers: tuple[str, ...] = SUPPORTED_TOOLCHAINS
    extra: str | None = None
    output: str | None = None
    directory: Path | None = None
    run_args: str | None = None
    detached: bool = False


@impure_safe
def load_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    return toml.loads(config_path.read_text())


def parse_config(config: dict[str, Any]) -> IOResultE[FileConfig]:
    section = config.get("crun", {})
    if not isinstance(section, dict):
        return IOFailure(ConfigError(f"{CONFIG_FILE}: 'crun' must be a table"))
    for key, value in section.items():
        if key not in _KEYS:
            return IOFailure(ConfigError(f"{CONFIG_FILE}: unknown key '{key}'"))
        if not isinstance(value, _KEYS[key]):
            return IOFailure(
                ConfigError(
                    f"{CONFIG_FILE}: '{key}' must be of type {_KEYS[key].__name__}"
                )
            )
    if not all(isinstance(name, str) for name in section.get("compilers", ())):
        return IOFailure(
            ConfigError(f"{CONFIG_FILE}: 'compilers' must be a list of strings")
        )
    return IOSuccess(FileConfig(**section))  # type: ignore


def _to_config_error(error: Exception) -> Exception:
    if isinstance(error, toml.TomlDecodeError):
        return ConfigError(f"{CONFIG_FILE}: {error}")
    return error


def create_run_config(args: ArgsConfig, file: FileConfig) -> RunConfig:
    directory = args.directory or file.get("directory")
    return RunConfig(
        filename=Path(args.filename),
        verbose=args.verbose or file.get("verbose", False),
        recompile=args.recompile,
        compiler=args.compiler or file.get("compiler"),
        compilers=tuple(file.get("compilers", SUPPORTED_TOOLCHAINS)),
        extra=args.extra if args.extra is not None else file.get("extra"),
        output=args.output,
        directory=Path(directory) if directory else None,
        run_args=args.run_args,
        detached=args.detached,
    )


def config_load(args: ArgsConfig, directory: Path | None = None) -> IOResultE[RunConfig]:
    return (
        load_config_file(Path(directory or Path.cwd(), CONFIG_FILE))
        .alt(_to_config_error)
        .bind(parse_config)
        .map(lambda file: create_run_config(args, file))
    )
