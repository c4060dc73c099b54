from dataclasses import dataclass
from pathlib import Path

from returns.io import IOFailure, IOResultE, IOSuccess, impure_safe

from crun.errors import SourceNotFound

SOURCE_EXTENSIONS = (".c", ".cpp", ".cc", ".cxx", ".h", ".hpp", ".hh", ".hxx")
BINARY_SUFFIX = ".exe"
CACHE_DIR = ".crun"


@dataclass(frozen=True)
class BuildTarget:
    source: Path
    artifact: Path
    output_dir: Path


def probe_source(filename: Path) -> IOResultE[Path]:
    """Finds 'filename' plus the first conventional extension that exists."""
    for ext in SOURCE_EXTENSIONS:
        candidate = filename.with_name(filename.name + ext)
        if candidate.is_file():
            return IOSuccess(candidate)
    return IOFailure(
        SourceNotFound(
            f"no file found for '{filename}' with any of: {' '.join(SOURCE_EXTENSIONS)}"
        )
    )


def artifact_name(source: Path, output: str | None = None) -> str:
    if output:
        return output if output.endswith(BINARY_SUFFIX) else output + BINARY_SUFFIX
    return source.stem + BINARY_SUFFIX


def cache_dir(cwd: Path | None = None) -> Path:
    return Path(cwd or Path.cwd(), CACHE_DIR)


@impure_safe
def _ensure_dir(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def target_load(
    source: Path, output: str | None = None, directory: Path | None = None
) -> IOResultE[BuildTarget]:
    source = source.absolute()
    return _ensure_dir(Path(directory or cache_dir()).absolute()).map(
        lambda output_dir: BuildTarget(
            source=source,
            artifact=output_dir / artifact_name(source, output),
            output_dir=output_dir,
        )
    )
