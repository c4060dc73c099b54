from dataclasses import dataclass
from pathlib import Path

from returns.context import RequiresContextIOResultE
from returns.io import IOFailure, IOResultE, IOSuccess
from returns.pipeline import flow
from returns.pointfree import bind

from crun import dispatch
from crun.cache import should_rebuild
from crun.compiler import CompileCommand, compose, split_flags
from crun.config import RunConfig
from crun.errors import CompileFailure, RunFailure, ToolchainUnavailable
from crun.files import BuildTarget, probe_source, target_load
from crun.terminal import TerminalLauncher
from crun.toolchain import resolve
from crun.transcript import Transcript


@dataclass(frozen=True)
class LaunchContext:
    config: RunConfig
    transcript: Transcript
    terminal: TerminalLauncher


def select_toolchain(config: RunConfig) -> IOResultE[str]:
    try:
        found = resolve(config.compiler, config.compilers)
    except ToolchainUnavailable as e:
        return IOFailure(e)
    return found.map(IOSuccess).value_or(
        IOFailure(ToolchainUnavailable("no supported toolchain found"))
    )


def _find_source(
    filename: Path,
) -> RequiresContextIOResultE[Path, LaunchContext]:
    def _inner(context: LaunchContext):
        log = context.transcript
        log.emit(f"Provided source file: {filename}")
        if filename.suffix:
            return RequiresContextIOResultE.from_value(filename)

        def found(source: Path) -> Path:
            log.emit(f"Found file: {source}")
            log.emit(
                "If this is not the intended file, "
                "please provide the correct filename with extension."
            )
            return source

        log.emit("No file extension provided, trying common extensions...")
        return RequiresContextIOResultE.from_ioresult(
            probe_source(filename).map(found)
        )

    return RequiresContextIOResultE.ask().bind(_inner)


def _load_target(
    source: Path,
) -> RequiresContextIOResultE[BuildTarget, LaunchContext]:
    def _inner(context: LaunchContext):
        return RequiresContextIOResultE.from_ioresult(
            target_load(source, context.config.output, context.config.directory)
        )

    return RequiresContextIOResultE.ask().bind(_inner)


def _compile(
    context: LaunchContext, cmd: CompileCommand, target: BuildTarget
) -> IOResultE[BuildTarget]:
    log = context.transcript
    log.emit(f"Using compiler: {cmd.toolchain}")
    if context.config.verbose:
        log.emit(" ".join(cmd.command))

    def compiled(_) -> BuildTarget:
        log.emit(f"Compiled successfully to: {target.artifact}")
        return target

    return (
        dispatch.run_command(cmd.command)
        .alt(lambda e: CompileFailure(f"Compilation of '{target.source}' failed: {e}"))
        .map(compiled)
    )


def _build_target(
    target: BuildTarget,
) -> RequiresContextIOResultE[BuildTarget, LaunchContext]:
    def _inner(context: LaunchContext):
        config = context.config
        if not should_rebuild(target.source, target.artifact, config.recompile):
            context.transcript.emit("No changes detected, skipping recompilation.")
            return RequiresContextIOResultE.from_value(target)

        return RequiresContextIOResultE.from_ioresult(
            select_toolchain(config)
            .map(
                lambda toolchain: compose(
                    toolchain, target.source, target.artifact, config.extra
                )
            )
            .bind(lambda cmd: _compile(context, cmd, target))
        )

    return RequiresContextIOResultE.ask().bind(_inner)


def _to_run_failure(error: Exception) -> Exception:
    if isinstance(error, RunFailure):
        return error
    return RunFailure(f"Failed to run the binary: {error}")


def _run_target(
    target: BuildTarget,
) -> RequiresContextIOResultE[int, LaunchContext]:
    def _inner(context: LaunchContext):
        context.transcript.emit("Running the binary...")
        context.transcript.collapse()

        if not target.artifact.is_file():
            return RequiresContextIOResultE.from_failure(
                RunFailure(f"Executable not found: {target.artifact}")
            )

        spec = dispatch.RunSpec(
            exe=target.artifact,
            args=split_flags(context.config.run_args),
            detached=context.config.detached,
        )
        return RequiresContextIOResultE.from_ioresult(
            dispatch.Dispatcher(context.terminal).run(spec).alt(_to_run_failure)
        )

    return RequiresContextIOResultE.ask().bind(_inner)


def launch(context: LaunchContext) -> IOResultE[int]:
    """Finds the source, rebuilds it when stale and runs the binary."""
    return flow(
        context.config.filename,
        _find_source,
        bind(_load_target),
        bind(_build_target),
        bind(_run_target),
    )(context)
