from dataclasses import dataclass
from pathlib import Path

from crun.toolchain import ToolchainId
from crun.types import Args, Cmd


@dataclass(frozen=True)
class ArgvTemplate:
    """How a compiler family lays out its command line.

    'fused_output' is the prefix glued onto the artifact path for compilers
    that take the output as a single token (MSVC's '/Fe:'). Extra flags go
    right after the output token in both layouts, so the source is always last.
    """

    verb: Args = ()
    output_flag: str = "-o"
    fused_output: str | None = None

    def output(self, artifact: Path) -> Args:
        if self.fused_output is not None:
            return (f"{self.fused_output}{artifact}",)
        return (self.output_flag, str(artifact))


DEFAULT_TEMPLATE = ArgvTemplate()

TEMPLATES: dict[str, ArgvTemplate] = {
    ToolchainId.CLANG: DEFAULT_TEMPLATE,
    ToolchainId.GCC: DEFAULT_TEMPLATE,
    ToolchainId.ZIG: ArgvTemplate(verb=("cc",)),
    ToolchainId.CL: ArgvTemplate(fused_output="/Fe:"),
    ToolchainId.BYTES: DEFAULT_TEMPLATE,
}


@dataclass(frozen=True)
class CompileCommand:
    """The return value of 'compose'"""

    toolchain: str
    output_path: Path
    argv: Cmd

    @property
    def command(self) -> Cmd:
        return (self.toolchain, *self.argv)


def template_for(toolchain: str) -> ArgvTemplate:
    return TEMPLATES.get(toolchain, DEFAULT_TEMPLATE)


def split_flags(text: str | None) -> Args:
    # Plain whitespace split: quoted tokens containing spaces are not supported.
    return tuple(text.split()) if text else ()


def compose(
    toolchain: str, source: Path, artifact: Path, extra: str | None = None
) -> CompileCommand:
    template = template_for(toolchain)
    return CompileCommand(
        toolchain=toolchain,
        output_path=artifact,
        argv=(
            *template.verb,
            *template.output(artifact),
            *split_flags(extra),
            str(source),
        ),
    )
