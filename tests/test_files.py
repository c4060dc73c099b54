from pathlib import Path

from crun.errors import SourceNotFound
from crun.files import BINARY_SUFFIX, artifact_name, probe_source, target_load

from tests.helpers import failure, value


def test_probe_finds_cpp(tmp_path: Path) -> None:
    (tmp_path / "myprog.cpp").write_text("int main() {}")
    assert value(probe_source(tmp_path / "myprog")) == tmp_path / "myprog.cpp"


def test_probe_prefers_earlier_extension(tmp_path: Path) -> None:
    (tmp_path / "myprog.cc").write_text("")
    (tmp_path / "myprog.c").write_text("")
    assert value(probe_source(tmp_path / "myprog")) == tmp_path / "myprog.c"


def test_probe_ignores_directories(tmp_path: Path) -> None:
    (tmp_path / "myprog.c").mkdir()
    (tmp_path / "myprog.hpp").write_text("")
    assert value(probe_source(tmp_path / "myprog")) == tmp_path / "myprog.hpp"


def test_probe_without_match_is_source_not_found(tmp_path: Path) -> None:
    (tmp_path / "myprog.rs").write_text("")
    assert isinstance(failure(probe_source(tmp_path / "myprog")), SourceNotFound)


def test_artifact_name() -> None:
    assert artifact_name(Path("src/main.c")) == "main" + BINARY_SUFFIX
    assert artifact_name(Path("main.c"), "app") == "app" + BINARY_SUFFIX
    assert artifact_name(Path("main.c"), "app.exe") == "app.exe"


def test_target_defaults_to_cache_dir(project: Path) -> None:
    (project / "main.c").write_text("")
    target = value(target_load(Path("main.c")))

    assert target.source == project / "main.c"
    assert target.output_dir == project / ".crun"
    assert target.output_dir.is_dir()
    assert target.artifact == project / ".crun" / ("main" + BINARY_SUFFIX)
    assert target.artifact.is_absolute()


def test_target_creates_explicit_directory(project: Path) -> None:
    target = value(target_load(Path("main.c"), "tool", Path("out/bin")))

    assert (project / "out" / "bin").is_dir()
    assert target.artifact == project / "out" / "bin" / "tool.exe"


def test_target_directory_that_is_a_file_fails(project: Path) -> None:
    (project / "out").write_text("")
    assert isinstance(
        failure(target_load(Path("main.c"), directory=Path("out"))), OSError
    )
