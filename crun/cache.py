from pathlib import Path


def _mtime(file: Path) -> float | None:
    try:
        return file.stat().st_mtime
    except OSError:
        return None


def should_rebuild(source: Path, artifact: Path, force: bool = False) -> bool:
    """True when 'artifact' has to be compiled again from 'source'.

    A missing source still asks for a rebuild so the compiler gets to report
    it. Equal timestamps count as fresh.
    """
    if force:
        return True

    source_mtime = _mtime(source)
    if source_mtime is None:
        return True

    artifact_mtime = _mtime(artifact)
    if artifact_mtime is None:
        return True

    return artifact_mtime < source_mtime
