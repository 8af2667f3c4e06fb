import os
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from ..config import JPEG_EXTS


def is_jpeg_path(path: Path) -> bool:
    return path.suffix.lower() in JPEG_EXTS and not path.name.startswith("._")


def iter_jpeg_files(root: Path) -> Iterator[Path]:
    """
    Yield JPEG files directly inside `root`, sorted by name.
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name.lower())
    for entry in entries:
        if entry.is_file(follow_symlinks=True) and is_jpeg_path(Path(entry.path)):
            yield Path(entry.path)


def expand_inputs(inputs: Iterable[Union[str, Path]]) -> List[Path]:
    """
    Turn command line inputs into an ordered list of source files.

    Directories contribute their JPEG files; files are kept as given, in
    order, so that the user controls the export sequence.
    """
    paths: List[Path] = []
    for raw in inputs:
        path = Path(raw).expanduser()
        if path.is_dir():
            paths.extend(iter_jpeg_files(path))
        else:
            paths.append(path.resolve() if path.exists() else path)
    return paths
