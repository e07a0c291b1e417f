"""
Input Reader
Streams classification targets from a text file, one per line.
"""

from pathlib import Path
from typing import Iterable, Iterator, TextIO


def open_input_file(input_file: Path) -> TextIO:
    """
    Open the input file for streaming.

    Raises:
        OSError: if the file is missing or unreadable. Callers treat this as
            fatal before any input reaches the pipeline.
    """
    path = Path(input_file)
    if path.is_dir():
        raise IsADirectoryError(f"Is a directory: {path}")
    return open(path, 'r', encoding='utf-8', errors='ignore')


def iter_input_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield trimmed entries, skipping blank lines and comments"""
    for line in lines:
        line = line.strip()
        if line and not line.startswith('#'):
            yield line
