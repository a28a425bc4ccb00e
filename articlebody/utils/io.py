from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..errors import DocumentError


STDIN = "-"


@dataclass
class WriteResult:
    path: Path
    bytes_written: int


def read_source(source: Union[str, Path], encoding: Optional[str] = None) -> Union[str, bytes]:
    """Read raw markup from a path, or from stdin when ``source`` is ``-``.

    Bytes are returned so lxml can honour a ``<meta charset>`` declaration;
    with an explicit ``encoding`` the decoded text is returned instead.
    """
    if str(source) == STDIN:
        data = sys.stdin.buffer.read()
    else:
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DocumentError(f"cannot read {path}: {e.strerror or e}") from e
    if encoding:
        try:
            return data.decode(encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise DocumentError(f"cannot decode input as {encoding}: {e}") from e
    return data


def write_text_file(path: Path, content: str, encoding: str = "utf-8") -> WriteResult:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode(encoding)
    path.write_bytes(data)
    return WriteResult(path=path, bytes_written=len(data))
