# wav2pwl/io/atomic.py
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from wav2pwl.core.exceptions import IoError

logger = logging.getLogger(__name__)


def tmp_path_for(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


@contextmanager
def atomic_write(path: str | os.PathLike, mode: str = "w") -> Iterator[IO]:
    """Open a temporary sibling of `path`; move it into place on clean exit.

    On any error the temporary file is removed and `path` is left untouched.
    OSError from the filesystem is raised as IoError.
    """
    path = Path(path)
    tmp = tmp_path_for(path)
    try:
        f = open(tmp, mode)
    except OSError as e:
        raise IoError(f"Cannot write {path}: {e.strerror or e}") from e

    try:
        with f:
            yield f
        os.replace(tmp, path)
    except BaseException as e:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        except OSError as cleanup_err:
            logger.warning(f"Could not remove temporary file {tmp}: {cleanup_err}")
        if isinstance(e, OSError) and not isinstance(e, IoError):
            raise IoError(f"Cannot write {path}: {e.strerror or e}") from e
        raise
