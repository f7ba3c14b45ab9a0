"""
File store with atomic, commit-on-success writes.

Content is written to a temporary file next to the target and only renamed
over it once the writer commits, so readers never observe a partially
written file.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from filelock import FileLock

logger = logging.getLogger(__name__)


class FileStore:
    """Read and atomically replace the content of a single file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def lock_path(self) -> Path:
        return self.path.with_name(self.path.name + ".lock")

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Optional[str]:
        """
        Read the whole file.

        Returns:
            The file content, or None if the file does not exist
        """
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @contextmanager
    def write(self) -> Iterator[IO[str]]:
        """
        Open a writer replacing the file when the block exits cleanly.

        If the block raises, the temporary file is discarded and the existing
        file is left untouched.

        Usage:
            with store.write() as f:
                f.write(content)
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        committed = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yield f
                f.flush()
                os.fsync(f.fileno())
            self._commit(Path(tmp_name))
            committed = True
        finally:
            if not committed:
                Path(tmp_name).unlink(missing_ok=True)

    def _commit(self, tmp_path: Path) -> None:
        with FileLock(self.lock_path):
            os.replace(tmp_path, self.path)
        logger.debug(f"Committed {self.path}")
