import fcntl
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class FstabTable:
    """Append-only view of the persistent mount table.

    Entries are never rewritten. Reads and appends hold an advisory lock so a
    concurrent manual edit is not interleaved with ours.
    """

    def __init__(self, path: str = "/etc/fstab"):
        self.path = path

    @contextmanager
    def _locked(self):
        with open(self.path, "a+") as f:
            fcntl.flock(f, fcntl.LOCK_EX)
            try:
                f.seek(0)
                yield f
            finally:
                fcntl.flock(f, fcntl.LOCK_UN)

    def contains(self, needle: str) -> bool:
        """Substring match anywhere in the table, comments included."""
        with self._locked() as f:
            return needle in f.read()

    def ensure_entry(self, needle: str, line: str) -> bool:
        """Append `line` unless `needle` is already present. Returns True if appended."""
        with self._locked() as f:
            content = f.read()
            if needle in content:
                return False
            if content and not content.endswith("\n"):
                f.write("\n")
            f.write(line + "\n")
            f.flush()
        logger.info(f"Added to {self.path}: {line}")
        return True
