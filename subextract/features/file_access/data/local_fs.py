from datetime import datetime, timezone
from pathlib import Path
from ..domain.interfaces import IFileAccess
from ..domain.models import FileStats

class LocalFileAccess(IFileAccess):
    """
    Concrete implementation reading straight from a mounted filesystem.
    """

    def stat(self, path: str) -> FileStats:
        st = Path(path).stat()
        return FileStats(
            size=st.st_size,
            mtime=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
        )

    def read_range(self, path: str, start: int, end: int) -> bytes:
        length = end - start + 1
        if length <= 0:
            return b""

        with open(path, "rb") as f:
            f.seek(start)
            return f.read(length)

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def to_input_locator(self, path: str) -> str:
        return str(path)
