from abc import ABC, abstractmethod
from .models import FileStats

class IFileAccess(ABC):
    """
    Contract for reading source files.
    Abstracts direct filesystem access vs. remote HTTP (WebDAV) access so the
    hashing and extraction logic never branches on where the bytes live.
    """

    @abstractmethod
    def stat(self, path: str) -> FileStats:
        """
        Raises:
            IOError: If the file cannot be reached.
        """
        pass

    @abstractmethod
    def read_range(self, path: str, start: int, end: int) -> bytes:
        """
        Reads bytes [start, end] (end inclusive, like an HTTP Range header).

        Raises:
            IOError: If the file cannot be read.
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def to_input_locator(self, path: str) -> str:
        """Returns the string the external extraction tool should open."""
        pass
