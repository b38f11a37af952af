from abc import ABC, abstractmethod

class IContentHasher(ABC):
    @abstractmethod
    def compute_cid(self, file_path: str) -> str:
        """
        Derives the content identifier (CID) of a file.

        Raises:
            IOError: If the file cannot be opened or the sample cannot be fully read.
        """
        pass
