from abc import ABC, abstractmethod

class IMetadataStore(ABC):
    """
    Narrow write interface onto the externally-owned video metadata record.
    Fields are order-insensitive sets that only grow.
    """

    @abstractmethod
    def add_to_set(self, video_cid: str, field: str, value: str) -> None:
        """
        Adds `value` to the set `field` of the video `video_cid`.
        Adding an existing member is a no-op.

        Raises:
            LinkError: If the store rejects or cannot receive the write.
        """
        pass
