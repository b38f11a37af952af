from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class SubtitleStream:
    """
    One subtitle track of a container.
    `index` counts subtitle streams only (ffmpeg's `0:s:{index}`), not all streams.
    """
    index: int
    codec: str
    language: Optional[str] = None
    title: Optional[str] = None

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Subtitle index cannot be negative: {self.index}")

@dataclass(frozen=True)
class ClassifiedStream:
    """
    A SubtitleStream plus the extraction decision for it.
    Unsupported streams are never handed to the extraction tool.
    """
    stream: SubtitleStream
    supported: bool
    target_extension: str

    @property
    def index(self) -> int:
        return self.stream.index

    @property
    def codec(self) -> str:
        return self.stream.codec

    @property
    def language(self) -> Optional[str]:
        return self.stream.language
