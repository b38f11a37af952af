from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class SubtitleLink:
    """
    One extracted subtitle to fold into its source video's metadata.
    """
    video_cid: str
    subtitle_cid: str
    language: Optional[str] = None

    def __post_init__(self):
        if not self.video_cid:
            raise ValueError("Video CID cannot be empty.")
        if not self.subtitle_cid:
            raise ValueError("Subtitle CID cannot be empty.")
