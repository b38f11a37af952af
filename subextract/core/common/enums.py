# File: subextract/core/common/enums.py

from enum import Enum, unique

@unique
class FileType(str, Enum):
    VIDEO = "video"

@unique
class RunStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"

@unique
class MetadataField(str, Enum):
    EXTRACTED_SUBTITLES = "extractedSubtitles"
    SUBTITLE_LANGUAGES = "subtitleLanguages"

@unique
class OutputFormat(str, Enum):
    """
    Target subtitle format for every stream extracted in a run.
    """
    SRT = "srt"
    VTT = "vtt"
    ASS = "ass"

    @property
    def ffmpeg_codec(self) -> str:
        return {"srt": "srt", "vtt": "webvtt", "ass": "ass"}[self.value]

    @property
    def extension(self) -> str:
        return self.value
