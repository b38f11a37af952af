from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from subextract.core.common.enums import OutputFormat, RunStatus
from subextract.core.config.settings import Settings
from subextract.core.errors import InputError
from subextract.features.stream_classifier.domain.models import ClassifiedStream

DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_MIN_ARTIFACT_BYTES = 10
DEFAULT_MAX_INDEXED_STREAMS = 20


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Per-run configuration. Passed explicitly into every run so concurrent runs
    can use different settings.
    """
    force_recompute: bool = False
    output_format: OutputFormat = OutputFormat.SRT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    # Files of this size or smaller hold no usable cue
    min_artifact_bytes: int = DEFAULT_MIN_ARTIFACT_BYTES
    max_indexed_streams: int = DEFAULT_MAX_INDEXED_STREAMS
    max_workers: int = 1

    def __post_init__(self):
        if self.timeout_seconds <= 0:
            raise ValueError(f"Timeout must be positive: {self.timeout_seconds}")
        if self.max_workers < 1:
            raise ValueError(f"At least one worker is required: {self.max_workers}")
        if self.max_indexed_streams < 0:
            raise ValueError(f"Indexed stream bound cannot be negative: {self.max_indexed_streams}")

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "ExtractionConfig":
        values = dict(
            timeout_seconds=settings.EXTRACTION_TIMEOUT_SECONDS,
            min_artifact_bytes=settings.MIN_SUBTITLE_BYTES,
            max_indexed_streams=settings.MAX_INDEXED_SUBTITLE_STREAMS,
            max_workers=settings.EXTRACTION_WORKERS,
        )
        values.update(overrides)
        return cls(**values)

    def with_options(self, options: Optional[Mapping[str, Any]]) -> "ExtractionConfig":
        """
        Applies the plugin config bag {"forceRecompute": bool, "outputFormat": "srt"|"vtt"|"ass"}.

        forceRecompute is only enabled by a literal True. A missing or empty
        outputFormat means srt.
        """
        options = options or {}
        raw_format = options.get("outputFormat") or OutputFormat.SRT.value
        try:
            output_format = OutputFormat(str(raw_format).lower())
        except ValueError:
            allowed = ", ".join(f.value for f in OutputFormat)
            raise ValueError(f"Unsupported outputFormat '{raw_format}' (expected one of: {allowed})")

        return ExtractionConfig(
            force_recompute=options.get("forceRecompute") is True,
            output_format=output_format,
            timeout_seconds=self.timeout_seconds,
            min_artifact_bytes=self.min_artifact_bytes,
            max_indexed_streams=self.max_indexed_streams,
            max_workers=self.max_workers,
        )

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> "ExtractionConfig":
        return cls().with_options(options)


@dataclass(frozen=True)
class ExtractionRequest:
    """
    Input for one run: which video, where its bytes are, and what is already known about it.
    """
    video_cid: str
    file_path: str
    existing_meta: Dict[str, Any] = field(default_factory=dict)
    task_id: Optional[str] = None

    def __post_init__(self):
        if not self.video_cid or not str(self.video_cid).strip():
            raise InputError("Video CID cannot be empty.")
        if not self.file_path or not str(self.file_path).strip():
            raise InputError("File path cannot be empty.")

    @property
    def title(self) -> str:
        meta = self.existing_meta or {}
        return meta.get("originalTitle") or meta.get("title") or meta.get("fileName") or "video"

    @property
    def year(self) -> Optional[str]:
        year = (self.existing_meta or {}).get("movieYear")
        return str(year) if year else None


@dataclass
class ExtractionOutcome:
    """
    Result of one attempted stream. `linked` is False when the artifact exists
    but the metadata store write failed.
    """
    stream: ClassifiedStream
    produced_path: Optional[Path] = None
    cid: Optional[str] = None
    success: bool = False
    reason: Optional[str] = None
    linked: bool = False
    reused: bool = False


@dataclass
class RunResult:
    """
    The single terminal report of a run.
    """
    status: RunStatus
    duration_ms: int
    reason: Optional[str] = None
    error: Optional[str] = None
    outcomes: List[ExtractionOutcome] = field(default_factory=list)

    @property
    def extracted_cids(self) -> List[str]:
        return [o.cid for o in self.outcomes if o.success and o.cid]

    def to_callback_payload(self, task_id: Optional[str]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "taskId": task_id,
            "status": self.status.value,
            "duration": self.duration_ms,
        }
        if self.reason:
            payload["reason"] = self.reason
        if self.error:
            payload["error"] = self.error
        return payload
