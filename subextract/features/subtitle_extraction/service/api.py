from pathlib import Path
from typing import Any, Dict, Optional

from subextract.core.config.settings import settings
from subextract.core.logging_config import configure_logging
from subextract.features.file_access.service.api import build_file_access
from subextract.features.metadata_link.service.api import build_metadata_store
from subextract.features.metadata_link.service.linker import MetadataLinker

from ..data.ffmpeg_adapter import FFmpegSubtitleAdapter
from ..domain.models import ExtractionConfig, ExtractionRequest, RunResult
from .orchestrator import SubtitleOrchestrator


def build_orchestrator() -> SubtitleOrchestrator:
    """Wires the production adapters from process settings."""
    configure_logging(settings.LOG_LEVEL)
    settings.ensure_dirs()

    return SubtitleOrchestrator(
        extractor=FFmpegSubtitleAdapter(),
        linker=MetadataLinker(build_metadata_store(settings)),
        file_access=build_file_access(settings)
    )


def extract_subtitles(video_cid: str,
                      file_path: str,
                      existing_meta: Dict[str, Any],
                      options: Optional[Dict[str, Any]] = None,
                      output_dir: Optional[str] = None) -> RunResult:
    """
    Public Service API: extract every text subtitle of one video.

    Args:
        video_cid: CID of the source video.
        file_path: Path of the video under the shared media mount.
        existing_meta: Metadata bag (fileType, streams, title, ...).
        options: {"forceRecompute": bool, "outputFormat": "srt"|"vtt"|"ass"}.
        output_dir: Override for the output directory.
    """
    request = ExtractionRequest(video_cid=video_cid, file_path=file_path, existing_meta=existing_meta)
    config = ExtractionConfig.from_settings(settings).with_options(options)

    return build_orchestrator().run(request, Path(output_dir) if output_dir else settings.OUTPUT_DIR, config)
