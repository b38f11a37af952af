import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, List, Optional, Tuple

from subextract.core.common.enums import FileType, RunStatus
from subextract.core.errors import (
    ArtifactValidationError, InputError, LinkError, ToolInvocationError
)
from subextract.features.content_id.data.midhash import MidHash256Hasher
from subextract.features.content_id.domain.interfaces import IContentHasher
from subextract.features.file_access.data.local_fs import LocalFileAccess
from subextract.features.file_access.domain.interfaces import IFileAccess
from subextract.features.metadata_link.service.linker import MetadataLinker
from subextract.features.stream_classifier.data.codecs import is_image_based
from subextract.features.stream_classifier.domain.models import ClassifiedStream
from subextract.features.stream_classifier.service.classifier import classify, summarize

from ..domain.interfaces import IStreamExtractor
from ..domain.models import ExtractionConfig, ExtractionOutcome, ExtractionRequest, RunResult
from .naming import build_output_filename

logger = logging.getLogger(__name__)

REASON_NOT_VIDEO = "Not a video file"
REASON_ALREADY_EXTRACTED = "Subtitles already extracted"
REASON_NO_STREAMS = "No subtitle streams found"
REASON_IMAGE_ONLY = "Only image-based subtitles (cannot convert to text)"
REASON_NO_TEXT_STREAMS = "No supported text-based subtitle streams"


def _has_recorded_subtitles(value: Any) -> bool:
    """The metadata bag may carry the set as a list or as its JSON text."""
    if isinstance(value, str):
        return value.strip() not in ("", "[]")
    return bool(value)


class SubtitleOrchestrator:
    """
    Decides which subtitle streams of a video to extract, drives the extractor
    per stream, and links every accepted artifact back to the video.

    A failure on one stream never aborts the others.
    """

    def __init__(self,
                 extractor: IStreamExtractor,
                 linker: MetadataLinker,
                 file_access: Optional[IFileAccess] = None,
                 hasher: Optional[IContentHasher] = None):
        self.extractor = extractor
        self.linker = linker
        # Source video access (local mount or WebDAV)
        self.file_access = file_access or LocalFileAccess()
        # Artifacts are always written locally
        self.hasher = hasher or MidHash256Hasher()

    def run(self,
            request: ExtractionRequest,
            output_dir: Path,
            config: ExtractionConfig,
            classified: Optional[List[ClassifiedStream]] = None) -> RunResult:
        """
        Main entry point. Always returns exactly one RunResult; nothing escapes.

        Args:
            request: The video to process.
            output_dir: Directory scanned downstream for new subtitle files.
            config: Per-run settings.
            classified: Pre-classified streams; derived from request metadata when omitted.
        """
        start = time.monotonic()

        def finish(status: RunStatus, reason: str = None, error: str = None,
                   outcomes: List[ExtractionOutcome] = None) -> RunResult:
            return RunResult(
                status=status,
                duration_ms=int((time.monotonic() - start) * 1000),
                reason=reason,
                error=error,
                outcomes=outcomes or []
            )

        try:
            meta = request.existing_meta or {}

            # 1. Short-circuits that never touch the extractor
            if meta.get("fileType") != FileType.VIDEO.value:
                logger.info(f"Skipping {request.file_path}: {REASON_NOT_VIDEO}")
                return finish(RunStatus.SKIPPED, reason=REASON_NOT_VIDEO)

            if _has_recorded_subtitles(meta.get("extractedSubtitles")) and not config.force_recompute:
                logger.info(f"Skipping {request.file_path}: {REASON_ALREADY_EXTRACTED}")
                return finish(RunStatus.SKIPPED, reason=REASON_ALREADY_EXTRACTED)

            if classified is None:
                classified = classify(meta, config.output_format, config.max_indexed_streams)

            if not classified:
                logger.info(f"Skipping {request.file_path}: {REASON_NO_STREAMS}")
                return finish(RunStatus.SKIPPED, reason=REASON_NO_STREAMS)

            supported = [c for c in classified if c.supported]
            if not supported:
                if all(is_image_based(c.codec) for c in classified):
                    reason = REASON_IMAGE_ONLY
                else:
                    codecs = sorted({c.codec for c in classified})
                    reason = f"{REASON_NO_TEXT_STREAMS} (codecs: {', '.join(codecs)})"
                logger.info(f"All {len(classified)} subtitle(s) of {request.file_path} are unsupported, skipping")
                return finish(RunStatus.SKIPPED, reason=reason)

            counts = summarize(classified)
            logger.info(
                f"Found {counts['supported']} text-based subtitle(s) in {request.file_path} "
                f"({counts['unsupported']} unsupported)"
            )

            # 2. Streams are expected from here on: a missing source is a defect
            if not self.file_access.exists(request.file_path):
                raise InputError(f"Source file not found: {request.file_path}")

            input_locator = self.file_access.to_input_locator(request.file_path)
            output_dir.mkdir(parents=True, exist_ok=True)

            # 3. Per-stream extraction
            jobs = self._plan_outputs(request, supported, output_dir)
            outcomes = self._run_streams(request, input_locator, jobs, config)

            extracted = sum(1 for o in outcomes if o.success)
            if extracted:
                logger.info(f"Extracted {extracted}/{len(outcomes)} subtitle(s) from {request.file_path}")
            else:
                logger.info(f"No subtitles could be extracted from {request.file_path}")

            return finish(RunStatus.COMPLETED, outcomes=outcomes)

        except Exception as e:
            logger.exception(f"Subtitle extraction failed for {request.file_path}: {e}")
            return finish(RunStatus.FAILED, error=str(e))

    def _plan_outputs(self,
                      request: ExtractionRequest,
                      streams: List[ClassifiedStream],
                      output_dir: Path) -> List[Tuple[ClassifiedStream, Path]]:
        """
        Assigns each stream its output path. The suffix is the language when
        known, the stream index otherwise or when another stream in this run
        already took that language.
        """
        planned: List[Tuple[ClassifiedStream, Path]] = []
        taken = set()

        for stream in streams:
            suffix = stream.language if stream.language and stream.language not in taken else str(stream.index)
            taken.add(suffix)

            filename = build_output_filename(
                title=request.title,
                year=request.year,
                video_cid=request.video_cid,
                suffix=suffix,
                extension=stream.target_extension
            )
            planned.append((stream, output_dir / filename))
        return planned

    def _run_streams(self,
                     request: ExtractionRequest,
                     input_locator: str,
                     jobs: List[Tuple[ClassifiedStream, Path]],
                     config: ExtractionConfig) -> List[ExtractionOutcome]:
        def work(job: Tuple[ClassifiedStream, Path]) -> ExtractionOutcome:
            stream, output_path = job
            return self._process_stream(request, input_locator, stream, output_path, config)

        if config.max_workers == 1 or len(jobs) == 1:
            return [work(job) for job in jobs]

        # Set merges in the store are commutative, completion order doesn't matter
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            return list(pool.map(work, jobs))

    def _process_stream(self,
                        request: ExtractionRequest,
                        input_locator: str,
                        stream: ClassifiedStream,
                        output_path: Path,
                        config: ExtractionConfig) -> ExtractionOutcome:
        outcome = ExtractionOutcome(stream=stream)

        # 1. Reuse a previous run's artifact
        if output_path.exists() and not config.force_recompute:
            logger.info(f"Subtitle already exists: {output_path.name}")
            outcome.reused = True
        else:
            # 2. Extract into a scratch file, publish only once validated
            scratch_path = self._scratch_path(output_path)
            try:
                self.extractor.extract(
                    input_locator,
                    scratch_path,
                    stream.index,
                    config.output_format,
                    config.timeout_seconds
                )
                size = self._validate_artifact(scratch_path, config)
                os.replace(scratch_path, output_path)
                logger.info(f"Extracted subtitle {stream.index} ({size} bytes)")
            except (ToolInvocationError, ArtifactValidationError) as e:
                self._discard(scratch_path)
                outcome.reason = str(e)
                logger.warning(f"Subtitle {stream.index} of {request.file_path} failed: {e}")
                return outcome

        # 3. Identify
        try:
            outcome.cid = self.hasher.compute_cid(str(output_path))
        except OSError as e:
            outcome.reason = f"Failed to compute CID: {e}"
            logger.error(f"Failed to compute CID for {output_path}: {e}")
            return outcome

        outcome.produced_path = output_path
        outcome.success = True
        logger.info(f"Subtitle CID: {outcome.cid}")

        # 4. Link. The artifact stays on disk even if this fails.
        try:
            self.linker.link(request.video_cid, outcome.cid, stream.language)
            outcome.linked = True
        except LinkError as e:
            outcome.reason = str(e)
            logger.error(f"Failed to link subtitle {outcome.cid} to {request.video_cid}: {e}")

        return outcome

    @staticmethod
    def _scratch_path(output_path: Path) -> Path:
        # Keeps the real extension, ffmpeg picks the muxer from it
        return output_path.with_name(f".partial-{output_path.name}")

    @staticmethod
    def _validate_artifact(output_path: Path, config: ExtractionConfig) -> int:
        if not output_path.exists():
            raise ArtifactValidationError(f"No output file produced: {output_path.name}")

        size = output_path.stat().st_size
        if size <= config.min_artifact_bytes:
            raise ArtifactValidationError(f"Extraction produced an empty file ({size} bytes): {output_path.name}")
        return size

    @staticmethod
    def _discard(output_path: Path) -> None:
        try:
            output_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove partial output {output_path}: {e}")
