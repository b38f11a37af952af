import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from subextract.core.common.enums import OutputFormat
from ..domain.models import SubtitleStream, ClassifiedStream
from ..data.codecs import is_text_based

logger = logging.getLogger(__name__)

DEFAULT_MAX_INDEXED_STREAMS = 20


def _clean(value: Any) -> Optional[str]:
    """Empty strings and missing values both mean 'unknown'."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_stream_list(raw: Any) -> List[SubtitleStream]:
    """
    Parses ffprobe's full stream list (JSON string or already-decoded list).
    Returns [] when the list is absent or unparsable.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug("Unparsable 'streams' field, falling back to indexed fields")
            return []

    if not isinstance(raw, list):
        return []

    streams: List[SubtitleStream] = []
    for entry in raw:
        if not isinstance(entry, dict) or entry.get("codec_type") != "subtitle":
            continue

        tags = entry.get("tags")
        if not isinstance(tags, dict):
            tags = {}

        streams.append(SubtitleStream(
            index=len(streams),
            codec=_clean(entry.get("codec_name")) or "unknown",
            language=_clean(tags.get("language")),
            title=_clean(tags.get("title"))
        ))
    return streams


def _parse_indexed_fields(meta: Mapping[str, Any], max_streams: int) -> List[SubtitleStream]:
    """
    Fallback for producers that flatten streams into subtitle_{i}_codec /
    subtitle_{i}_language / subtitle_{i}_title. The key index is already
    subtitle-relative, so it is kept as-is even when there are gaps.
    """
    streams: List[SubtitleStream] = []
    for i in range(max_streams):
        codec = _clean(meta.get(f"subtitle_{i}_codec"))
        if not codec:
            continue
        streams.append(SubtitleStream(
            index=i,
            codec=codec,
            language=_clean(meta.get(f"subtitle_{i}_language")),
            title=_clean(meta.get(f"subtitle_{i}_title"))
        ))
    return streams


def parse_subtitle_streams(meta: Optional[Mapping[str, Any]],
                           max_indexed_streams: int = DEFAULT_MAX_INDEXED_STREAMS) -> List[SubtitleStream]:
    """
    Extracts the subtitle streams from a video's metadata bag.
    Prefers the structured 'streams' list and falls back to indexed fields.
    """
    if not isinstance(meta, Mapping):
        return []

    streams = _parse_stream_list(meta.get("streams"))
    if not streams:
        streams = _parse_indexed_fields(meta, max_indexed_streams)
    return streams


def classify(meta: Optional[Mapping[str, Any]],
             output_format: OutputFormat = OutputFormat.SRT,
             max_indexed_streams: int = DEFAULT_MAX_INDEXED_STREAMS) -> List[ClassifiedStream]:
    """
    Pure function: metadata bag -> ordered subtitle streams with their decision.

    Only the text-based allow-list is supported. Image-based codecs, and any
    codec we don't recognise, are marked unsupported.
    """
    return [
        ClassifiedStream(
            stream=stream,
            supported=is_text_based(stream.codec),
            target_extension=output_format.extension
        )
        for stream in parse_subtitle_streams(meta, max_indexed_streams)
    ]


def summarize(classified: List[ClassifiedStream]) -> Dict[str, int]:
    supported = sum(1 for c in classified if c.supported)
    return {"total": len(classified), "supported": supported, "unsupported": len(classified) - supported}
