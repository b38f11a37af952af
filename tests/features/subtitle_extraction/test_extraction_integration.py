import json
import shutil
import subprocess
import pytest

from subextract.core.common.enums import OutputFormat, RunStatus
from subextract.features.metadata_link.data.repository import SqlMetadataStore
from subextract.features.metadata_link.service.linker import MetadataLinker
from subextract.features.subtitle_extraction.data.ffmpeg_adapter import FFmpegSubtitleAdapter
from subextract.features.subtitle_extraction.domain.models import ExtractionConfig, ExtractionRequest
from subextract.features.subtitle_extraction.service.orchestrator import SubtitleOrchestrator

pytestmark = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")

SRT_TEXT = """1
00:00:00,500 --> 00:00:01,500
Hello there.

2
00:00:01,600 --> 00:00:02,500
General Kenobi.
"""


@pytest.fixture
def mkv_with_subtitles(tmp_path):
    """
    Builds a 3-second MKV with one SubRip track tagged 'eng'.
    """
    srt = tmp_path / "track.srt"
    srt.write_text(SRT_TEXT)
    video = tmp_path / "sample.mkv"

    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", "testsrc=duration=3:size=160x120:rate=10",
        "-i", str(srt),
        "-map", "0:v", "-map", "1:s",
        "-c:v", "mpeg4", "-c:s", "srt",
        "-metadata:s:s:0", "language=eng",
        str(video)
    ]
    subprocess.run(cmd, check=True, capture_output=True)
    return video


@pytest.mark.parametrize("output_format", [OutputFormat.SRT, OutputFormat.VTT])
def test_real_extraction_and_linking(mkv_with_subtitles, tmp_path, session_factory, output_format):
    store = SqlMetadataStore(session_factory)
    orchestrator = SubtitleOrchestrator(extractor=FFmpegSubtitleAdapter("ffmpeg"), linker=MetadataLinker(store))

    meta = {
        "fileType": "video",
        "title": "Sample",
        "streams": json.dumps([
            {"codec_type": "video", "codec_name": "mpeg4"},
            {"codec_type": "subtitle", "codec_name": "subrip", "tags": {"language": "eng"}},
        ]),
    }
    request = ExtractionRequest("bsamplevideo", str(mkv_with_subtitles), meta)
    output_dir = tmp_path / "output"

    result = orchestrator.run(request, output_dir, ExtractionConfig(output_format=output_format))

    assert result.status == RunStatus.COMPLETED
    outcome = result.outcomes[0]
    assert outcome.success, outcome.reason
    assert outcome.produced_path.name == f"Sample[bsamplevideo]_subtitle.eng.{output_format.extension}"
    assert "General Kenobi." in outcome.produced_path.read_text()

    assert store.members("bsamplevideo", "extractedSubtitles") == {outcome.cid}
    assert store.members("bsamplevideo", "subtitleLanguages") == {"eng"}


def test_missing_stream_index_fails_only_that_stream(mkv_with_subtitles, tmp_path, session_factory):
    store = SqlMetadataStore(session_factory)
    orchestrator = SubtitleOrchestrator(extractor=FFmpegSubtitleAdapter("ffmpeg"), linker=MetadataLinker(store))

    # Metadata claims a second track that the container doesn't have
    meta = {
        "fileType": "video",
        "subtitle_0_codec": "subrip",
        "subtitle_0_language": "eng",
        "subtitle_1_codec": "subrip",
        "subtitle_1_language": "fre",
    }
    result = orchestrator.run(
        ExtractionRequest("bsample", str(mkv_with_subtitles), meta),
        tmp_path / "output",
        ExtractionConfig()
    )

    assert result.status == RunStatus.COMPLETED
    assert [o.success for o in result.outcomes] == [True, False]
    assert store.members("bsample", "subtitleLanguages") == {"eng"}
