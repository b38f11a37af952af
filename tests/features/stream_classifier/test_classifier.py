import json
import pytest

from subextract.core.common.enums import OutputFormat
from subextract.features.stream_classifier.data.codecs import is_image_based, is_text_based
from subextract.features.stream_classifier.service.classifier import classify, parse_subtitle_streams


def ffprobe_streams(*entries):
    return json.dumps(list(entries))


@pytest.fixture
def mixed_meta():
    return {
        "fileType": "video",
        "streams": ffprobe_streams(
            {"index": 0, "codec_type": "video", "codec_name": "h264"},
            {"index": 1, "codec_type": "audio", "codec_name": "aac", "tags": {"language": "eng"}},
            {"index": 2, "codec_type": "subtitle", "codec_name": "subrip", "tags": {"language": "eng", "title": "English"}},
            {"index": 3, "codec_type": "subtitle", "codec_name": "hdmv_pgs_subtitle", "tags": {"language": "fre"}},
            {"index": 4, "codec_type": "subtitle", "codec_name": "ass"},
        ),
    }


def test_stream_list_is_filtered_and_reindexed(mixed_meta):
    streams = parse_subtitle_streams(mixed_meta)

    assert [s.index for s in streams] == [0, 1, 2]
    assert [s.codec for s in streams] == ["subrip", "hdmv_pgs_subtitle", "ass"]
    assert streams[0].language == "eng"
    assert streams[0].title == "English"
    assert streams[2].language is None


def test_classification_marks_supported_and_target_extension(mixed_meta):
    classified = classify(mixed_meta, OutputFormat.VTT)

    assert [c.supported for c in classified] == [True, False, True]
    assert {c.target_extension for c in classified} == {"vtt"}


def test_classify_is_pure(mixed_meta):
    assert classify(mixed_meta) == classify(mixed_meta)


def test_decoded_list_is_accepted():
    meta = {"streams": [{"codec_type": "subtitle", "codec_name": "webvtt", "tags": {"language": "ger"}}]}
    streams = parse_subtitle_streams(meta)
    assert len(streams) == 1
    assert streams[0].codec == "webvtt"


def test_missing_codec_name_is_unknown_and_unsupported():
    meta = {"streams": [{"codec_type": "subtitle"}]}
    classified = classify(meta)
    assert classified[0].codec == "unknown"
    assert classified[0].supported is False


def test_fallback_to_indexed_fields_when_stream_list_is_garbage():
    meta = {
        "streams": "{not json",
        "subtitle_0_codec": "subrip",
        "subtitle_0_language": "eng",
        "subtitle_2_codec": "dvd_subtitle",
        "subtitle_2_title": "Commentary",
    }
    streams = parse_subtitle_streams(meta)

    # Field indices are already subtitle-relative and are kept
    assert [(s.index, s.codec) for s in streams] == [(0, "subrip"), (2, "dvd_subtitle")]
    assert streams[1].title == "Commentary"


def test_fallback_when_stream_list_has_no_subtitles():
    meta = {
        "streams": ffprobe_streams({"codec_type": "video", "codec_name": "h264"}),
        "subtitle_0_codec": "mov_text",
    }
    assert [s.codec for s in parse_subtitle_streams(meta)] == ["mov_text"]


def test_fallback_respects_configurable_bound():
    meta = {f"subtitle_{i}_codec": "subrip" for i in range(30)}

    assert len(parse_subtitle_streams(meta)) == 20
    assert len(parse_subtitle_streams(meta, max_indexed_streams=25)) == 25
    assert len(classify(meta, max_indexed_streams=5)) == 5


@pytest.mark.parametrize("meta", [
    None, {}, {"streams": None}, {"streams": "42"}, {"streams": [1, "x", None]},
    "garbage", ["x"], 42
])
def test_absent_or_malformed_input_yields_nothing(meta):
    assert classify(meta) == []


@pytest.mark.parametrize("codec", ["subrip", "srt", "ass", "ssa", "webvtt", "mov_text", "text", "SubRip"])
def test_text_codecs_are_supported(codec):
    assert is_text_based(codec)


@pytest.mark.parametrize("codec", ["hdmv_pgs_subtitle", "pgssub", "dvd_subtitle", "dvdsub", "dvb_subtitle", "dvbsub", "xsub"])
def test_image_codecs_are_not(codec):
    assert is_image_based(codec)
    assert not is_text_based(codec)


def test_unknown_codec_fails_safe():
    classified = classify({"subtitle_0_codec": "eia_608"})
    assert classified[0].supported is False
    assert not is_image_based("eia_608")
