import pytest

from subextract.core.common.enums import OutputFormat
from subextract.core.config.settings import Settings
from subextract.features.subtitle_extraction.domain.models import ExtractionConfig


def test_defaults():
    config = ExtractionConfig()
    assert config.force_recompute is False
    assert config.output_format == OutputFormat.SRT
    assert config.timeout_seconds == 120
    assert config.min_artifact_bytes == 10
    assert config.max_indexed_streams == 20


@pytest.mark.parametrize("raw, expected", [(True, True), (False, False), ("true", False), (1, False), (None, False)])
def test_force_recompute_requires_literal_true(raw, expected):
    assert ExtractionConfig.from_dict({"forceRecompute": raw}).force_recompute is expected


@pytest.mark.parametrize("raw, fmt", [("srt", OutputFormat.SRT), ("vtt", OutputFormat.VTT), ("ASS", OutputFormat.ASS), ("", OutputFormat.SRT), (None, OutputFormat.SRT)])
def test_output_format_parsing(raw, fmt):
    assert ExtractionConfig.from_dict({"outputFormat": raw}).output_format == fmt


def test_unknown_output_format_is_rejected():
    with pytest.raises(ValueError, match="outputFormat"):
        ExtractionConfig.from_dict({"outputFormat": "sup"})


def test_output_format_maps_to_ffmpeg_codec():
    assert OutputFormat.SRT.ffmpeg_codec == "srt"
    assert OutputFormat.VTT.ffmpeg_codec == "webvtt"
    assert OutputFormat.ASS.ffmpeg_codec == "ass"
    assert OutputFormat.VTT.extension == "vtt"


def test_with_options_keeps_limits():
    base = ExtractionConfig(timeout_seconds=30, max_workers=4)
    config = base.with_options({"forceRecompute": True, "outputFormat": "vtt"})

    assert config.timeout_seconds == 30
    assert config.max_workers == 4
    assert config.force_recompute is True
    # The base is untouched
    assert base.force_recompute is False


def test_from_settings_reads_limits():
    settings = Settings()
    settings.EXTRACTION_TIMEOUT_SECONDS = 45.0
    settings.MAX_INDEXED_SUBTITLE_STREAMS = 32
    settings.EXTRACTION_WORKERS = 2

    config = ExtractionConfig.from_settings(settings)

    assert config.timeout_seconds == 45.0
    assert config.max_indexed_streams == 32
    assert config.max_workers == 2


@pytest.mark.parametrize("kwargs", [{"timeout_seconds": 0}, {"max_workers": 0}, {"max_indexed_streams": -1}])
def test_invalid_limits_are_rejected(kwargs):
    with pytest.raises(ValueError):
        ExtractionConfig(**kwargs)
