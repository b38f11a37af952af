# Codec names as reported by ffprobe's codec_name, plus the aliases other
# demuxers and older ffmpeg builds use.

# Text-based codecs ffmpeg can transcode into srt/webvtt/ass
TEXT_SUBTITLE_CODECS = frozenset({
    "subrip",
    "srt",
    "ass",
    "ssa",
    "webvtt",
    "mov_text",
    "text",
})

# Image-based codecs: bitmaps per cue, would need OCR
IMAGE_SUBTITLE_CODECS = frozenset({
    "hdmv_pgs_subtitle",
    "pgssub",
    "dvd_subtitle",
    "dvdsub",
    "dvb_subtitle",
    "dvbsub",
    "xsub",
})


def normalize_codec(codec: str) -> str:
    return (codec or "").strip().lower()


def is_text_based(codec: str) -> bool:
    return normalize_codec(codec) in TEXT_SUBTITLE_CODECS


def is_image_based(codec: str) -> bool:
    return normalize_codec(codec) in IMAGE_SUBTITLE_CODECS
