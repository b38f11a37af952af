import re
from typing import Optional

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_filename(name: str) -> str:
    """
    Strips characters invalid on common filesystems, collapses whitespace runs
    and trims the ends.
    """
    name = _INVALID_FILENAME_CHARS.sub("", name)
    name = _WHITESPACE_RUN.sub(" ", name)
    return name.strip()


def build_output_filename(title: str,
                          year: Optional[str],
                          video_cid: str,
                          suffix: str,
                          extension: str) -> str:
    """
    Title (Year)[videoCID]_subtitle.{suffix}.{extension}

    The downstream file scanner relies on this exact shape to link the
    subtitle back to its video, there is no other channel between them.
    """
    year_part = f" ({year})" if year else ""
    return f"{sanitize_filename(title)}{year_part}[{video_cid}]_subtitle.{suffix}.{extension}"
