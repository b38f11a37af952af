import subprocess
import logging
from pathlib import Path
from typing import List
from subextract.core.common.enums import OutputFormat
from subextract.core.config.settings import settings
from subextract.core.errors import ToolInvocationError
from ..domain.interfaces import IStreamExtractor

logger = logging.getLogger(__name__)

class FFmpegSubtitleAdapter(IStreamExtractor):
    """
    Concrete implementation of IStreamExtractor using FFmpeg.
    One process per stream, killed when it outlives its timeout.
    """

    def __init__(self, ffmpeg_binary: str = None):
        self.ffmpeg_binary = ffmpeg_binary or settings.FFMPEG_BINARY

    def build_command(self,
                      input_locator: str,
                      output_path: Path,
                      subtitle_index: int,
                      output_format: OutputFormat) -> List[str]:
        # -y: Overwrite output
        # -probesize/-analyzeduration 1M: subtitle headers sit at the start, skip deep probing
        #   (matters when the input is streamed over HTTP)
        # -map 0:s:N: Nth subtitle stream of the first input
        # -c:s: Transcode into the target text format
        return [
            self.ffmpeg_binary,
            "-y",
            "-hide_banner",
            "-loglevel", "error",
            "-probesize", "1M",
            "-analyzeduration", "1M",
            "-i", input_locator,
            "-map", f"0:s:{subtitle_index}",
            "-c:s", output_format.ffmpeg_codec,
            str(output_path)
        ]

    def extract(self,
                input_locator: str,
                output_path: Path,
                subtitle_index: int,
                output_format: OutputFormat,
                timeout_seconds: float) -> None:
        cmd = self.build_command(input_locator, output_path, subtitle_index, output_format)

        logger.info(f"Running ffmpeg for subtitle {subtitle_index}: {' '.join(cmd)}")

        try:
            # subprocess.run kills the child before re-raising TimeoutExpired
            subprocess.run(
                cmd,
                check=True,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=timeout_seconds
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(f"ffmpeg timed out after {timeout_seconds}s on subtitle {subtitle_index}, killed")
            raise ToolInvocationError(
                f"Subtitle {subtitle_index} extraction timed out after {timeout_seconds}s",
                timed_out=True
            ) from e
        except subprocess.CalledProcessError as e:
            error_message = (e.stderr or "Unknown FFmpeg error").strip()[:200]
            logger.warning(f"ffmpeg failed on subtitle {subtitle_index}: {error_message}")
            raise ToolInvocationError(f"Subtitle {subtitle_index} extraction failed: {error_message}") from e
        except OSError as e:
            # Binary missing or not executable
            logger.error(f"ffmpeg could not be started: {e}")
            raise ToolInvocationError(f"ffmpeg could not be started: {e}") from e
