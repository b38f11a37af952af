from abc import ABC, abstractmethod
from pathlib import Path
from subextract.core.common.enums import OutputFormat

class IStreamExtractor(ABC):
    """
    Contract for pulling one subtitle stream out of a container.
    Abstracts away the underlying tool (FFmpeg) and its process management.
    """

    @abstractmethod
    def extract(self,
                input_locator: str,
                output_path: Path,
                subtitle_index: int,
                output_format: OutputFormat,
                timeout_seconds: float) -> None:
        """
        Transcodes subtitle stream `subtitle_index` of the input into `output_path`.

        Args:
            input_locator: Local path or URL the tool can open.
            output_path: Destination file, overwritten if present.
            subtitle_index: Index among subtitle streams only.
            output_format: Target subtitle codec.
            timeout_seconds: Wall-clock bound; the tool is killed when exceeded.

        Raises:
            ToolInvocationError: If the tool is missing, fails, or times out.
        """
        pass
