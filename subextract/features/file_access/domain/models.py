from dataclasses import dataclass
from datetime import datetime
from typing import Optional

@dataclass(frozen=True)
class FileStats:
    """
    Size and modification time of a source file, from whichever backend serves it.
    """
    size: int
    mtime: Optional[datetime] = None
