from pathlib import Path
from typing import Union
from ..data.midhash import MidHash256Hasher

def compute_content_identifier(file_path: Union[str, Path]) -> str:
    """
    Standalone API: CID of a local file.
    Deterministic for identical (length, sample window) pairs, independent of
    name, path and timestamps.
    """
    return MidHash256Hasher().compute_cid(str(file_path))
