import base64
import hashlib
import logging
from typing import Optional, Tuple

from subextract.features.file_access.domain.interfaces import IFileAccess
from subextract.features.file_access.data.local_fs import LocalFileAccess
from ..domain.interfaces import IContentHasher
from ..domain.models import (
    SAMPLE_SIZE, CID_VERSION, MIDHASH_VARINT, DIGEST_LENGTH, CID_MULTIBASE_PREFIX
)

logger = logging.getLogger(__name__)


def sample_window(file_size: int) -> Tuple[int, int]:
    """
    Returns the (offset, length) of the bytes that feed the digest.
    Small files are hashed whole; larger ones contribute a centered 1 MiB window.
    """
    if file_size <= SAMPLE_SIZE:
        return 0, file_size
    return (file_size - SAMPLE_SIZE) // 2, SAMPLE_SIZE


def encode_cid(file_size: int, sample: bytes) -> str:
    """
    Builds the CID string from the file length and its sample bytes.

    Digest input is the 8-byte big-endian length followed by the sample, so two
    files sharing a window but differing in length never collide.
    """
    digest = hashlib.sha256(file_size.to_bytes(8, "big") + sample).digest()

    cid_bytes = CID_VERSION + MIDHASH_VARINT + MIDHASH_VARINT + DIGEST_LENGTH + digest

    # RFC4648 base32 packs MSB-first and zero-fills the trailing symbol,
    # dropping the '=' padding gives the multibase 'b' encoding.
    encoded = base64.b32encode(cid_bytes).decode("ascii").lower().rstrip("=")
    return CID_MULTIBASE_PREFIX + encoded


class MidHash256Hasher(IContentHasher):
    """
    Sampling hasher: reads at most one 1 MiB window per file, so CIDs for
    multi-gigabyte videos cost the same as for a subtitle file.
    """

    def __init__(self, file_access: Optional[IFileAccess] = None):
        self.file_access = file_access or LocalFileAccess()

    def compute_cid(self, file_path: str) -> str:
        # 1. Determine the length
        file_size = self.file_access.stat(str(file_path)).size

        # 2. Read the sample window
        offset, length = sample_window(file_size)
        sample = self.file_access.read_range(str(file_path), offset, offset + length - 1) if length else b""

        if len(sample) != length:
            raise IOError(
                f"Short read on {file_path}: expected {length} bytes at offset {offset}, got {len(sample)}"
            )

        # 3. Digest and encode
        cid = encode_cid(file_size, sample)
        logger.debug(f"CID {cid} for {file_path} ({file_size} bytes)")
        return cid
