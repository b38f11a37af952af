# Layout of the midhash256 CID. Must stay bit-exact: other services compute
# CIDs in the same space and use them as dedup keys.

SAMPLE_SIZE = 1024 * 1024  # 1 MiB

CID_VERSION = b"\x01"
# Multicodec varint for "midhash256", written twice (codec + hash function)
MIDHASH_VARINT = b"\x80\x20"
DIGEST_LENGTH = b"\x20"  # 32 bytes

CID_MULTIBASE_PREFIX = "b"  # base32, lowercase, unpadded
