import gzip

# Level 4 compresses regular text almost as well as higher levels with a lower
# CPU usage, which suits compressing live responses.
DEFAULT_COMPRESSION_LEVEL = 4

MIN_COMPRESSION_LEVEL = 0
MAX_COMPRESSION_LEVEL = 9


class GzipEncoder:
    """Encoder producing a gzip stream at a fixed compression level.

    The gzip header carries no modification time, so the same input and level
    always yield the same bytes.

    Args:
        level: Deflate compression level, 0 (none) to 9 (best).

    Raises:
        ValueError: If the level is out of range.
    """

    def __init__(self, level: int = DEFAULT_COMPRESSION_LEVEL):
        if not MIN_COMPRESSION_LEVEL <= level <= MAX_COMPRESSION_LEVEL:
            raise ValueError(
                f"Compression level must be between {MIN_COMPRESSION_LEVEL} "
                f"and {MAX_COMPRESSION_LEVEL}, got {level}"
            )
        self.level = level

    def compress(self, data: bytes | bytearray | memoryview) -> bytes:
        return gzip.compress(data, compresslevel=self.level, mtime=0)


_default_encoder = GzipEncoder(DEFAULT_COMPRESSION_LEVEL)


def get_encoder(level: int = DEFAULT_COMPRESSION_LEVEL) -> GzipEncoder:
    """Get an encoder for the level, the shared one for the default level."""
    if level == DEFAULT_COMPRESSION_LEVEL:
        return _default_encoder
    return GzipEncoder(level)


def compress(
    data: bytes | bytearray | memoryview, level: int = DEFAULT_COMPRESSION_LEVEL
) -> bytes:
    return get_encoder(level).compress(data)
