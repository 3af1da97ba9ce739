from .buffer import BytesBuffer
from .config import GzipConfig
from .content_type import (
    is_already_compressed_content_type,
    is_already_compressed_extension,
)
from .encoder import DEFAULT_COMPRESSION_LEVEL, GzipEncoder
from .middleware import (
    GzipMiddleware,
    create_gzip_middleware,
    gzip_encode_response,
    gzip_middleware,
    use_gzip_compression,
)
from .predicate import accepts_gzip_encoding, can_gzip_encode_response

__all__ = [
    "BytesBuffer",
    "GzipConfig",
    "GzipEncoder",
    "GzipMiddleware",
    "DEFAULT_COMPRESSION_LEVEL",
    "accepts_gzip_encoding",
    "can_gzip_encode_response",
    "create_gzip_middleware",
    "gzip_encode_response",
    "gzip_middleware",
    "is_already_compressed_content_type",
    "is_already_compressed_extension",
    "use_gzip_compression",
]
