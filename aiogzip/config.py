from typing import Callable

from aiogzip.content_type import is_already_compressed_content_type
from aiogzip.encoder import (
    DEFAULT_COMPRESSION_LEVEL,
    MAX_COMPRESSION_LEVEL,
    MIN_COMPRESSION_LEVEL,
)

ContentTypeClassifier = Callable[[str], bool]

DEFAULT_MINIMAL_GZIP_CONTENT_LENGTH = 512
DEFAULT_SERVER_TIMING_ENTRY_NAME = "gzip"


class GzipConfig:
    """Options used to configure the gzip middleware.

    The options are read-only once the config is created, so one instance
    can be shared between middlewares and concurrent requests.

    Args:
        minimal_gzip_content_length: Responses declaring a smaller content length
            are not compressed.
        already_compressed_content_type: Callable telling whether a Content-Type
            value is already compressed. Defaults to
            `is_already_compressed_content_type`.
        compression_level: Gzip compression level, 0 to 9.
        add_compression_ratio_header: Add the `X-Compression-Ratio` header.
        add_server_timing: Add a `server-timing` entry with the compression time.
        server_timing_entry_name: Name of the `server-timing` entry.

    Raises:
        ValueError: If any of the options has an invalid value.
    """

    def __init__(
        self,
        minimal_gzip_content_length: int = DEFAULT_MINIMAL_GZIP_CONTENT_LENGTH,
        already_compressed_content_type: ContentTypeClassifier | None = None,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
        add_compression_ratio_header: bool = True,
        add_server_timing: bool = False,
        server_timing_entry_name: str = DEFAULT_SERVER_TIMING_ENTRY_NAME,
    ):
        if minimal_gzip_content_length < 0:
            raise ValueError("The minimal gzip content length can't be negative")
        if not MIN_COMPRESSION_LEVEL <= compression_level <= MAX_COMPRESSION_LEVEL:
            raise ValueError(
                f"Compression level must be between {MIN_COMPRESSION_LEVEL} "
                f"and {MAX_COMPRESSION_LEVEL}, got {compression_level}"
            )
        if already_compressed_content_type is not None and not callable(
            already_compressed_content_type
        ):
            raise ValueError("The already compressed content type check must be callable")
        if not server_timing_entry_name:
            raise ValueError("The server timing entry name can't be empty")

        self._minimal_gzip_content_length = minimal_gzip_content_length
        self._already_compressed_content_type: ContentTypeClassifier = (
            already_compressed_content_type or is_already_compressed_content_type
        )
        self._compression_level = compression_level
        self._add_compression_ratio_header = add_compression_ratio_header
        self._add_server_timing = add_server_timing
        self._server_timing_entry_name = server_timing_entry_name

    @property
    def minimal_gzip_content_length(self) -> int:
        return self._minimal_gzip_content_length

    @property
    def already_compressed_content_type(self) -> ContentTypeClassifier:
        return self._already_compressed_content_type

    @property
    def compression_level(self) -> int:
        return self._compression_level

    @property
    def add_compression_ratio_header(self) -> bool:
        return self._add_compression_ratio_header

    @property
    def add_server_timing(self) -> bool:
        return self._add_server_timing

    @property
    def server_timing_entry_name(self) -> str:
        return self._server_timing_entry_name

    def _options(self) -> dict:
        return {name.lstrip("_"): value for name, value in vars(self).items()}

    def replace(self, **changes) -> "GzipConfig":
        """Return a copy of the configuration with some options changed.

        Raises:
            ValueError: If an unknown option is given or a value is invalid.
        """
        options = self._options()
        unknown = set(changes) - set(options)
        if unknown:
            raise ValueError(f"Unknown gzip options: {', '.join(sorted(unknown))}")
        options.update(changes)
        return GzipConfig(**options)

    def __repr__(self) -> str:
        return (
            f"GzipConfig(minimal_gzip_content_length={self.minimal_gzip_content_length}, "
            f"compression_level={self.compression_level}, "
            f"add_compression_ratio_header={self.add_compression_ratio_header}, "
            f"add_server_timing={self.add_server_timing}, "
            f"server_timing_entry_name={self.server_timing_entry_name!r})"
        )
