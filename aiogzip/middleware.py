import functools
import logging
import time
from typing import Awaitable, Callable

from aiohttp import hdrs, web
from aiohttp.payload import Payload
from multidict import CIMultiDict

from aiogzip.buffer import DEFAULT_BUFFER_CAPACITY, BytesBuffer
from aiogzip.config import GzipConfig
from aiogzip.encoder import get_encoder
from aiogzip.predicate import accepts_gzip_encoding, can_gzip_encode_response

log = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

COMPRESSION_RATIO_HEADER = "X-Compression-Ratio"
SERVER_TIMING_HEADER = "server-timing"


class GzipMiddleware:
    """Middleware encoding responses with `gzip`.

    Responses are only encoded when the request accepts `gzip` and the
    response passes `can_gzip_encode_response`. The body is read completely
    before it is compressed.

    The middleware can be registered on an aiohttp application, or wrap a
    single handler with `wrap`:

        app = web.Application(middlewares=[GzipMiddleware()])
        app.router.add_get("/", GzipMiddleware().wrap(handler))

    Args:
        config: The gzip options, defaults are used if not provided.
    """

    # Marks the instances as new style middlewares for aiohttp.
    __middleware_version__ = 1

    def __init__(self, config: GzipConfig | None = None):
        self.config: GzipConfig = config or GzipConfig()

    async def __call__(
        self, request: web.Request, handler: Handler
    ) -> web.StreamResponse:
        """Handle the request with the inner handler and encode its response.

        Args:
            request: The incoming request.
            handler: The inner handler producing the response.

        Returns:
            The encoded response, or the handler response untouched.
        """
        if not accepts_gzip_encoding(request):
            return await handler(request)

        response = await handler(request)
        return await gzip_encode_response(response, self.config)

    def wrap(self, handler: Handler) -> Handler:
        """Wrap a handler so its responses are gzip encoded."""

        @functools.wraps(handler)
        async def gzip_handler(request: web.Request) -> web.StreamResponse:
            return await self(request, handler)

        return gzip_handler


def create_gzip_middleware(
    config: GzipConfig | None = None, **options
) -> GzipMiddleware:
    """Create a gzip middleware from a config or from keyword options.

    Args:
        config: The gzip options.
        **options: Keyword arguments for `GzipConfig`, used when no config is given.

    Raises:
        ValueError: If both a config and options are given, or an option is invalid.
    """
    if config is not None and options:
        raise ValueError("Pass either a GzipConfig or keyword options, not both")
    return GzipMiddleware(config or GzipConfig(**options))


def use_gzip_compression(
    app: web.Application, middleware: GzipMiddleware | None = None
) -> GzipMiddleware:
    """Register a gzip middleware on the application.

    Args:
        app: The application, before it is started.
        middleware: The middleware to register, a default one if not provided.

    Returns:
        The registered middleware.
    """
    middleware = middleware or GzipMiddleware()
    app.middlewares.append(middleware)
    return middleware


async def read_body(response: web.Response, buffer: BytesBuffer) -> BytesBuffer:
    """Read the whole response body into the buffer.

    A payload body can only be read once and is closed afterwards, even
    when reading fails, so after this call the response must not be sent.
    """
    body = response.body
    if isinstance(body, Payload):
        try:
            await body.write(buffer)  # type: ignore[arg-type]
        finally:
            await body.close()
    elif body is not None:
        buffer.append(body)
    return buffer


def format_compression_ratio(compressed_length: int, body_length: int) -> str:
    ratio = compressed_length / body_length
    text = repr(ratio)
    if len(text) > 6:
        text = f"{ratio:.4f}"
    return f"{text} ({compressed_length}/{body_length})"


def _add_server_timing(headers: CIMultiDict, entry: str):
    current = headers.get(SERVER_TIMING_HEADER)
    if current:
        headers[SERVER_TIMING_HEADER] = f"{current},{entry}"
    else:
        headers[SERVER_TIMING_HEADER] = entry


async def gzip_encode_response(
    response: web.StreamResponse, config: GzipConfig | None = None
) -> web.StreamResponse:
    """Encode a response with `gzip`, if `can_gzip_encode_response` allows it.

    The original response is not modified: a new response is built with the
    compressed body and copies of the original headers and cookies, plus:
        - `Content-Encoding: gzip` and the compressed `Content-Length`.
        - `X-Compression-Ratio: <ratio> (<compressed>/<original>)`, if enabled.
        - A `server-timing` entry with the compression time, if enabled.

    Args:
        response: The response to encode.
        config: The gzip options, defaults are used if not provided.

    Returns:
        A new encoded response, or the same response if it can't be encoded.
    """
    config = config or GzipConfig()
    if not can_gzip_encode_response(
        response,
        minimal_length=config.minimal_gzip_content_length,
        classifier=config.already_compressed_content_type,
    ):
        return response

    start = time.perf_counter()

    content_length = response.content_length
    buffer = BytesBuffer(
        DEFAULT_BUFFER_CAPACITY if content_length is None else content_length
    )
    await read_body(response, buffer)

    body_length = len(buffer)
    compressed_body = get_encoder(config.compression_level).compress(buffer.finalize())
    compressed_length = len(compressed_body)

    headers = CIMultiDict(response.headers)
    headers[hdrs.CONTENT_ENCODING] = "gzip"
    headers[hdrs.CONTENT_LENGTH] = str(compressed_length)

    # The ratio is undefined for an empty body
    if config.add_compression_ratio_header and body_length:
        headers[COMPRESSION_RATIO_HEADER] = format_compression_ratio(
            compressed_length, body_length
        )

    if config.add_server_timing:
        elapsed_ms = (time.perf_counter() - start) * 1000
        _add_server_timing(
            headers, f"{config.server_timing_entry_name};dur={elapsed_ms:.3f}"
        )

    log.debug(
        "Gzip encoded response body from %d to %d bytes",
        body_length,
        compressed_length,
    )

    encoded = web.Response(
        status=response.status,
        reason=response.reason,
        headers=headers,
        body=compressed_body,
    )
    if response.cookies:
        encoded.cookies.update(response.cookies)
    return encoded


gzip_middleware = GzipMiddleware()
