import logging

from aiohttp import hdrs, web

from aiogzip.config import DEFAULT_MINIMAL_GZIP_CONTENT_LENGTH, ContentTypeClassifier
from aiogzip.content_type import is_already_compressed_content_type

log = logging.getLogger(__name__)


def accepts_gzip_encoding(request: web.BaseRequest) -> bool:
    """Check whether the client accepts a `gzip` encoded response.

    Only looks for `gzip` in the Accept-Encoding header, quality values are
    not parsed.
    """
    accept_encoding = request.headers.get(hdrs.ACCEPT_ENCODING)
    if accept_encoding is None:
        return False
    return "gzip" in accept_encoding


def can_gzip_encode_response(
    response: web.StreamResponse,
    minimal_length: int = DEFAULT_MINIMAL_GZIP_CONTENT_LENGTH,
    classifier: ContentTypeClassifier = is_already_compressed_content_type,
) -> bool:
    """Check whether a response can be gzip encoded.

    Checks:
        - The body must be held by the response. Stream, file and websocket
          responses write their own body and are left alone, as is a response
          already prepared.
        - `Content-Encoding`: an existing encoding is never replaced.
        - `Content-Length`: a declared length below `minimal_length` is too
          small to benefit. An unknown length does not prevent compression.
        - `Content-Type`: already compressed types are skipped.

    Args:
        response: The response returned by the handler.
        minimal_length: Smallest declared content length worth compressing.
        classifier: Callable telling whether a Content-Type is already compressed.

    Returns:
        True if the response body should be gzip encoded.
    """
    if not isinstance(response, web.Response) or response.prepared:
        log.debug("Response %r is not bufferable, skipping gzip", response)
        return False

    content_encoding = response.headers.get(hdrs.CONTENT_ENCODING)
    if content_encoding:
        log.debug("Response already encoded with %s, skipping gzip", content_encoding)
        return False

    content_length = response.content_length
    if content_length is not None and content_length < minimal_length:
        log.debug("Response body of %d bytes is too small to gzip", content_length)
        return False

    content_type = response.headers.get(hdrs.CONTENT_TYPE)
    if content_type is not None and classifier(content_type):
        log.debug("Content type %s is already compressed, skipping gzip", content_type)
        return False

    return True
