ALREADY_COMPRESSED_EXTENSIONS = frozenset(
    {
        # images
        "ico",
        "png",
        "jpg",
        "jpeg",
        "webp",
        # audio and video
        "avi",
        "mp3",
        "mp4",
        "mpeg",
        "ogg",
        "ogx",
        "weba",
        "webm",
        # archives
        "7z",
        "bz",
        "bz2",
        "gzip",
        "gz",
        "rar",
        "zip",
        "jar",
        "war",
        # documents and fonts
        "epub",
        "pdf",
        "woff",
        "woff2",
    }
)


def is_already_compressed_extension(extension: str) -> bool:
    """Check whether a file extension names an already compressed format.

    A leading dot is ignored, so ``pathlib.Path.suffix`` can be passed as is.

    Args:
        extension: The extension to check, e.g. ``"png"`` or ``".png"``.

    Returns:
        True if gzip would gain nothing on this format.
    """
    extension = extension.lower().strip().removeprefix(".")
    if not extension:
        return False
    return extension in ALREADY_COMPRESSED_EXTENSIONS


def is_already_compressed_content_type(content_type: str) -> bool:
    """Check whether a MIME content type is an already compressed format.

    Parameters like ``; charset=utf-8`` are ignored. The subtype is checked
    against the known extensions, and so is every part of a structured syntax
    suffix (``svg+xml`` checks ``svg`` and ``xml``).

    Args:
        content_type: The value of a Content-Type header.

    Returns:
        True if the payload should not be gzip encoded again.
    """
    content_type = content_type.lower().strip()
    if not content_type:
        return False

    content_type = content_type.partition(";")[0].strip()
    _, slash, subtype = content_type.partition("/")
    if not slash:
        subtype = content_type

    if is_already_compressed_extension(subtype):
        return True

    if "+" in subtype:
        return any(is_already_compressed_extension(part) for part in subtype.split("+"))

    return False
