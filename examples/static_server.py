import asyncio
import logging
import mimetypes
import os
import sys
from pathlib import Path

from aiohttp import web

from aiogzip import create_gzip_middleware

log = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

build_dir = Path(sys.argv[1] if len(sys.argv) > 1 else "build/web").resolve()


async def read_file(path: Path):
    loop = asyncio.get_running_loop()
    with path.open("rb") as file:
        while chunk := await loop.run_in_executor(None, file.read, CHUNK_SIZE):
            yield chunk


async def serve_file(request: web.Request) -> web.Response:
    path = (build_dir / request.match_info["path"]).resolve()
    if path.is_dir():
        path = path / "index.html"
    if not path.is_relative_to(build_dir) or not path.is_file():
        raise web.HTTPNotFound()

    content_type, _ = mimetypes.guess_type(path.name)
    log.info("Serving %s", path)
    # The async body has no declared length, the file is streamed into the
    # gzip middleware which buffers it before compressing.
    return web.Response(
        body=read_file(path),
        content_type=content_type or "application/octet-stream",
    )


application = web.Application(
    middlewares=[create_gzip_middleware(add_server_timing=True)]
)
application.router.add_get("/{path:.*}", serve_file)

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

port = int(os.environ.get("PORT", "9999"))
log.info("Serving %s on port %d", build_dir, port)
web.run_app(application, host="0.0.0.0", port=port)
