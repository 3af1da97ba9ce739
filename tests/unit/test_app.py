import gzip
import re

import pytest

from tests.utils.handlers import LONG_PATH, PNG_TRANSPARENT_PIXEL, make_app

pytestmark = [
    pytest.mark.app,
    pytest.mark.unit,
]


async def test_no_gzip_small_body(gzip_client):
    resp = await gzip_client.get("/foo", skip_auto_headers=["Accept-Encoding"])
    assert resp.status == 200
    assert "Content-Encoding" not in resp.headers
    assert await resp.text() == "Requested: /foo"


async def test_gzip_accepted_small_body(gzip_client):
    resp = await gzip_client.get("/foo", headers={"Accept-Encoding": "gzip"})
    assert "Content-Encoding" not in resp.headers
    assert "X-Compression-Ratio" not in resp.headers
    assert await resp.text() == "Requested: /foo"


async def test_no_gzip_long_body(gzip_client):
    resp = await gzip_client.get(LONG_PATH, skip_auto_headers=["Accept-Encoding"])
    assert "Content-Encoding" not in resp.headers
    assert await resp.text() == f"Requested: {LONG_PATH}"


async def test_gzip_long_body(gzip_client):
    resp = await gzip_client.get(LONG_PATH, headers={"Accept-Encoding": "gzip"})
    assert resp.status == 200
    assert resp.headers["Content-Encoding"] == "gzip"
    assert await resp.text() == f"Requested: {LONG_PATH}"

    match = re.fullmatch(
        r"\d+(\.\d+)? \((\d+)/(\d+)\)", resp.headers["X-Compression-Ratio"]
    )
    assert match is not None
    assert match.group(2) == resp.headers["Content-Length"]
    assert int(match.group(3)) == len(f"Requested: {LONG_PATH}")


async def test_gzip_raw_body(aiohttp_client):
    client = await aiohttp_client(make_app(), auto_decompress=False)
    resp = await client.get(LONG_PATH, headers={"Accept-Encoding": "gzip, deflate"})
    raw = await resp.read()

    assert resp.headers["Content-Encoding"] == "gzip"
    assert int(resp.headers["Content-Length"]) == len(raw)
    assert gzip.decompress(raw).decode() == f"Requested: {LONG_PATH}"


async def test_png_not_compressed(gzip_client):
    resp = await gzip_client.get(
        "/transparent-pixel", headers={"Accept-Encoding": "gzip"}
    )
    assert resp.headers["Content-Type"] == "image/png"
    assert "Content-Encoding" not in resp.headers
    assert await resp.read() == PNG_TRANSPARENT_PIXEL


async def test_server_timing_small_body(timing_client):
    resp = await timing_client.get("/foo", headers={"Accept-Encoding": "gzip"})
    assert "X-Compression-Ratio" not in resp.headers
    assert "server-timing" not in resp.headers
    assert await resp.text() == "Requested: /foo"


async def test_server_timing_long_body(timing_client):
    resp = await timing_client.get(LONG_PATH, headers={"Accept-Encoding": "gzip"})
    assert resp.headers["X-Compression-Ratio"]
    assert re.fullmatch(r"x-gzip;dur=\d+\.\d+", resp.headers["server-timing"])
    assert await resp.text() == f"Requested: {LONG_PATH}"


async def test_server_timing_appended(timing_client):
    resp = await timing_client.get("/timed", headers={"Accept-Encoding": "gzip"})
    assert re.fullmatch(
        r"foo;dur=1,x-gzip;dur=\d+\.\d+", resp.headers["server-timing"]
    )
