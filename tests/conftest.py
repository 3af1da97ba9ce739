import pytest

from tests.utils.handlers import make_app


@pytest.fixture
async def gzip_client(aiohttp_client):
    return await aiohttp_client(make_app())


@pytest.fixture
async def timing_client(aiohttp_client):
    return await aiohttp_client(
        make_app(
            add_compression_ratio_header=True,
            add_server_timing=True,
            server_timing_entry_name="x-gzip",
        )
    )
