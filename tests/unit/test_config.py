import pytest

from aiogzip.config import GzipConfig
from aiogzip.content_type import is_already_compressed_content_type

pytestmark = [
    pytest.mark.config,
    pytest.mark.unit,
]


def test_config_defaults():
    config = GzipConfig()
    assert config.minimal_gzip_content_length == 512
    assert config.already_compressed_content_type is is_already_compressed_content_type
    assert config.compression_level == 4
    assert config.add_compression_ratio_header is True
    assert config.add_server_timing is False
    assert config.server_timing_entry_name == "gzip"


def test_config_custom_classifier():
    def never(content_type):
        return False

    config = GzipConfig(already_compressed_content_type=never)
    assert config.already_compressed_content_type is never


@pytest.mark.parametrize(
    "options",
    [
        {"minimal_gzip_content_length": -1},
        {"compression_level": 10},
        {"compression_level": -1},
        {"already_compressed_content_type": "image/png"},
        {"server_timing_entry_name": ""},
    ],
)
def test_config_invalid(options):
    with pytest.raises(ValueError):
        GzipConfig(**options)


def test_config_replace():
    config = GzipConfig(add_server_timing=True)
    changed = config.replace(compression_level=9)
    assert changed is not config
    assert changed.compression_level == 9
    assert changed.add_server_timing is True
    assert config.compression_level == 4


def test_config_replace_unknown_option():
    with pytest.raises(ValueError):
        GzipConfig().replace(level=9)


@pytest.mark.parametrize(
    "option",
    [
        "minimal_gzip_content_length",
        "already_compressed_content_type",
        "compression_level",
        "add_compression_ratio_header",
        "add_server_timing",
        "server_timing_entry_name",
    ],
)
def test_config_is_read_only(option):
    config = GzipConfig()
    with pytest.raises(AttributeError):
        setattr(config, option, None)


def test_config_replace_keeps_classifier():
    def never(content_type):
        return False

    config = GzipConfig(already_compressed_content_type=never).replace(
        add_server_timing=True
    )
    assert config.already_compressed_content_type is never
    assert config.add_server_timing is True
