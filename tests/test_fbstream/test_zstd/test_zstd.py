import io
import pytest
from zstandard import ZstdCompressor
from fbstream import zstd_stream
from helpers import make_data


@pytest.fixture()
def content() -> bytes:
    return make_data(5000)


@pytest.fixture()
def compressed(content: bytes) -> io.BytesIO:
    return io.BytesIO(ZstdCompressor().compress(content))


def test_read_rewind(compressed: io.BytesIO, content: bytes):
    stream = zstd_stream(compressed, len(content))
    assert stream.read() == content
    stream.seek(1000)
    assert stream.read(10) == content[1000:1010]
    assert stream.read(0) == b''


def test_close_keeps_source(compressed: io.BytesIO, content: bytes):
    with zstd_stream(compressed, len(content)) as stream:
        stream.read(100)
    assert stream.closed
    assert not compressed.closed
