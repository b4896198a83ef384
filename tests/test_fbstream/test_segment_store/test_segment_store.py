import pytest
from pytest import param as _
from fbstream import SegmentPool, SegmentStore
from helpers import make_data


@pytest.fixture()
def store(pool: SegmentPool) -> SegmentStore:
    store = SegmentStore(100, pool=pool)
    store.append(make_data(40))
    return store


def test_append_spans_segments(store: SegmentStore):
    assert store.size == 40
    assert store.segment_count == 3
    assert store.append(b'\xff' * 8) == 8
    assert store.size == 48
    assert store.segment_count == 3
    store.append(b'\xfe')
    assert store.segment_count == 4


@pytest.mark.parametrize(['offset', 'size', 'expected'], [
    _(0, 40, make_data(40), id='all'),
    _(14, 4, make_data(18)[14:], id='segment-boundary'),
    _(10, 100, make_data(40)[10:], id='large-size'),
    _(40, 1, b'', id='end'),
    _(50, 1, b'', id='out-of-range'),
    _(3, 0, b'', id='empty'),
])
def test_read(store: SegmentStore, offset, size, expected):
    assert store.read(offset, size) == expected


def test_readinto_memoryview(store: SegmentStore):
    buf = bytearray(8)
    assert store.readinto(30, memoryview(buf)[2:]) == 6
    assert buf == b'\x00\x00' + make_data(36)[30:]


def test_read_neg_offset_raises_value_error(store: SegmentStore):
    with pytest.raises(ValueError):
        store.readinto(-1, bytearray(1))


def test_release(store: SegmentStore, pool: SegmentPool):
    store.release()
    assert store.released
    assert pool.free_count == 3
    store.release()
    with pytest.raises(ValueError):
        store.append(b'x')
    with pytest.raises(ValueError):
        store.read(0, 1)


def test_segment_size_mismatch_raises_value_error(pool: SegmentPool):
    with pytest.raises(ValueError):
        SegmentStore(segment_size=32, pool=pool)


def test_own_pool_for_segment_size():
    store = SegmentStore(segment_size=8)
    store.append(b'0123456789')
    assert store.pool.segment_size == 8
    assert store.segment_count == 2
    assert store.read(6, 4) == b'6789'
