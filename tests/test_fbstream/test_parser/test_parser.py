import construct as ct
import pytest
from fbstream import BufferingStream, BufferingStreamParseError, parse_source, parse_stream
from helpers import ForwardOnlyReader

# Таблица в начале, индекс записей в конце:
# count | records | offsets[count]
Container = ct.Struct(
    'records' / ct.Bytes(12),
    'count' / ct.Int8ub,
    'offsets' / ct.Array(ct.this.count, ct.Int8ub),
    'values' / ct.Array(ct.this.count, ct.Pointer(lambda ctx: ctx.offsets[ctx._index], ct.Int32ub)),
)

sample = (
    bytes.fromhex('00000001 00000002 00000003')
    + bytes([3, 8, 0, 4])
)


def test_parse_backward_pointers():
    source = ForwardOnlyReader(sample, max_chunk=5)
    obj, stream = parse_source(Container, source, len(sample))
    assert list(obj.values) == [3, 1, 2]
    assert stream.consumed == stream.tell() == len(sample)
    stream.seek(0)
    assert stream.read(4) == b'\x00\x00\x00\x01'


def test_parse_from_position():
    stream = BufferingStream(ForwardOnlyReader(b'\xaa' + sample), len(sample) + 1)
    stream.read(1)
    assert list(parse_stream(ct.Array(3, ct.Int32ub), stream)) == [1, 2, 3]
    assert stream.tell() == 13


def test_forward_pointer_raises_parse_error():
    con = ct.Struct('value' / ct.Pointer(8, ct.Int8ub))
    with pytest.raises(BufferingStreamParseError) as info:
        parse_source(con, ForwardOnlyReader(bytes(16)), 16)
    assert isinstance(info.value.__cause__, ct.ConstructError)


def test_truncated_raises_parse_error():
    with pytest.raises(BufferingStreamParseError):
        parse_source(Container, ForwardOnlyReader(sample[:10]), 10)
