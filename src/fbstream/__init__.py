from .async_buffering_stream import AsyncBufferingStream
from .buffering_stream import BufferingStream
from .common import file_apply, read_exact
from .error import BufferingStreamError, BufferingStreamParseError, InvalidSeekTarget, UnsupportedOperation
from .parser import parse_source, parse_stream
from .segment_pool import SegmentPool, default_pool
from .segment_store import SegmentStore
from .zstd import zstd_stream

__all__ = [
    'AsyncBufferingStream',
    'BufferingStream',
    'BufferingStreamError',
    'BufferingStreamParseError',
    'InvalidSeekTarget',
    'SegmentPool',
    'SegmentStore',
    'UnsupportedOperation',
    'default_pool',
    'file_apply',
    'parse_source',
    'parse_stream',
    'read_exact',
    'zstd_stream',
]
