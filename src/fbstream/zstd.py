import typing as t
from zstandard import ZstdDecompressor
from .buffering_stream import BufferingStream, Source
from .segment_pool import SegmentPool

__all__ = [
    'zstd_stream',
]


def zstd_stream(source: Source, length: int, segment_size: t.Optional[int] = None,
                pool: t.Optional[SegmentPool] = None, closefd: bool = True,
                dctx: t.Optional[ZstdDecompressor] = None) -> BufferingStream:
    """
    Буферизующий поток распакованного содержимого zstd.

    :param source: Поток сжатого содержимого.
    :param length: Размер распакованного содержимого, байт.
    :param segment_size: Размер сегмента хранилища, байт.
    :param pool: Пул сегментов хранилища.
    :param closefd: Закрыть поток распаковки при закрытии потока. Source при этом не закрывается.
    :param dctx: Контекст распаковки.
    """

    if dctx is None:
        dctx = ZstdDecompressor()
    reader = dctx.stream_reader(source, closefd=False)
    return BufferingStream(reader, length, segment_size, pool, closefd)
