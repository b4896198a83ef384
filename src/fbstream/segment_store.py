import logging
import typing as t
from .segment_pool import DEFAULT_SEGMENT_SIZE, SegmentPool, default_pool

__all__ = [
    'SegmentStore',
]

logger = logging.getLogger(__name__)


class SegmentStore:
    """
    Растущее хранилище байтов на сегментах из пула.
    Запись только в конец, чтение по смещению.
    Записанные байты не изменяются до освобождения хранилища.
    """

    def __init__(self, capacity: int = 0, segment_size: t.Optional[int] = None,
                 pool: t.Optional[SegmentPool] = None):
        """
        :param capacity: Ожидаемый итоговый размер, байт.
        :param segment_size: Размер сегмента, байт. По умолчанию - размер сегмента пула.
        :param pool: Пул сегментов. По умолчанию - общий пул или собственный пул для segment_size.
        :raises ValueError: Отрицательный capacity. segment_size не совпадает с размером сегмента пула.
        """

        if capacity < 0:
            raise ValueError("invalid capacity: {}".format(capacity))
        if pool is None:
            if segment_size is None or segment_size == DEFAULT_SEGMENT_SIZE:
                pool = default_pool()
            else:
                pool = SegmentPool(segment_size)
        elif segment_size is not None and segment_size != pool.segment_size:
            raise ValueError('segment size {} != pool segment size {}'.format(segment_size, pool.segment_size))

        self.capacity = capacity
        self.pool = pool
        self.segment_size = pool.segment_size
        self.size = 0
        self._segments: t.Optional[t.List[bytearray]] = []

    @property
    def released(self) -> bool:
        return self._segments is None

    @property
    def segment_count(self) -> int:
        return len(self._check())

    def _check(self) -> t.List[bytearray]:
        if self._segments is None:
            raise ValueError('I/O operation on released store.')
        return self._segments

    def append(self, data) -> int:
        segments = self._check()
        view = memoryview(data).cast('B')
        n = len(view)
        done = 0
        while done < n:
            index, start = divmod(self.size, self.segment_size)
            if index == len(segments):
                segments.append(self.pool.acquire())
                logger.debug('Store grows to %d segments.', len(segments))
            size = min(n - done, self.segment_size - start)
            segments[index][start:start + size] = view[done:done + size]
            done += size
            self.size += size

        return n

    def readinto(self, offset: int, b) -> int:
        segments = self._check()
        if offset < 0:
            raise ValueError('negative offset {}'.format(offset))

        view = memoryview(b).cast('B')
        n = min(len(view), self.size - offset)
        done = 0
        while done < n:
            index, start = divmod(offset + done, self.segment_size)
            size = min(n - done, self.segment_size - start)
            view[done:done + size] = segments[index][start:start + size]
            done += size

        return max(done, 0)

    def read(self, offset: int, size: int) -> bytes:
        buf = bytearray(max(0, min(size, self.size - offset)))
        n = self.readinto(offset, buf)
        return bytes(buf[:n])

    def release(self) -> None:
        if self._segments is None:
            return
        for segment in self._segments:
            self.pool.release(segment)
        logger.debug('Store released %d segments.', len(self._segments))
        self._segments = None
        self.size = 0
