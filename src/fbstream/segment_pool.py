import logging
import typing as t

__all__ = [
    'DEFAULT_MAX_FREE',
    'DEFAULT_SEGMENT_SIZE',
    'SegmentPool',
    'default_pool',
]

logger = logging.getLogger(__name__)

DEFAULT_SEGMENT_SIZE = 2 ** 16
"""Размер сегмента по умолчанию, байт."""

DEFAULT_MAX_FREE = 64
"""Число свободных сегментов, удерживаемых пулом по умолчанию."""


class SegmentPool:
    """
    Пул сегментов фиксированного размера.
    Освобожденные сегменты переиспользуются, чтобы не выделять крупные блоки памяти заново.
    """

    def __init__(self, segment_size: int = DEFAULT_SEGMENT_SIZE, max_free: int = DEFAULT_MAX_FREE):
        """
        :param segment_size: Размер сегмента, байт.
        :param max_free: Максимальное число свободных сегментов в пуле.
        :raises ValueError: Неположительный segment_size, отрицательный max_free.
        """

        if segment_size <= 0:
            raise ValueError("invalid segment size: {}".format(segment_size))
        if max_free < 0:
            raise ValueError("invalid max free: {}".format(max_free))
        self.segment_size = segment_size
        self.max_free = max_free
        self.allocated = 0
        self._free: t.List[bytearray] = []

    @property
    def free_count(self) -> int:
        return len(self._free)

    def acquire(self) -> bytearray:
        # пул общий для нескольких потоков выполнения
        try:
            segment = self._free.pop()
        except IndexError:
            self.allocated += 1
            return bytearray(self.segment_size)

        logger.debug('Reuse segment, %d free left.', len(self._free))
        return segment

    def release(self, segment: bytearray) -> None:
        if len(segment) != self.segment_size:
            raise ValueError('segment size {} != {}'.format(len(segment), self.segment_size))
        if len(self._free) < self.max_free:
            self._free.append(segment)


_default_pool: t.Optional[SegmentPool] = None


def default_pool() -> SegmentPool:
    """Общий пул сегментов размера DEFAULT_SEGMENT_SIZE."""

    global _default_pool
    if _default_pool is None:
        _default_pool = SegmentPool()
    return _default_pool
