from io import SEEK_SET
import logging
import typing as t
from .buffering_stream import check_length, check_target
from .common import CHUNK_SIZE
from .error import InvalidSeekTarget, UnsupportedOperation
from .segment_pool import SegmentPool
from .segment_store import SegmentStore

__all__ = [
    'AsyncBufferingStream',
    'AsyncSource',
]

logger = logging.getLogger(__name__)


class AsyncSource(t.Protocol):
    async def read(self, size: int) -> bytes:
        ...


class AsyncBufferingStream:
    """
    Асинхронный вариант BufferingStream для источника с awaitable read(size).

    Позиция и число прочитанных байтов меняются только после успешного завершения
    чтения из источника. Отмена задачи во время ожидания источника не оставляет
    частично обновленного состояния.
    """

    def __init__(self, source: AsyncSource, length: int, segment_size: t.Optional[int] = None,
                 pool: t.Optional[SegmentPool] = None, closefd: bool = False):
        """
        :param source: Однонаправленный источник с методом async read(size).
        :param length: Полная длина содержимого источника, байт.
        :param segment_size: Размер сегмента хранилища, байт.
        :param pool: Пул сегментов хранилища.
        :param closefd: Закрыть источник при закрытии потока. Source.close может быть корутиной.
        :raises TypeError: Неверный тип length.
        :raises ValueError: Отрицательный length.
        """

        check_length(length)
        self.source = source
        self.closefd = closefd
        self._length = length
        self._consumed = 0
        self._pos = 0
        self._store = SegmentStore(length, segment_size, pool)

    @property
    def closed(self) -> bool:
        return self._store.released

    @property
    def length(self) -> int:
        return self._length

    @property
    def consumed(self) -> int:
        return self._consumed

    @property
    def buffered(self) -> int:
        return self._consumed - self._pos

    @property
    def pos(self) -> int:
        return self._pos

    @pos.setter
    def pos(self, value: int) -> None:
        self.seek(value)

    def __len__(self) -> int:
        return self._length

    def _check_closed(self) -> None:
        if self.closed:
            raise ValueError('I/O operation on closed stream.')

    def tell(self) -> int:
        self._check_closed()
        return self._pos

    def seek(self, target: int, whence: int = SEEK_SET) -> int:
        self._check_closed()
        if whence != SEEK_SET:
            raise UnsupportedOperation('Only SEEK_SET is supported: {}'.format(whence))
        check_target(target)
        if target < 0:
            raise InvalidSeekTarget('negative seek value {}'.format(target))
        if target > self._consumed:
            raise InvalidSeekTarget('Can only seek to positions that were already read: {} > {}'.
                                    format(target, self._consumed))

        self._pos = target
        return self._pos

    async def _pull(self, size: int) -> bytes:
        remaining = self._length - self._consumed
        if remaining == 0:
            return b''

        size = min(size, remaining)
        data = await self.source.read(size)
        # закрыт во время ожидания источника
        self._check_closed()
        if not data:
            return b''
        if len(data) > size:
            data = data[:size]
        n = len(data)
        self._store.append(data)
        self._consumed += n
        self._pos = self._consumed
        logger.debug('Pulled %d/%d bytes from source, consumed %d/%d.', n, size, self._consumed, self._length)
        return data

    async def readinto(self, b) -> int:
        self._check_closed()
        view = memoryview(b).cast('B')
        count = len(view)
        if count == 0:
            return 0

        available = self._consumed - self._pos
        if available > 0:
            n = self._store.readinto(self._pos, view[:min(count, available)])
            self._pos += n
            return n

        data = await self._pull(count)
        n = len(data)
        view[:n] = data
        return n

    async def read(self, size: t.Optional[int] = -1) -> bytes:
        if size is None or size < 0:
            return await self.readall()

        self._check_closed()
        if size == 0:
            return b''

        available = self._consumed - self._pos
        if available > 0:
            data = self._store.read(self._pos, min(size, available))
            self._pos += len(data)
            return data

        return bytes(await self._pull(size))

    async def readall(self) -> bytes:
        self._check_closed()
        chunks = []
        while True:
            chunk = await self.read(min(max(self._length - self._pos, 1), CHUNK_SIZE))
            if not chunk:
                break
            chunks.append(chunk)

        return b''.join(chunks)

    def write(self, b) -> int:
        raise UnsupportedOperation('write')

    def flush(self) -> None:
        raise UnsupportedOperation('flush')

    def truncate(self, size: t.Optional[int] = None) -> int:
        raise UnsupportedOperation('truncate')

    async def close(self) -> None:
        if self.closed:
            return
        self._store.release()
        if self.closefd:
            result = self.source.close()
            if hasattr(result, '__await__'):
                await result

    async def __aenter__(self) -> 'AsyncBufferingStream':
        self._check_closed()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
