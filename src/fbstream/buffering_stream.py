from io import SEEK_SET
import logging
import typing as t
from .common import CHUNK_SIZE
from .error import InvalidSeekTarget, UnsupportedOperation
from .segment_pool import SegmentPool
from .segment_store import SegmentStore

__all__ = [
    'BufferingStream',
    'Source',
]

logger = logging.getLogger(__name__)


class Source(t.Protocol):
    def read(self, size: int) -> bytes:
        ...


def check_length(length: int) -> None:
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError('length: ожидался int: {}'.format(type(length)))
    if length < 0:
        raise ValueError("invalid length: {}".format(length))


def check_target(target: int) -> None:
    if isinstance(target, bool) or not isinstance(target, int):
        raise TypeError('target: ожидался int: {}'.format(type(target)))


class BufferingStream:
    """
    Поток для повторного чтения содержимого однонаправленного источника известной длины.

    Прочитанные из источника байты сохраняются в хранилище, поэтому допускается
    повторное чтение и переход назад к любой уже прочитанной позиции без повторного
    обращения к источнику. Переход вперед за границу прочитанного не поддерживается.

    Экземпляр не предназначен для одновременного использования из нескольких потоков.
    """

    def __init__(self, source: Source, length: int, segment_size: t.Optional[int] = None,
                 pool: t.Optional[SegmentPool] = None, closefd: bool = False):
        """
        :param source: Однонаправленный источник с методом read(size).
        :param length: Полная длина содержимого источника, байт. Не проверяется.
        :param segment_size: Размер сегмента хранилища, байт.
        :param pool: Пул сегментов хранилища.
        :param closefd: Закрыть источник при закрытии потока.
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
        """Объявленная длина содержимого."""

        return self._length

    @property
    def consumed(self) -> int:
        """Число байтов, прочитанных из источника."""

        return self._consumed

    @property
    def buffered(self) -> int:
        """Число байтов от текущей позиции, доступных без обращения к источнику."""

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

    def readable(self) -> bool:
        self._check_closed()
        return True

    def seekable(self) -> bool:
        self._check_closed()
        return True

    def writable(self) -> bool:
        self._check_closed()
        return False

    def tell(self) -> int:
        self._check_closed()
        return self._pos

    def seek(self, target: int, whence: int = SEEK_SET) -> int:
        """
        Смена позиции в потоке.

        :param target: Абсолютная позиция.
        :param whence: Только SEEK_SET.
        :return: Новая позиция.
        :raises UnsupportedOperation: whence отличен от SEEK_SET.
        :raises TypeError: Неверный тип target.
        :raises InvalidSeekTarget: Позиция отрицательна или еще не прочитана из источника.
        """

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

    def _pull(self, size: int) -> bytes:
        remaining = self._length - self._consumed
        if remaining == 0:
            logger.debug('End of stream at %d.', self._consumed)
            return b''

        size = min(size, remaining)
        data = self.source.read(size)
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

    def readinto(self, b) -> int:
        """
        Чтение в буфер b не более len(b) байтов.

        Байты берутся либо из хранилища, если текущая позиция внутри прочитанного,
        либо из источника, если позиция на границе прочитанного. За один вызов
        используется только один из них, поэтому результат может быть короче len(b).

        :return: Число прочитанных байтов. 0 в конце потока.
        :raises ValueError: Поток закрыт.
        """

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

        data = self._pull(count)
        n = len(data)
        view[:n] = data
        return n

    def read(self, size: t.Optional[int] = -1) -> bytes:
        """
        Чтение не более size байтов по тем же правилам, что и readinto.
        Размер результата ограничен прочитанным или остатком источника, а не size.
        """

        if size is None or size < 0:
            return self.readall()

        self._check_closed()
        if size == 0:
            return b''

        available = self._consumed - self._pos
        if available > 0:
            data = self._store.read(self._pos, min(size, available))
            self._pos += len(data)
            return data

        return bytes(self._pull(size))

    def readall(self) -> bytes:
        """Чтение до конца потока."""

        self._check_closed()
        chunks = []
        while True:
            chunk = self.read(min(max(self._length - self._pos, 1), CHUNK_SIZE))
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

    def close(self) -> None:
        if self.closed:
            return
        self._store.release()
        if self.closefd:
            self.source.close()

    def __enter__(self) -> 'BufferingStream':
        self._check_closed()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
