from io import SEEK_SET
import typing as t
import construct as ct
from .buffering_stream import BufferingStream, Source
from .error import BufferingStreamParseError

__all__ = [
    'parse_source',
    'parse_stream',
]


class FullReader:
    """
    Обертка над BufferingStream для construct.
    Чтение продолжается через границу прочитанного, пока не получено size байтов или не достигнут конец.
    """

    def __init__(self, wrapped: BufferingStream):
        self.wrapped = wrapped

    def seek(self, target: int, whence: int = SEEK_SET) -> int:
        return self.wrapped.seek(target, whence)

    def tell(self) -> int:
        return self.wrapped.tell()

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            return self.wrapped.readall()

        chunks = []
        left = size
        while left > 0:
            chunk = self.wrapped.read(left)
            if not chunk:
                break
            chunks.append(chunk)
            left -= len(chunk)

        return b''.join(chunks)


def parse_stream(con: ct.Construct, stream: BufferingStream, **ctx) -> t.Any:
    """
    Разбор структуры con из потока stream с текущей позиции.
    Переходы назад (ct.Pointer, ct.Seek) допустимы в пределах прочитанного.

    :param con: Структура construct.
    :param stream: Буферизующий поток.
    :param ctx: Контекст разбора.
    :raises BufferingStreamParseError: Ошибка при разборе.
    """

    try:
        return con.parse_stream(FullReader(stream), **ctx)
    except ct.ConstructError as e:
        raise BufferingStreamParseError('Ошибка при разборе структуры.') from e


def parse_source(con: ct.Construct, source: Source, length: int,
                 **kwargs) -> t.Tuple[t.Any, BufferingStream]:
    """
    Разбор структуры con из однонаправленного источника.

    :param con: Структура construct.
    :param source: Однонаправленный источник.
    :param length: Длина содержимого источника, байт.
    :param kwargs: Параметры BufferingStream.
    :return: Результат разбора и поток для дальнейшего чтения.
    :raises BufferingStreamParseError: Ошибка при разборе.
    """

    stream = BufferingStream(source, length, **kwargs)
    return parse_stream(con, stream), stream
