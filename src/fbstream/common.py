import typing as t
import construct as ct

__all__ = [
    'CHUNK_SIZE',
    'file_apply',
    'read_exact',
]

CHUNK_SIZE = 2 ** 20
"""Размер блока по умолчанию."""


def read_exact(stream, size: int) -> bytes:
    """
    Чтение ровно size байтов из потока, допускающего короткие чтения.

    :param stream: Входной поток.
    :param size: Число байтов.
    :raises ct.StreamError: Поток закончился раньше.
    """

    if size < 0:
        raise ValueError("invalid size: {}".format(size))

    chunks = []
    left = size
    while left > 0:
        chunk = stream.read(left)
        if not chunk:
            raise ct.StreamError('stream read less than specified amount, expected {}, found {}'.
                                 format(size, size - left))
        chunks.append(chunk)
        left -= len(chunk)

    return b''.join(chunks)


def file_apply(file, f: t.Callable[[bytes], t.Any], size: int, chunk_size: int = CHUNK_SIZE):
    """
    Вспомогательная функция для обхода файла по блокам.

    :param file: Входной файл.
    :param f: Функция, применяемая к блоку.
    :param size: Размер файла, байт.
    :param chunk_size: Размер блока, байт.
    :raises ct.StreamError: Ошибка чтения.
    """

    n, r = divmod(size, chunk_size)
    for _ in range(n):
        f(read_exact(file, chunk_size))
    if r:
        f(read_exact(file, r))
