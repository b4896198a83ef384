import io
import typing as t


class ForwardOnlyReader:
    """Источник только для последовательного чтения. Считает обращения к read."""

    def __init__(self, data: bytes, max_chunk: t.Optional[int] = None):
        self._stream = io.BytesIO(data)
        self.max_chunk = max_chunk
        self.calls = 0
        self.requested: t.List[int] = []
        self.closed = False

    def read(self, size: int) -> bytes:
        self.calls += 1
        self.requested.append(size)
        if self.max_chunk is not None:
            size = min(size, self.max_chunk)
        return self._stream.read(size)

    def close(self):
        self.closed = True


class FailingReader(ForwardOnlyReader):
    """Источник, отказывающий после fail_after байтов."""

    def __init__(self, data: bytes, fail_after: int):
        super().__init__(data)
        self.fail_after = fail_after

    def read(self, size: int) -> bytes:
        if self._stream.tell() >= self.fail_after:
            self.calls += 1
            raise ConnectionError('source failed')
        return super().read(min(size, self.fail_after - self._stream.tell()))


class AsyncForwardOnlyReader:
    def __init__(self, data: bytes, max_chunk: t.Optional[int] = None):
        self._reader = ForwardOnlyReader(data, max_chunk)
        self.closed = False

    @property
    def calls(self) -> int:
        return self._reader.calls

    async def read(self, size: int) -> bytes:
        return self._reader.read(size)

    async def close(self):
        self.closed = True


def make_data(size: int) -> bytes:
    return bytes(i % 256 for i in range(size))


