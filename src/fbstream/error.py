import io

__all__ = [
    'BufferingStreamError',
    'BufferingStreamParseError',
    'InvalidSeekTarget',
    'UnsupportedOperation',
]


class BufferingStreamError(Exception):
    pass


class UnsupportedOperation(BufferingStreamError, io.UnsupportedOperation):
    pass


class InvalidSeekTarget(BufferingStreamError, ValueError):
    pass


class BufferingStreamParseError(BufferingStreamError):
    pass
