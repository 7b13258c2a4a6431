from typing import Union

PRINTABLE = range(0x20, 0x7F)


class FourCC(bytes):
    """Four-character code tagging files, lists and chunks.

    Compares by exact byte value, so ``FourCC('LIST') == b'LIST'``.
    """

    def __new__(cls, value: Union[str, bytes, bytearray, memoryview]) -> 'FourCC':
        if isinstance(value, str):
            value = value.encode('ascii')
        if len(value) != 4:
            raise ValueError(f'FourCC must be exactly 4 bytes, got {bytes(value)!r}')
        return super().__new__(cls, value)

    @property
    def printable(self) -> bool:
        return all(c in PRINTABLE for c in self)

    def __str__(self) -> str:
        if self.printable:
            return self.decode('ascii')
        return repr(bytes(self))

    def __repr__(self) -> str:
        return f'FourCC({bytes(self)!r})'


RIFF = FourCC(b'RIFF')
LIST = FourCC(b'LIST')
