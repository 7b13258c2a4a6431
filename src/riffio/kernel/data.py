from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .container import RiffFile


class Data(Protocol):
    """A byte range with a known size."""

    def __len__(self) -> int:
        ...

    def view(self) -> memoryview:
        ...

    def tobytes(self) -> bytes:
        ...

    def to_owned(self) -> 'DataOwned':
        ...


@dataclass(frozen=True)
class DataRef(object):
    """Zero-copy reference into the buffer of an open `RiffFile`.

    Only valid while the file is open; any access after closing it
    raises `ContainerClosedError`.
    """

    source: 'RiffFile' = field(repr=False, compare=False)
    offset: int
    size: int

    def __len__(self) -> int:
        return self.size

    @property
    def stop(self) -> int:
        return self.offset + self.size

    def view(self) -> memoryview:
        return self.source.read_bytes(self.offset, self.stop)

    def tobytes(self) -> bytes:
        return bytes(self.source.read_bytes(self.offset, self.stop))

    def to_owned(self) -> 'DataOwned':
        return DataOwned(bytearray(self.source.read_bytes(self.offset, self.stop)))


@dataclass
class DataOwned(object):
    """Independent copy of chunk data, safe to keep and modify."""

    buffer: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        if not isinstance(self.buffer, bytearray):
            self.buffer = bytearray(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)

    def view(self) -> memoryview:
        return memoryview(self.buffer)

    def tobytes(self) -> bytes:
        return bytes(self.buffer)

    def to_owned(self) -> 'DataOwned':
        return DataOwned(bytearray(self.buffer))

