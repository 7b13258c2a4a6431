import struct
from dataclasses import dataclass
from typing import Callable, Generic, NamedTuple, Protocol, Sequence, TypeVar, cast

from .buffer import BufferLike

T_Struct = TypeVar('T_Struct')


class Structured(Protocol[T_Struct]):
    @property
    def size(self) -> int:
        ...

    def unpack_from(self, data: BufferLike, offset: int = 0) -> T_Struct:
        ...

    def pack(self, data: T_Struct) -> bytes:
        ...


@dataclass(frozen=True)
class StructuredTuple(Structured, Generic[T_Struct]):
    _fields: Sequence[str]
    _structure: struct.Struct
    _factory: Callable[..., T_Struct]

    @property
    def size(self) -> int:
        return self._structure.size

    def unpack_from(self, data: BufferLike, offset: int = 0) -> T_Struct:
        factory = cast(Callable[..., T_Struct], self._factory)
        values = self._structure.unpack_from(data, offset)
        return factory(**dict(zip(self._fields, values)))

    def pack(self, data: T_Struct) -> bytes:
        return self._structure.pack(*[getattr(data, field) for field in self._fields])


class ChunkHeader(NamedTuple):
    etag: bytes
    size: int


class FileHeader(NamedTuple):
    magic: bytes
    size: int
    file_type: bytes


UINT32LE = struct.Struct('<I')
UINT32_MAX = 0xFFFFFFFF

CHUNK_HEADER = StructuredTuple(('etag', 'size'), struct.Struct('<4sI'), ChunkHeader)
FILE_HEADER = StructuredTuple(
    ('magic', 'size', 'file_type'), struct.Struct('<4sI4s'), FileHeader
)
