from collections import Counter
from dataclasses import dataclass, replace
from typing import Generic, Iterable, Iterator, Optional, Sequence, TypeVar, Union

from .align import align_write, padded_size
from .buffer import BufferLike, Splicer
from .data import Data, DataOwned
from .fourcc import LIST, FourCC

T_Data = TypeVar('T_Data', bound=Data)

CHUNK_HEADER_SIZE = 8
LIST_HEADER_SIZE = 12


@dataclass(frozen=True)
class Chunk(Generic[T_Data]):
    """Leaf entry of a RIFF tree

    id: chunk 4CC

    chunk_size: number of meaningful payload bytes, without padding

    data: stored payload, including the pad byte for odd sizes
    """

    id: FourCC
    chunk_size: int
    data: T_Data

    @property
    def tag(self) -> str:
        return str(self.id)

    @property
    def padded_size(self) -> int:
        return padded_size(self.chunk_size)

    @property
    def bytes_len(self) -> int:
        return CHUNK_HEADER_SIZE + len(self.data)

    @property
    def payload(self) -> bytes:
        """Meaningful payload bytes, pad byte excluded."""
        return bytes(Splicer(0, self.chunk_size)(self.data.view()))

    def to_owned(self) -> 'Chunk[DataOwned]':
        return Chunk(self.id, self.chunk_size, self.data.to_owned())

    def with_payload(self, payload: BufferLike) -> 'Chunk[DataOwned]':
        return make_chunk(self.id, payload)

    def __repr__(self) -> str:
        return f'Chunk<{self.tag}>[{self.chunk_size}]'


@dataclass(frozen=True)
class List(Generic[T_Data]):
    """Container entry of a RIFF tree

    fourcc: container tag, LIST (or RIFF for the root)

    list_type: sub-type 4CC

    children: contained entries, in file order
    """

    fourcc: FourCC
    list_type: FourCC
    children: Sequence['Entry']

    @property
    def tag(self) -> str:
        return str(self.list_type)

    @property
    def bytes_len(self) -> int:
        return LIST_HEADER_SIZE + sum(child.bytes_len for child in self.children)

    def __iter__(self) -> Iterator['Entry']:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def content(self, children: Iterable['Entry']) -> 'List':
        return replace(self, children=list(children))

    def to_owned(self) -> 'List[DataOwned]':
        return List(
            self.fourcc,
            self.list_type,
            [child.to_owned() for child in self.children],
        )

    def __repr__(self) -> str:
        children = ','.join(_format_children(self, max_show=4))
        return f'List<{self.fourcc!s}:{self.tag}>[children={{{children}}}]'


Entry = Union[List, Chunk]


def to_owned(entry: Entry) -> Entry:
    """Copy given entry and all its descendants into independent buffers."""
    if isinstance(entry, List):
        return entry.to_owned()
    if isinstance(entry, Chunk):
        return entry.to_owned()
    raise TypeError(f'expected List or Chunk but got {type(entry).__name__}')


def make_chunk(chunk_id: Union[str, bytes], payload: BufferLike) -> Chunk[DataOwned]:
    """Create owned chunk from given payload, padding odd sizes."""
    return Chunk(
        FourCC(chunk_id),
        len(payload),
        DataOwned(bytearray(align_write(payload))),
    )


def make_list(
    list_type: Union[str, bytes],
    children: Iterable[Entry] = (),
    fourcc: Union[str, bytes] = LIST,
) -> List[DataOwned]:
    return List(FourCC(fourcc), FourCC(list_type), list(children))


def _format_children(
    root: Iterable[Entry],
    max_show: Optional[int] = None,
) -> Iterator[str]:
    counts = Counter(child.tag for child in root)
    for idx, (tag, count) in enumerate(counts.items()):
        if not (max_show is None or idx < max_show):
            yield '...'
            return
        yield f'{tag}*{count}' if count > 1 else tag
