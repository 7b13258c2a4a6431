import io
import logging
from typing import IO

from .align import padded_size
from .data import DataOwned
from .entry import CHUNK_HEADER_SIZE, Chunk, Entry, List
from .errors import DataTooLargeError, NotOwnedError
from .structured import CHUNK_HEADER, UINT32_MAX, UINT32LE, ChunkHeader
from .tree import iter_chunks

logger = logging.getLogger('riffio')


def write(entry: Entry, stream: IO[bytes]) -> int:
    """Serialize owned entry to given stream, return number of bytes written.

    The whole tree is checked before anything is written, so a rejected
    tree leaves the stream untouched.
    """
    for chunk in iter_chunks(entry):
        check_chunk(chunk)
    return _write(entry, stream)


def check_chunk(chunk: Chunk) -> None:
    if not isinstance(chunk.data, DataOwned):
        raise NotOwnedError(chunk.tag)
    if len(chunk.data) > UINT32_MAX:
        raise DataTooLargeError(chunk.tag, len(chunk.data))
    if chunk.chunk_size > UINT32_MAX:
        raise DataTooLargeError(chunk.tag, chunk.chunk_size)
    if len(chunk.data) != padded_size(chunk.chunk_size):
        logger.warning(
            '%s: stored %d bytes for declared size %d, writing as is',
            chunk.tag,
            len(chunk.data),
            chunk.chunk_size,
        )


def _write(entry: Entry, stream: IO[bytes]) -> int:
    if isinstance(entry, Chunk):
        return _write_chunk(entry, stream)
    return _write_list(entry, stream)


def _write_chunk(chunk: Chunk[DataOwned], stream: IO[bytes]) -> int:
    data = chunk.data.buffer
    stream.write(CHUNK_HEADER.pack(ChunkHeader(chunk.id, chunk.chunk_size)))
    stream.write(data)
    return CHUNK_HEADER_SIZE + len(data)


def _write_list(lst: List[DataOwned], stream: IO[bytes]) -> int:
    # size field covers list type and children, excluding tag and itself
    size = lst.bytes_len - CHUNK_HEADER_SIZE
    if size > UINT32_MAX:
        raise DataTooLargeError(lst.tag, size)
    stream.write(lst.fourcc)
    stream.write(UINT32LE.pack(size))
    stream.write(lst.list_type)
    written = sum(_write(child, stream) for child in lst.children)
    assert written == size - len(lst.list_type), (written, size)
    return CHUNK_HEADER_SIZE + size


def tobytes(entry: Entry) -> bytes:
    """Serialize owned entry to bytes."""
    with io.BytesIO() as stream:
        write(entry, stream)
        return stream.getvalue()
