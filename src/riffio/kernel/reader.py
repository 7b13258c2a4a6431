from typing import TYPE_CHECKING, Iterator, Tuple

from .align import padded_size
from .buffer import check_span
from .data import DataRef
from .entry import CHUNK_HEADER_SIZE, LIST_HEADER_SIZE, Chunk, Entry, List
from .errors import DepthLimitError, MalformedListError
from .fourcc import LIST, FourCC
from .settings import _ReadSetting
from .structured import CHUNK_HEADER

if TYPE_CHECKING:
    from .container import RiffFile

WithEnd = Tuple[Entry, int]

LIST_TYPE_SIZE = LIST_HEADER_SIZE - CHUNK_HEADER_SIZE


def read_entries(
    cfg: _ReadSetting,
    source: 'RiffFile',
    offset: int,
    end: int,
    level: int = 0,
) -> Iterator[Tuple[int, Entry]]:
    """Read all entries in region [offset, end) of given file."""
    check_span(offset, end - offset, len(source.view))
    while offset < end:
        entry, offset_end = read_entry(cfg, source, offset, end, level=level)
        yield offset, entry
        offset = offset_end
    assert offset == end


def read_entry(
    cfg: _ReadSetting,
    source: 'RiffFile',
    offset: int,
    end: int,
    level: int = 0,
) -> WithEnd:
    check_span(offset, CHUNK_HEADER.size, end)
    header = CHUNK_HEADER.unpack_from(source.view, offset)
    if header.etag == LIST:
        return read_list(cfg, source, offset, header.size, end, level=level)
    return read_chunk(cfg, source, FourCC(header.etag), offset, header.size, end)


def read_list(
    cfg: _ReadSetting,
    source: 'RiffFile',
    offset: int,
    list_size: int,
    end: int,
    level: int = 0,
) -> WithEnd:
    # list_size covers list type and contained entries,
    # but not the 'LIST' tag and the size field itself
    if list_size < LIST_TYPE_SIZE:
        raise MalformedListError(offset, list_size)
    list_end = check_span(offset, CHUNK_HEADER_SIZE + list_size, end)
    if cfg.max_depth is not None and level >= cfg.max_depth:
        raise DepthLimitError(offset, cfg.max_depth)

    data_offset = offset + CHUNK_HEADER_SIZE
    list_type = FourCC(source.view[data_offset : data_offset + LIST_TYPE_SIZE])
    cfg.logger.debug('LIST %s at %d, size=%d', list_type, offset, list_size)

    children = tuple(
        entry
        for _, entry in read_entries(
            cfg, source, offset + LIST_HEADER_SIZE, list_end, level=level + 1
        )
    )
    return List(LIST, list_type, children), list_end


def read_chunk(
    cfg: _ReadSetting,
    source: 'RiffFile',
    chunk_id: FourCC,
    offset: int,
    chunk_size: int,
    end: int,
) -> WithEnd:
    # chunk_size excludes the header and the pad byte after odd sized data
    data_size = padded_size(chunk_size)
    chunk_end = check_span(offset, CHUNK_HEADER_SIZE + data_size, end)
    cfg.logger.debug('%s at %d, size=%d', chunk_id, offset, chunk_size)
    data = DataRef(source, offset + CHUNK_HEADER_SIZE, data_size)
    return Chunk(chunk_id, chunk_size, data), chunk_end
