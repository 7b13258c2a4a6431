import mmap
import os
from typing import IO, Any, Callable, Optional, Tuple

from . import reader
from .buffer import BufferLike, check_span, splice
from .data import DataRef
from .entry import Entry, List
from .errors import (
    BadMagicError,
    ContainerClosedError,
    ForeignEntryError,
    MalformedListError,
    SizeMismatchError,
    TruncatedEntryError,
)
from .fourcc import RIFF, FourCC
from .settings import DEFAULT_SETTING, _ReadSetting
from .structured import FILE_HEADER, FileHeader
from .tree import iter_chunks

# declared size covers the file type tag, which is part of the 12 byte header
FILE_TYPE_SIZE = 4


def read_header(cfg: _ReadSetting, buffer: BufferLike) -> FileHeader:
    """Validate and decode the 12 byte file header."""
    if len(buffer) < FILE_HEADER.size:
        raise TruncatedEntryError(0, FILE_HEADER.size, len(buffer))
    header = FILE_HEADER.unpack_from(buffer)
    if header.magic != RIFF:
        raise BadMagicError(header.magic)
    if header.size < FILE_TYPE_SIZE:
        raise MalformedListError(0, header.size)
    actual = len(buffer)
    if header.size + 8 != actual:
        if cfg.strict:
            raise SizeMismatchError(header.size, actual)
        cfg.logger.warning(
            'declared size %d does not match file length %d, ignoring',
            header.size,
            actual,
        )
    return header


class RiffFile(object):
    """Resource Interchange File Format container.

    Holds the file bytes (usually a read-only memory map) for its lifetime.
    Entries read from it reference those bytes directly and become unusable
    once the file is closed; use `to_owned` to keep them around.
    """

    def __init__(
        self,
        buffer: BufferLike,
        cfg: _ReadSetting = DEFAULT_SETTING,
        closer: Optional[Callable[[], Any]] = None,
    ) -> None:
        header = read_header(cfg, buffer)
        self.cfg = cfg
        self._file_type = FourCC(header.file_type)
        self._declared_size = header.size
        self._view = memoryview(buffer)
        self._closer = closer
        self._closed = False

    @classmethod
    def open(cls, path: str, cfg: _ReadSetting = DEFAULT_SETTING) -> 'RiffFile':
        """Open a RIFF file from a filename."""
        with open(path, 'rb') as handle:
            return cls.open_file(handle, cfg)

    @classmethod
    def open_file(
        cls, handle: IO[bytes], cfg: _ReadSetting = DEFAULT_SETTING
    ) -> 'RiffFile':
        """Open a RIFF file from a file handle, mapping it read-only."""
        file_size = os.fstat(handle.fileno()).st_size
        # empty files cannot be mapped
        if file_size < FILE_HEADER.size:
            raise TruncatedEntryError(0, FILE_HEADER.size, file_size)
        mapped = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
        try:
            return cls(mapped, cfg, closer=mapped.close)
        except BaseException:
            mapped.close()
            raise

    @property
    def file_type(self) -> FourCC:
        """File type 4CC, such as 'AVI ' or 'WAVE'."""
        return self._file_type

    @property
    def declared_size(self) -> int:
        """Size of the file following the 'RIFF' tag and the size field."""
        return self._declared_size

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def view(self) -> memoryview:
        if self._closed:
            raise ContainerClosedError()
        return self._view

    def getbuffer(self) -> memoryview:
        """Zero-copy view of the whole file."""
        return self.view

    def read_bytes(self, start: int, stop: int) -> memoryview:
        """Zero-copy view of file bytes in range [start, stop)."""
        view = self.view
        if start < 0 or stop < start:
            raise ValueError(f'invalid byte range [{start}, {stop})')
        check_span(start, stop - start, len(view))
        return splice(view, start, stop - start)

    def read_entries(self) -> Tuple[Entry, ...]:
        """Read top level entries following the file header."""
        end = FILE_HEADER.size + self._declared_size - FILE_TYPE_SIZE
        return tuple(
            entry
            for _, entry in reader.read_entries(self.cfg, self, FILE_HEADER.size, end)
        )

    def read_tree(self) -> List[DataRef]:
        """Read the whole file as a root list tagged 'RIFF'."""
        return List(RIFF, self._file_type, self.read_entries())

    def to_owned(self, entry: Entry) -> Entry:
        """Copy entry read from this file into independent buffers."""
        for chunk in iter_chunks(entry, lambda c: isinstance(c.data, DataRef)):
            if chunk.data.source is not self:
                raise ForeignEntryError(chunk.tag)
        return entry.to_owned()

    def close(self) -> None:
        if self._closed:
            return
        # release is a no-op on a released view, so a failed close can be retried
        self._view.release()
        if self._closer:
            self._closer()
        self._closed = True

    def __enter__(self) -> 'RiffFile':
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = 'closed' if self._closed else f'size={self._declared_size}'
        return f'RiffFile<{self._file_type!s}>[{state}]'
