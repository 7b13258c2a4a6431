from dataclasses import dataclass
from typing import Optional, Union

import deal

from .errors import FormatError, TruncatedEntryError

BufferLike = Union[bytes, bytearray, memoryview]


class UnexpectedBufferSize(FormatError):
    def __init__(self, expected: int, given: int) -> None:
        super().__init__(f'Expected buffer of size {expected} but got size {given}')
        self.expected = expected
        self.given = given


class NegativeSliceError(ValueError):
    def __init__(self, offset: int, size: int) -> None:
        super().__init__(
            f'Expected non-negative slice values, got offset={offset} size={size}',
        )
        self.size = size
        self.offset = offset


@deal.chain(
    deal.pre(lambda _: _.offset >= 0),
    deal.pre(lambda _: _.size >= 0),
    deal.raises(TruncatedEntryError),
    deal.reason(TruncatedEntryError, lambda _: _.offset + _.size > _.end),
    deal.ensure(lambda _: _.result == _.offset + _.size <= _.end),
    deal.has(),
)
def check_span(offset: int, size: int, end: int) -> int:
    """Return end of span at offset, if it fits before end of region."""
    if offset + size > end:
        raise TruncatedEntryError(offset, size, end)
    return offset + size


@deal.chain(
    deal.raises(UnexpectedBufferSize),
    deal.reason(UnexpectedBufferSize, lambda _: _.size != len(_.buffer)),
)
def validate_buffer_size(buffer: BufferLike, size: Optional[int] = None) -> BufferLike:
    if size is not None and len(buffer) != size:
        raise UnexpectedBufferSize(size, len(buffer))
    return buffer


@deal.chain(
    deal.pre(lambda _: _.size >= 0),
    deal.pre(lambda _: 0 <= _.offset <= len(_.buffer)),
    deal.raises(UnexpectedBufferSize),
    deal.reason(UnexpectedBufferSize, lambda _: _.offset + _.size > len(_.buffer)),
    deal.has(),
)
def splice(buffer: BufferLike, offset: int, size: int) -> BufferLike:
    """Slice size bytes at offset, zero-copy when buffer is a memoryview."""
    return validate_buffer_size(buffer[offset : offset + size], size)


@dataclass(frozen=True)
class Splicer(object):
    """Byte range [offset, offset + size) applicable to any buffer."""

    offset: int
    size: int

    def __post_init__(self) -> None:
        if self.offset < 0 or self.size < 0:
            raise NegativeSliceError(self.offset, self.size)

    @property
    def stop(self) -> int:
        return self.offset + self.size

    def __call__(self, buffer: BufferLike) -> BufferLike:
        return splice(buffer, self.offset, self.size)
