import deal

from .buffer import BufferLike

WORD_ALIGN = 2


@deal.chain(
    deal.pre(lambda _: _.align >= 1),
    deal.pre(lambda _: _.offset >= 0),
    deal.ensure(lambda _: 0 <= _.result < _.align),
    deal.ensure(lambda _: (_.offset + _.result) % _.align == 0),
    deal.pure,
)
def calc_align(offset: int, align: int = WORD_ALIGN) -> int:
    """Calculate difference from given offset to next aligned offset."""
    return (align - offset) % align


@deal.chain(
    deal.pre(lambda _: _.size >= 0),
    deal.ensure(lambda _: _.result % WORD_ALIGN == 0),
    deal.ensure(lambda _: _.result - _.size in (0, 1)),
    deal.pure,
)
def padded_size(size: int) -> int:
    """Number of bytes a chunk payload of given size occupies on disk."""
    return size + calc_align(size, WORD_ALIGN)


@deal.chain(
    deal.pre(lambda _: _.align >= 1),
    deal.ensure(lambda _: _.result.startswith(_.buffer)),
    deal.ensure(
        lambda _: len(_.buffer) % _.align == 0 or set(_.result[len(_.buffer) :]) == {0},
    ),
    deal.ensure(lambda _: len(_.buffer) <= len(_.result) < len(_.buffer) + _.align),
    deal.ensure(lambda _: len(_.result) % _.align == 0),
    deal.pure,
)
def align_write(buffer: BufferLike, align: int = WORD_ALIGN) -> bytes:
    """Pad given data with zero bytes up to next aligned length."""
    pos = len(buffer)
    return bytes(buffer) + bytes(calc_align(pos, align))
