import pytest

from riffio.kernel.align import align_write, calc_align, padded_size
from riffio.kernel.buffer import (
    NegativeSliceError,
    Splicer,
    UnexpectedBufferSize,
    check_span,
    splice,
)
from riffio.kernel.errors import FormatError, TruncatedEntryError


def test_splice_is_zero_copy_on_memoryview():
    data = bytearray(b'0123456789')
    view = memoryview(data)
    part = splice(view, 2, 3)
    assert bytes(part) == b'234'
    data[2] = ord('x')
    assert bytes(part) == b'x34'
    part.release()
    view.release()


def test_splice_past_end():
    with pytest.raises(UnexpectedBufferSize) as exc:
        splice(b'0123', 2, 4)
    assert exc.value.expected == 4
    assert exc.value.given == 2
    assert isinstance(exc.value, FormatError)


def test_splicer():
    assert Splicer(1, 2)(b'abcd') == b'bc'
    assert Splicer(1, 2).stop == 3
    with pytest.raises(NegativeSliceError):
        Splicer(-1, 2)


@pytest.mark.parametrize(
    'size, padded', [(0, 0), (1, 2), (2, 2), (5, 6), (16, 16), (17, 18)]
)
def test_padded_size(size, padded):
    assert padded_size(size) == padded


def test_calc_align():
    assert calc_align(3, 4) == 1
    assert calc_align(8, 4) == 0
    assert calc_align(7) == 1


def test_align_write():
    assert align_write(b'abc') == b'abc\0'
    assert align_write(b'ab') == b'ab'
    assert align_write(b'') == b''


def test_check_span():
    assert check_span(4, 8, 12) == 12
    with pytest.raises(TruncatedEntryError) as exc:
        check_span(4, 9, 12)
    assert (exc.value.offset, exc.value.size, exc.value.end) == (4, 9, 12)
