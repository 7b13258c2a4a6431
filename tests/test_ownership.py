import gc

import pytest

from riffio.kernel.container import RiffFile
from riffio.kernel.data import DataOwned, DataRef
from riffio.kernel.entry import Chunk, List, make_chunk, make_list, to_owned
from riffio.kernel.errors import ContainerClosedError, ForeignEntryError
from riffio.kernel.writer import tobytes

from riffdata import AVI, WAVE, pack_chunk, pack_riff


def test_owned_tree_outlives_file(avi_path):
    with RiffFile.open(avi_path) as resource:
        root = resource.read_tree()
        owned = resource.to_owned(root)
    gc.collect()

    assert resource.closed
    with pytest.raises(ContainerClosedError):
        root.children[1].data.tobytes()

    assert isinstance(owned.children[1].data, DataOwned)
    assert owned.children[1].payload == b'\0' * 5
    assert tobytes(owned) == AVI


def test_conversion_copies_structure():
    resource = RiffFile(AVI)
    root = resource.read_tree()
    owned = to_owned(root)

    def shape(entry):
        if isinstance(entry, List):
            return (bytes(entry.fourcc), bytes(entry.list_type), [shape(c) for c in entry])
        return (bytes(entry.id), entry.chunk_size, entry.data.tobytes())

    assert shape(owned) == shape(root)
    assert isinstance(owned.children, list)
    assert isinstance(root.children, tuple)


def test_conversion_of_subtree():
    resource = RiffFile(AVI)
    strl = resource.read_tree().children[0].children[1]
    owned = strl.to_owned()
    resource.close()
    assert [c.tag for c in owned] == ['strh', 'strf', 'strn']
    assert owned.children[2].data == DataOwned(bytearray(b'video\0\0\0'))


def test_reference_data_is_zero_copy():
    data = bytearray(WAVE)
    resource = RiffFile(data)
    (fmt,) = resource.read_entries()
    owned = fmt.to_owned()
    data[20] = 0xFF
    assert fmt.data.tobytes()[0] == 0xFF
    assert owned.data.tobytes()[0] == 0


def test_foreign_entry_rejected():
    first = RiffFile(WAVE)
    second = RiffFile(WAVE)
    (fmt,) = first.read_entries()
    with pytest.raises(ForeignEntryError):
        second.to_owned(fmt)
    assert second.to_owned(make_chunk('abcd', b'x')).payload == b'x'


def test_owned_tree_editing():
    resource = RiffFile(AVI)
    root = resource.to_owned(resource.read_tree())
    resource.close()

    hdrl = root.children[0]
    hdrl.children.insert(1, make_chunk('note', b'hello'))
    del root.children[1]
    root.children.reverse()

    assert [c.tag for c in root] == ['idx1', 'movi', 'hdrl']
    assert [c.tag for c in hdrl] == ['avih', 'note', 'strl', 'strl']

    reread = RiffFile(tobytes(root)).read_tree()
    assert [c.tag for c in reread] == ['idx1', 'movi', 'hdrl']
    assert reread.children[2].children[1].payload == b'hello'


def test_make_chunk_pads_odd_payload():
    chunk = make_chunk('odd ', b'abc')
    assert chunk.chunk_size == 3
    assert chunk.data.tobytes() == b'abc\0'
    assert chunk.with_payload(b'abcd').data.tobytes() == b'abcd'
    assert repr(chunk) == 'Chunk<odd >[3]'


def test_built_tree_matches_packed_bytes():
    root = make_list(
        'WAVE',
        [make_chunk('fmt ', bytes(range(16))), make_list('INFO', [make_chunk('INAM', b'name!')])],
        fourcc='RIFF',
    )
    expected = pack_riff(
        b'WAVE',
        pack_chunk(b'fmt ', bytes(range(16))),
        b'LIST' + (4 + 14).to_bytes(4, 'little') + b'INFO' + pack_chunk(b'INAM', b'name!'),
    )
    assert tobytes(root) == expected


def test_to_owned_rejects_other_types():
    with pytest.raises(TypeError):
        to_owned(b'RIFF')


def test_data_ref_len():
    resource = RiffFile(WAVE)
    ref = DataRef(resource, 20, 16)
    assert len(ref) == 16
    assert ref.stop == 36
    assert isinstance(Chunk(b'fmt ', 16, ref).to_owned().data, DataOwned)
