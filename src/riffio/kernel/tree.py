import io
import posixpath
import sys
from typing import IO, Callable, Iterator, Optional

from parse import parse

from .data import DataRef
from .entry import Chunk, Entry, List

ChunkPredicate = Callable[[Chunk], bool]
Transform = Callable[[Entry], Optional[Entry]]


def findall(tag: str, root: Optional[Entry]) -> Iterator[Entry]:
    """Children of root whose tag matches given parse pattern."""
    if not isinstance(root, List):
        return
    for c in root:
        if parse(tag, c.tag, evaluate_result=False):
            yield c


def find(tag: str, root: Optional[Entry]) -> Optional[Entry]:
    return next(findall(tag, root), None)


def findpath(path: str, root: Optional[Entry]) -> Optional[Entry]:
    path = posixpath.normpath(path)
    if not path or path == '.':
        return root
    dirname, basename = posixpath.split(path)
    return find(basename, findpath(dirname, root))


def iter_chunks(
    root: Entry, predicate: Optional[ChunkPredicate] = None
) -> Iterator[Chunk]:
    """Depth first iteration over all chunks under root."""
    if isinstance(root, List):
        for child in root.children:
            yield from iter_chunks(child, predicate)
    elif isinstance(root, Chunk):
        if predicate is None or predicate(root):
            yield root
    else:
        raise TypeError(f'expected List or Chunk but got {type(root).__name__}')


def walk(root: Entry, transform: Transform) -> Optional[Entry]:
    """Rebuild tree bottom-up, replacing each entry with its transform.

    Entries transformed to None are removed from their parent list.
    """
    if isinstance(root, List):
        children = (walk(child, transform) for child in root.children)
        root = root.content(child for child in children if child is not None)
    return transform(root)


def render(
    entry: Optional[Entry], level: int = 0, stream: Optional[IO[str]] = None
) -> None:
    if entry is None:
        return
    if stream is None:
        stream = sys.stdout
    indent = '    ' * level
    if isinstance(entry, Chunk):
        offset = ''
        if isinstance(entry.data, DataRef):
            offset = f' offset="{entry.data.offset}"'
        print(f'{indent}<{entry.tag}{offset} size="{entry.chunk_size}" />', file=stream)
        return
    size = entry.bytes_len - 8
    print(f'{indent}<{entry.fourcc!s} type="{entry.tag}" size="{size}">', file=stream)
    for c in entry.children:
        render(c, level=level + 1, stream=stream)
    print(f'{indent}</{entry.fourcc!s}>', file=stream)


def renders(entry: Optional[Entry]) -> str:
    with io.StringIO() as stream:
        render(entry, stream=stream)
        return stream.getvalue()
