from dataclasses import dataclass, replace
from typing import IO, Any, TypeVar

from . import entry, settings, tree, writer
from .buffer import BufferLike
from .container import RiffFile

_SettingT = TypeVar('_SettingT', bound='_DefaultOverride')


@dataclass(frozen=True)
class _DefaultOverride(object):
    def __call__(self: _SettingT, **kwargs: Any) -> _SettingT:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class _RiffPreset(settings._ReadSetting, _DefaultOverride):

    # static pass through
    find = staticmethod(tree.find)
    findall = staticmethod(tree.findall)
    findpath = staticmethod(tree.findpath)
    iter_chunks = staticmethod(tree.iter_chunks)
    walk = staticmethod(tree.walk)
    render = staticmethod(tree.render)
    renders = staticmethod(tree.renders)
    make_chunk = staticmethod(entry.make_chunk)
    make_list = staticmethod(entry.make_list)
    to_owned = staticmethod(entry.to_owned)
    write = staticmethod(writer.write)
    tobytes = staticmethod(writer.tobytes)

    def open(self, path: str) -> RiffFile:
        return RiffFile.open(path, self)

    def open_file(self, handle: IO[bytes]) -> RiffFile:
        return RiffFile.open_file(handle, self)

    def from_bytes(self, buffer: BufferLike) -> RiffFile:
        return RiffFile(buffer, self)


riff = _RiffPreset()
