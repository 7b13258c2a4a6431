from typing import Optional


class FormatError(ValueError):
    """Input is not a structurally well-formed RIFF file."""


class BadMagicError(FormatError):
    def __init__(self, magic: bytes) -> None:
        super().__init__(f'bad magic: expected RIFF header but got {magic!r}')
        self.magic = magic


class SizeMismatchError(FormatError):
    def __init__(self, declared: int, actual: int) -> None:
        super().__init__(
            f'declared size {declared} does not match file length {actual}'
            f' (expected {declared + 8})'
        )
        self.declared = declared
        self.actual = actual


class TruncatedEntryError(FormatError):
    def __init__(self, offset: int, size: int, end: int) -> None:
        super().__init__(
            f'entry at offset {offset} needs {size} bytes but region ends at {end}'
        )
        self.offset = offset
        self.size = size
        self.end = end


class MalformedListError(FormatError):
    def __init__(self, offset: int, size: int) -> None:
        super().__init__(
            f'list at offset {offset} declares size {size}, too small for its type'
        )
        self.offset = offset
        self.size = size


class DepthLimitError(FormatError):
    def __init__(self, offset: int, max_depth: int) -> None:
        super().__init__(f'list at offset {offset} nested deeper than {max_depth}')
        self.offset = offset
        self.max_depth = max_depth


class DataTooLargeError(ValueError):
    def __init__(self, tag: str, size: int, limit: Optional[int] = None) -> None:
        limit = 0xFFFFFFFF if limit is None else limit
        super().__init__(f'{tag}: size {size} exceeds size field limit {limit}')
        self.tag = tag
        self.size = size
        self.limit = limit


class ContainerClosedError(ValueError):
    def __init__(self) -> None:
        super().__init__('I/O operation on closed RIFF file')


class ForeignEntryError(ValueError):
    def __init__(self, tag: str) -> None:
        super().__init__(f'{tag} was not read from this file')
        self.tag = tag


class NotOwnedError(TypeError):
    def __init__(self, tag: str) -> None:
        super().__init__(f'{tag} references file data, convert it with to_owned first')
        self.tag = tag
