import logging
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_DEPTH = 128


@dataclass(frozen=True)
class _ReadSetting(object):
    """Setting for reading RIFF files

    strict: if set to True, throws error when declared file size does not
        match the actual file length, otherwise log warning

    max_depth: limit levels of nested lists, None for unlimited
        (deep files may then exhaust the interpreter recursion limit)

    logger: destination for warnings and entry tracing
    """

    strict: bool = False
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    logger: logging.Logger = logging.getLogger('riffio')


DEFAULT_SETTING = _ReadSetting()
