import os
import tempfile

from riffio.kernel.entry import Entry
from riffio.kernel.writer import write


def write_file(path: str, entry: Entry) -> int:
    """Write owned tree to path, return number of bytes written.

    Data goes to a temporary file in the same directory which replaces
    path only once fully written, so path may be the file being read.
    """
    dirname = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(dir=dirname, suffix='.tmp')
    try:
        with os.fdopen(fd, 'wb') as res:
            written = write(entry, res)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise
    return written
