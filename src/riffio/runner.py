import glob
import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Set

import typer
import yaml

from riffio.kernel import entry as riff_entry
from riffio.kernel.data import DataRef
from riffio.kernel.errors import FormatError
from riffio.kernel.fourcc import FourCC
from riffio.kernel.preset import riff
from riffio.kernel.settings import DEFAULT_MAX_DEPTH
from riffio.utils.fileio import write_file

app = typer.Typer()


def validate_tags(tags: List[str]) -> List[str]:
    for tag in tags:
        try:
            FourCC(tag.ljust(4))
        except ValueError:
            raise typer.BadParameter(f'{tag!r} is not a 4CC of up to 4 ASCII characters')
    return tags


def get_files(globs: Iterable[str]) -> Set[str]:
    return {fname for pattern in globs for fname in glob.iglob(pattern)}


def outline(entry: riff_entry.Entry) -> Dict[str, Any]:
    if isinstance(entry, riff_entry.Chunk):
        node: Dict[str, Any] = {'id': entry.tag, 'size': entry.chunk_size}
        if isinstance(entry.data, DataRef):
            node['offset'] = entry.data.offset
        return node
    return {
        'fourcc': str(entry.fourcc),
        'type': entry.tag,
        'size': entry.bytes_len - 8,
        'children': [outline(child) for child in entry.children],
    }


@app.callback()
def main(
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Trace entries'),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )


@app.command('map')
def map_entries(
    files: List[str] = typer.Argument(..., help='Files to read from'),
    strict: bool = typer.Option(False, '--strict', help='Reject size mismatch'),
    max_depth: Optional[int] = typer.Option(
        DEFAULT_MAX_DEPTH, '--max-depth', help='Max list nesting, 0 for unlimited'
    ),
    dump: Optional[str] = typer.Option(None, '--dump', help='Save outline as YAML'),
) -> None:
    cfg = riff(strict=strict, max_depth=max_depth or None)
    outlines = {}
    for filename in sorted(get_files(files)):
        basename = os.path.basename(filename)
        print(f'Mapping file: {basename}')
        try:
            with cfg.open(filename) as resource:
                root = resource.read_tree()
                cfg.render(root)
                outlines[basename] = outline(root)
        except FormatError as exc:
            cfg.logger.error('%s: %s', basename, exc)
            raise typer.Exit(code=1)
    if dump:
        with open(dump, 'w') as dump_out:
            yaml.safe_dump(outlines, dump_out, sort_keys=False)


@app.command('copy')
def copy(
    source: str = typer.Argument(..., help='File to read from'),
    target: str = typer.Argument(..., help='File to write to'),
    drop: List[str] = typer.Option(
        [], '--drop', '-d', help='Chunk ids to remove', callback=validate_tags
    ),
    strict: bool = typer.Option(False, '--strict', help='Reject size mismatch'),
) -> None:
    cfg = riff(strict=strict)
    try:
        with cfg.open(source) as resource:
            root = resource.to_owned(resource.read_tree())
    except FormatError as exc:
        cfg.logger.error('%s: %s', source, exc)
        raise typer.Exit(code=1)

    dropped = {FourCC(tag.ljust(4)) for tag in drop}
    if dropped:
        root = cfg.walk(
            root,
            lambda e: None
            if isinstance(e, riff_entry.Chunk) and e.id in dropped
            else e,
        )
    written = write_file(target, root)
    print(f'Wrote {written} bytes to {target}')


if __name__ == '__main__':
    app()
