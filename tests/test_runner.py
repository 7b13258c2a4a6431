import yaml
from typer.testing import CliRunner

from riffio.runner import app

from riffdata import AVI, FMT_PAYLOAD, WAVE, pack_chunk, pack_list, pack_riff

runner = CliRunner()


def test_map(wave_path, tmp_path):
    dump = tmp_path / 'outline.yaml'
    result = runner.invoke(app, ['map', wave_path, '--dump', str(dump)])
    assert result.exit_code == 0, result.output
    assert 'Mapping file: test.wav' in result.output
    assert '<fmt  offset="20" size="16" />' in result.output
    outline = yaml.safe_load(dump.read_text())
    assert outline == {
        'test.wav': {
            'fourcc': 'RIFF',
            'type': 'WAVE',
            'size': 28,
            'children': [{'id': 'fmt ', 'size': 16, 'offset': 20}],
        },
    }


def test_map_bad_file(write_riff):
    path = write_riff(pack_riff(b'WAVE', pack_chunk(b'fmt ', FMT_PAYLOAD), magic=b'RIFX'))
    result = runner.invoke(app, ['map', path])
    assert result.exit_code == 1


def test_map_strict(write_riff):
    path = write_riff(WAVE + b'\0\0')
    assert runner.invoke(app, ['map', path]).exit_code == 0
    assert runner.invoke(app, ['map', path, '--strict']).exit_code == 1


def test_copy(avi_path, tmp_path):
    target = tmp_path / 'copy.avi'
    result = runner.invoke(app, ['copy', avi_path, str(target)])
    assert result.exit_code == 0, result.output
    assert target.read_bytes() == AVI


def test_copy_drop(avi_path, tmp_path):
    target = tmp_path / 'stripped.avi'
    result = runner.invoke(app, ['copy', avi_path, str(target), '--drop', 'JUNK'])
    assert result.exit_code == 0, result.output
    data = target.read_bytes()
    assert b'JUNK' not in data
    assert len(data) == len(AVI) - 14


def test_copy_drop_rejects_bad_tag(avi_path, tmp_path):
    target = tmp_path / 'stripped.avi'
    result = runner.invoke(app, ['copy', avi_path, str(target), '--drop', 'TOOLONG'])
    assert result.exit_code == 2
    assert not target.exists()


def test_map_unlimited_depth(write_riff):
    nested = pack_chunk(b'leaf', b'')
    for _ in range(3):
        nested = pack_list(b'deep', nested)
    path = write_riff(pack_riff(b'TEST', nested))
    assert runner.invoke(app, ['map', path, '--max-depth', '2']).exit_code == 1
    result = runner.invoke(app, ['map', path, '--max-depth', '0'])
    assert result.exit_code == 0, result.output
    assert '<leaf offset="56" size="0" />' in result.output
