import pytest

from riffdata import AVI, WAVE


@pytest.fixture
def write_riff(tmp_path):
    def _write(data: bytes, name: str = 'test.riff') -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture
def wave_path(write_riff):
    return write_riff(WAVE, 'test.wav')


@pytest.fixture
def avi_path(write_riff):
    return write_riff(AVI, 'test.avi')
