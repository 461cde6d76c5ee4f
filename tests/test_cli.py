"""Command line entry point."""
import json

import pytest

from moveid.cli import analyze_file, main
from moveid.session import ViewState
from moveid.uploads import UploadRejected


@pytest.fixture
def video(tmp_path):
    path = tmp_path / 'squat.mp4'
    path.write_bytes(b'\x00' * 4096)
    return path


def test_analyze_file_writes_pdf(video, tmp_path, png_bytes):
    frame = tmp_path / 'frame.png'
    frame.write_bytes(png_bytes)
    output = tmp_path / 'out' / 'report.pdf'
    output.parent.mkdir()

    session, written = analyze_file(video, exercise_type='agachamento', frame_path=frame,
                                    output=output, seed=5)

    assert written == output
    assert output.read_bytes().startswith(b'%PDF')
    assert session.state is ViewState.REPORT_READY
    assert session.progress == 100
    assert session.report.exercise_type == 'squat'


def test_analyze_file_rejects_non_video(tmp_path):
    path = tmp_path / 'notes.txt'
    path.write_text('not a video')
    with pytest.raises(UploadRejected):
        analyze_file(path, output=tmp_path / 'x.pdf')


def test_main_analyze_json(video, tmp_path, capsys):
    output = tmp_path / 'report.pdf'
    code = main(['analyze', str(video), '--exercise', 'deadlift', '--output', str(output),
                 '--seed', '3', '--json', '--no-charts'])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload['success'] is True
    assert payload['analysis']['exercise_type'] == 'deadlift'
    assert payload['metadata']['file_name'] == 'squat.mp4'
    assert output.exists()


def test_main_analyze_rejected(tmp_path):
    path = tmp_path / 'notes.txt'
    path.write_text('not a video')
    assert main(['analyze', str(path), '--output', str(tmp_path / 'x.pdf')]) == 1


def test_main_audit(capsys):
    assert main(['audit', '--exercise', 'walk', '--samples', '25', '--seed', '1']) == 0
    out = capsys.readouterr().out
    assert '25 reports sampled, 0 values out of band' in out
