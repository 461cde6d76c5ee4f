"""HTTP API tests with FastAPI's TestClient and a fake vision client."""
import base64

import pytest
from fastapi.testclient import TestClient

from moveid import api
from moveid.config import MB
from moveid.vision import VisionAnalyzer


@pytest.fixture
def client():
    with TestClient(api.app) as test_client:
        yield test_client
    api.app.dependency_overrides.clear()


@pytest.fixture
def use_vision(fake_client):
    """Route vision calls to a fake client answering with `replies`."""
    def install(replies):
        fake = fake_client(replies)
        api.app.dependency_overrides[api.get_vision_analyzer] = lambda: VisionAnalyzer(client=fake)
        return fake
    return install


def test_health(client):
    assert client.get('/').json() == {'status': 'ok'}


# ===================================================================
#  /api/analyze-video
# ===================================================================

class TestAnalyzeVideo:
    def test_squat_analysis(self, client):
        response = client.post(
            '/api/analyze-video',
            files={'video': ('squat.mp4', b'\x00' * 2048, 'video/mp4')},
            data={'exerciseType': 'agachamento'},
        )
        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        angles = body['analysis']['biomechanics']['joint_angles']
        assert set(angles) == {'right_knee', 'left_knee', 'right_hip', 'left_hip',
                               'right_ankle', 'left_ankle', 'trunk'}
        assert body['metadata']['file_name'] == 'squat.mp4'
        assert body['metadata']['file_size'] == 2048
        assert body['metadata']['exercise_type'] == 'agachamento'

    def test_default_exercise_label(self, client):
        response = client.post(
            '/api/analyze-video',
            files={'video': ('clip.mov', b'\x00' * 16, 'video/quicktime')},
        )
        assert response.status_code == 200
        assert response.json()['metadata']['exercise_type'] == 'general movement'

    def test_oversized_video_rejected_before_generation(self, client, monkeypatch):
        calls = []
        monkeypatch.setattr(api, 'generate_analysis', lambda *a, **kw: calls.append(a))
        response = client.post(
            '/api/analyze-video',
            files={'video': ('big.mp4', b'\x00' * (50 * MB + 1), 'video/mp4')},
            data={'exerciseType': 'squat'},
        )
        assert response.status_code == 400
        assert '50MB' in response.json()['error']
        assert calls == []

    def test_wrong_type_rejected(self, client):
        response = client.post(
            '/api/analyze-video',
            files={'video': ('notes.txt', b'hello', 'text/plain')},
        )
        assert response.status_code == 400
        assert response.json() == {'error': 'The file must be a video'}

    def test_missing_file(self, client):
        response = client.post('/api/analyze-video', data={'exerciseType': 'squat'})
        assert response.status_code == 400
        assert response.json() == {'error': 'No video file was uploaded'}

    def test_generator_crash_is_500(self, client, monkeypatch):
        def crash(*args, **kwargs):
            raise RuntimeError('disk full')

        monkeypatch.setattr(api, 'describe_upload', crash)
        response = client.post(
            '/api/analyze-video',
            files={'video': ('squat.mp4', b'\x00' * 16, 'video/mp4')},
        )
        assert response.status_code == 500
        assert response.json()['details'] == 'disk full'


# ===================================================================
#  /api/analyze-image and /api/analyze-frames
# ===================================================================

class TestAnalyzeImage:
    def test_non_json_reply(self, client, use_vision, png_bytes):
        raw = 'Good posture overall, slight knee valgus.'
        use_vision([raw])
        response = client.post(
            '/api/analyze-image',
            files={'image': ('frame.png', png_bytes, 'image/png')},
            data={'analysisType': 'posture'},
        )
        assert response.status_code == 200
        body = response.json()
        assert body['analysis'] == {'description': raw, 'confidence_score': 0.7}
        assert body['metadata'] == {'file_name': 'frame.png', 'file_size': len(png_bytes),
                                    'analysis_type': 'posture'}

    def test_oversized_image_rejected(self, client, use_vision):
        fake = use_vision([])
        response = client.post(
            '/api/analyze-image',
            files={'image': ('huge.png', b'\x00' * (10 * MB + 1), 'image/png')},
        )
        assert response.status_code == 400
        assert '10MB' in response.json()['error']
        assert fake.completions.calls == []

    def test_video_is_not_an_image(self, client, use_vision):
        use_vision([])
        response = client.post(
            '/api/analyze-image',
            files={'image': ('clip.mp4', b'\x00' * 16, 'video/mp4')},
        )
        assert response.status_code == 400
        assert response.json() == {'error': 'The file must be an image'}

    def test_nan_reply_kept_as_text(self, client, use_vision, png_bytes):
        raw = '{"description": "ok", "confidence_score": NaN}'
        use_vision([raw])
        response = client.post(
            '/api/analyze-image',
            files={'image': ('frame.png', png_bytes, 'image/png')},
        )
        assert response.status_code == 200
        assert response.json()['analysis'] == {'description': raw, 'confidence_score': 0.7}


class TestAnalyzeFrames:
    def test_frames_consolidated(self, client, use_vision, png_bytes):
        use_vision(['note 1', 'note 2', '{"score": 88, "description": "Consistent squat"}'])
        response = client.post(
            '/api/analyze-frames',
            files=[('frames', ('f1.png', png_bytes, 'image/png')),
                   ('frames', ('f2.png', png_bytes, 'image/png'))],
            data={'exerciseType': 'agachamento'},
        )
        assert response.status_code == 200
        body = response.json()
        assert body['analysis']['score'] == 88
        assert body['analysis']['exercise_type'] == 'squat'
        assert body['metadata'] == {'frame_count': 2, 'exercise_type': 'agachamento'}

    def test_nan_consolidation_kept_as_text(self, client, use_vision, png_bytes):
        raw = '{"score": 80, "description": "ok", "biomechanics": {"joint_angles": {"knee": NaN}}}'
        use_vision(['note', raw])
        response = client.post(
            '/api/analyze-frames',
            files=[('frames', ('f1.png', png_bytes, 'image/png'))],
            data={'exerciseType': 'squat'},
        )
        assert response.status_code == 200
        analysis = response.json()['analysis']
        assert analysis['score'] == 75
        assert analysis['description'] == raw
        assert analysis['confidence_score'] == 0.7

    def test_label_forwarded_as_typed(self, client, use_vision, png_bytes):
        fake = use_vision(['note', '{"score": 70, "description": "Forward lunge"}'])
        response = client.post(
            '/api/analyze-frames',
            files=[('frames', ('f1.png', png_bytes, 'image/png'))],
            data={'exerciseType': 'lunge'},
        )
        assert response.status_code == 200
        text = fake.completions.calls[0]['messages'][0]['content'][0]['text']
        assert 'Exercise type: lunge.' in text
        assert response.json()['analysis']['exercise_type'] == 'default'

    def test_no_frames(self, client, use_vision):
        use_vision([])
        response = client.post('/api/analyze-frames', data={'exerciseType': 'squat'})
        assert response.status_code == 400


# ===================================================================
#  /api/report
# ===================================================================

class TestReport:
    def test_pdf_download(self, client, squat_report, png_bytes):
        payload = {
            'analysis': squat_report.model_dump(mode='json'),
            'subject_name': 'Ana',
            'exercise_type': 'agachamento',
            'source_image': 'data:image/png;base64,' + base64.b64encode(png_bytes).decode('ascii'),
        }
        response = client.post('/api/report', json=payload)
        assert response.status_code == 200
        assert response.headers['content-type'] == 'application/pdf'
        assert 'movement-analysis-agachamento-' in response.headers['content-disposition']
        assert response.content.startswith(b'%PDF')

    def test_bad_source_image_still_renders(self, client, squat_report):
        payload = {
            'analysis': squat_report.model_dump(mode='json'),
            'source_image': 'not base64 at all!!',
        }
        response = client.post('/api/report', json=payload)
        assert response.status_code == 200
        assert response.content.startswith(b'%PDF')

    def test_invalid_report_rejected(self, client):
        response = client.post('/api/report', json={'analysis': {'score': 140}})
        assert response.status_code == 422
