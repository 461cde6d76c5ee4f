"""Shared fixtures: seeded reports, small test images and a fake OpenAI client."""
from io import BytesIO
from types import SimpleNamespace

import numpy as np
import pytest
from PIL import Image

from moveid.generator import generate_analysis


class FakeCompletions:
    """Stands in for client.chat.completions; replays canned replies in order."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, replies):
        self.completions = FakeCompletions(replies)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def squat_report():
    return generate_analysis('agachamento', rng=np.random.default_rng(42))


@pytest.fixture
def png_bytes():
    buffer = BytesIO()
    Image.new('RGB', (64, 48), color=(200, 120, 40)).save(buffer, format='PNG')
    return buffer.getvalue()
