import os
import threading
from types import SimpleNamespace

import pytest

# app.py builds its Gemini client at import time
os.environ.setdefault("GEMINI_API_KEY", "test-key")

from blog_models import GenerationParameters  # noqa: E402


class FakeModels:
    """Stands in for genai.Client().models; records every call."""

    def __init__(self, text="", text_error=None, failing_prompts=(), empty_prompts=(), barrier_parties=0):
        self.text = text
        self.text_error = text_error
        self.failing_prompts = set(failing_prompts)
        self.empty_prompts = set(empty_prompts)
        self.text_calls = []
        self.image_calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()
        # every image call waits here until barrier_parties calls are running at once
        self.barrier = threading.Barrier(barrier_parties, timeout=2) if barrier_parties else None

    def generate_content(self, model, contents, config):
        self.text_calls.append({"model": model, "contents": contents, "config": config})
        if self.text_error is not None:
            raise self.text_error
        return SimpleNamespace(text=self.text)

    def generate_images(self, model, prompt, config):
        self.image_calls.append({"model": model, "prompt": prompt, "config": config})
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.barrier is not None:
                self.barrier.wait()
        finally:
            with self._lock:
                self.in_flight -= 1
        if prompt in self.failing_prompts:
            raise RuntimeError("429 RESOURCE_EXHAUSTED quota exceeded")
        if prompt in self.empty_prompts:
            return SimpleNamespace(generated_images=[])
        image = SimpleNamespace(image_bytes=prompt.encode("utf-8"))
        return SimpleNamespace(generated_images=[SimpleNamespace(image=image)])


class FakeClient:
    def __init__(self, models):
        self.models = models


@pytest.fixture
def make_client():
    def _make(**kwargs):
        models = FakeModels(**kwargs)
        return FakeClient(models), models
    return _make


@pytest.fixture
def params():
    return GenerationParameters(product_url="http://x.test/p")
