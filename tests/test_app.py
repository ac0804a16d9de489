import pytest

import app as app_module
from blog_models import GenerationResult
from gemini_service import ArticleGenerator, GenerationError


class RecordingGenerator:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def generate(self, params):
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def client():
    app_module.app.config["TESTING"] = True
    return app_module.app.test_client()


def test_index_injects_form_options(client):
    res = client.get("/")
    body = res.get_data(as_text=True)

    assert res.status_code == 200
    assert "/*__FORM_OPTIONS__*/" not in body
    assert '"Fitness enthusiasts"' in body
    assert "Your article will appear here" in body
    assert 'class="skeleton"' in body


def test_generate_scenario(client, monkeypatch):
    generator = RecordingGenerator(result=GenerationResult("## Hi\nBody line.", []))
    monkeypatch.setattr(app_module, "generator", generator)

    res = client.post("/api/generate", json={
        "requestId": 7,
        "productUrl": "http://x.test/p",
        "generateImages": False,
        "articleLength": "Short (~500 words)",
    })
    data = res.get_json()

    assert res.status_code == 200
    assert data["article"] == "## Hi\nBody line."
    assert data["images"] == []
    assert data["view"] == "content"
    assert "<h2>Hi</h2>" in data["html"]
    assert data["requestId"] == 7
    assert data["share"]["title"] == "Hi"
    assert data["share"]["url"] == "http://x.test/p"
    params = generator.calls[0]
    assert params.generate_images is False
    assert params.article_length == "Short (~500 words)"
    assert params.writing_style == "Friendly"


def test_generate_end_to_end_with_fake_provider(client, monkeypatch, make_client):
    fake_client, models = make_client(text="## Hi\nBody line.")
    monkeypatch.setattr(app_module, "generator", ArticleGenerator(fake_client))

    res = client.post("/api/generate", json={
        "productUrl": "http://x.test/p",
        "generateImages": False,
    })

    assert res.status_code == 200
    assert res.get_json()["images"] == []
    assert len(models.text_calls) == 1


def test_empty_url_is_rejected_without_provider_call(client, monkeypatch):
    generator = RecordingGenerator(result=GenerationResult("unused"))
    monkeypatch.setattr(app_module, "generator", generator)

    res = client.post("/api/generate", json={"productUrl": "  "})
    data = res.get_json()

    assert res.status_code == 400
    assert data["error"] == "Please enter a product URL."
    assert data["view"] == "error"
    assert generator.calls == []


def test_generation_error_maps_to_502(client, monkeypatch):
    generator = RecordingGenerator(error=GenerationError("Failed to generate blog post: quota"))
    monkeypatch.setattr(app_module, "generator", generator)

    res = client.post("/api/generate", json={"productUrl": "http://x.test/p"})
    data = res.get_json()

    assert res.status_code == 502
    assert data["error"] == "An error occurred: Failed to generate blog post: quota"
    assert "Generation Failed" in data["html"]
    assert "article" not in data


def test_unknown_field_is_a_bad_request(client, monkeypatch):
    generator = RecordingGenerator(result=GenerationResult("unused"))
    monkeypatch.setattr(app_module, "generator", generator)

    res = client.post("/api/generate", json={"productUrl": "http://x.test/p", "color": "red"})

    assert res.status_code == 400
    assert "color" in res.get_json()["error"]
    assert generator.calls == []


@pytest.mark.parametrize("body", ['"abc"', "[1, 2]", "42"])
def test_non_object_json_is_a_bad_request(client, monkeypatch, body):
    generator = RecordingGenerator(result=GenerationResult("unused"))
    monkeypatch.setattr(app_module, "generator", generator)

    res = client.post("/api/generate", data=body, content_type="application/json")

    assert res.status_code == 400
    assert res.get_json()["error"] == "Request body must be a JSON object"
    assert generator.calls == []
