import base64

from blog_cli import main
from blog_models import GenerationResult
from gemini_service import GenerationError


class StubGenerator:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def generate(self, params):
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return self.result


def test_prints_article(capsys):
    generator = StubGenerator(result=GenerationResult("## Hi\nBody line."))

    code = main(["http://x.test/p", "--no-images", "--length", "short", "--style", "Interview"], generator)

    assert code == 0
    assert capsys.readouterr().out == "## Hi\nBody line.\n"
    params = generator.calls[0]
    assert params.generate_images is False
    assert params.article_length == "Short (~500 words)"
    assert params.writing_style == "Interview"


def test_writes_images(tmp_path):
    jpeg = base64.b64encode(b"\xff\xd8jpeg").decode()
    result = GenerationResult("[IMAGE_1]", [f"data:image/jpeg;base64,{jpeg}"])

    code = main(["http://x.test/p", "--images-dir", str(tmp_path)], StubGenerator(result=result))

    assert code == 0
    assert (tmp_path / "image_1.jpg").read_bytes() == b"\xff\xd8jpeg"


def test_empty_url_exits_2(capsys):
    generator = StubGenerator(result=GenerationResult("unused"))

    assert main([""], generator) == 2
    assert generator.calls == []
    assert "Please enter a product URL." in capsys.readouterr().err


def test_generation_error_exits_1(capsys):
    generator = StubGenerator(error=GenerationError("Failed to generate blog post: boom"))

    assert main(["http://x.test/p"], generator) == 1
    assert "boom" in capsys.readouterr().err
