"""Article generation against Gemini (text) and Imagen (illustrations)."""

import asyncio
import base64
import json
import logging
import re
import time

from google.genai import types

import config
from blog_models import GenerationResult
from blog_prompt import build_prompt

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "An unknown error occurred while communicating with the AI."


class GenerationError(Exception):
    """The provider failed to produce an article."""


class MalformedResponseError(GenerationError):
    """Structured output could not be read as {article, imagePrompts}."""


ARTICLE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "article": types.Schema(
            type=types.Type.STRING,
            description=(
                "The full blog post content in markdown format, including three "
                "image placeholders: [IMAGE_1], [IMAGE_2], and [IMAGE_3]."
            ),
        ),
        "imagePrompts": types.Schema(
            type=types.Type.ARRAY,
            description="An array of exactly 3 detailed, descriptive prompts for an AI image generator.",
            items=types.Schema(type=types.Type.STRING),
        ),
    },
    required=["article", "imagePrompts"],
)


def to_generation_error(exc):
    message = str(exc).strip()
    if not message:
        return GenerationError(UNKNOWN_ERROR)
    return GenerationError(f"Failed to generate blog post: {message}")


def _strip_code_fences(s):
    """Drop a ```json ... ``` wrapper if the model added one anyway."""
    s = s.strip()
    s = re.sub(r"^```(?:json)?\s*", "", s, flags=re.IGNORECASE)
    s = re.sub(r"\s*```$", "", s)
    return s.strip()


def to_data_uri(image_bytes, mime="image/jpeg"):
    b64 = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime};base64,{b64}"


class TextOnlyPath:
    """One grounded text call; the raw answer is the article."""

    wants_images = False

    def config(self):
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

    def parse(self, text):
        return GenerationResult(article=text or "", images=[])

    async def run(self, models, prompt, text_model, image_model):
        response = await asyncio.to_thread(
            models.generate_content,
            model=text_model,
            contents=prompt,
            config=self.config(),
        )
        return self.parse(response.text)


class IllustratedPath:
    """Structured text call, then one Imagen call per image prompt."""

    wants_images = True

    def config(self):
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=ARTICLE_SCHEMA,
        )

    def image_config(self):
        return types.GenerateImagesConfig(
            number_of_images=1,
            output_mime_type="image/jpeg",
            aspect_ratio="16:9",
        )

    def parse(self, text):
        """Return (article, image_prompts) from the model's JSON answer."""
        try:
            data = json.loads(_strip_code_fences(text or ""))
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Failed to generate blog post: the model returned invalid JSON ({e})"
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                "Failed to generate blog post: expected a JSON object from the model"
            )

        article = data.get("article")
        if not isinstance(article, str):
            raise MalformedResponseError(
                "Failed to generate blog post: the model response has no 'article' text"
            )

        prompts = data.get("imagePrompts")
        if prompts is None:
            prompts = []
        if not isinstance(prompts, list) or not all(isinstance(p, str) for p in prompts):
            raise MalformedResponseError(
                "Failed to generate blog post: 'imagePrompts' must be a list of strings"
            )
        return article, prompts

    async def generate_image(self, models, prompt, image_model):
        response = await asyncio.to_thread(
            models.generate_images,
            model=image_model,
            prompt=prompt,
            config=self.image_config(),
        )
        if not response.generated_images:
            raise MalformedResponseError(
                "Failed to generate blog post: the image model returned no image"
            )
        return to_data_uri(response.generated_images[0].image.image_bytes)

    async def run(self, models, prompt, text_model, image_model):
        response = await asyncio.to_thread(
            models.generate_content,
            model=text_model,
            contents=prompt,
            config=self.config(),
        )
        article, prompts = self.parse(response.text)
        if not prompts:
            return GenerationResult(article=article, images=[])

        # all-or-nothing: the first failure propagates and the batch is dropped
        images = await asyncio.gather(
            *(self.generate_image(models, p, image_model) for p in prompts)
        )
        return GenerationResult(article=article, images=list(images))


def select_path(params):
    return IllustratedPath() if params.generate_images else TextOnlyPath()


class ArticleGenerator:
    """Runs one generation attempt and normalizes every failure to GenerationError."""

    def __init__(self, client, text_model=config.TEXT_MODEL, image_model=config.IMAGE_MODEL):
        self.client = client
        self.text_model = text_model
        self.image_model = image_model

    async def agenerate(self, params):
        path = select_path(params)
        prompt = build_prompt(params, path.wants_images)

        start = time.time()
        try:
            result = await path.run(
                self.client.models, prompt, self.text_model, self.image_model,
            )
        except MalformedResponseError as e:
            logger.warning("Malformed Gemini response: %s", e)
            raise
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise to_generation_error(e) from e

        elapsed = round(time.time() - start, 1)
        logger.info(
            "Generated article for %s in %ss (%d chars, %d images)",
            params.product_url, elapsed, len(result.article), len(result.images),
        )
        return result

    def generate(self, params):
        return asyncio.run(self.agenerate(params))
