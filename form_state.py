"""Form parameters and the request state of one browser session."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Union

from blog_models import GenerationParameters, GenerationResult
from gemini_service import GenerationError

logger = logging.getLogger(__name__)

MISSING_URL = "Please enter a product URL."

# camelCase names posted by the page -> GenerationParameters fields
FIELD_ALIASES = {
    "productUrl": "product_url",
    "affiliateLink": "affiliate_link",
    "targetAudience": "target_audience",
    "writingStyle": "writing_style",
    "language": "language",
    "generateImages": "generate_images",
    "seoKeywords": "seo_keywords",
    "articleLength": "article_length",
}

FIELD_NAMES = {f.name for f in dataclasses.fields(GenerationParameters)}


class ValidationError(Exception):
    """Submission rejected before any provider call."""


def _to_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ("true", "on", "1", "yes")
    return bool(value)


class FormState:
    def __init__(self, params: Optional[GenerationParameters] = None):
        self.params = params or GenerationParameters()

    def update(self, name: str, value) -> None:
        """Change exactly one field, leaving the rest untouched."""
        field_name = FIELD_ALIASES.get(name, name)
        if field_name not in FIELD_NAMES:
            raise KeyError(f"Unknown form field: {name}")
        if field_name == "generate_images":
            value = _to_bool(value)
        elif value is None:
            value = ""
        else:
            value = str(value)
        self.params = dataclasses.replace(self.params, **{field_name: value})

    def update_many(self, values: dict) -> None:
        for name, value in values.items():
            self.update(name, value)

    def submit(self) -> GenerationParameters:
        if not self.params.product_url.strip():
            raise ValidationError(MISSING_URL)
        return dataclasses.replace(self.params)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Requesting:
    request_id: int


@dataclass(frozen=True)
class Succeeded:
    request_id: int
    result: GenerationResult


@dataclass(frozen=True)
class Failed:
    request_id: Optional[int]  # None for local validation failures
    message: str


RequestState = Union[Idle, Requesting, Succeeded, Failed]


class GenerationSession:
    """Owns the form and a single request state.

    Every attempt gets a new request id; a resolution carrying any other id
    than the latest one is stale and ignored.
    """

    def __init__(self, form: Optional[FormState] = None):
        self.form = form or FormState()
        self.state: RequestState = Idle()
        self._last_request_id = 0

    @property
    def latest_request_id(self) -> int:
        return self._last_request_id

    def begin(self) -> Optional[tuple[int, GenerationParameters]]:
        """Start an attempt; returns (request_id, params) or None if invalid."""
        try:
            params = self.form.submit()
        except ValidationError as e:
            self.state = Failed(None, str(e))
            return None
        self._last_request_id += 1
        self.state = Requesting(self._last_request_id)
        return self._last_request_id, params

    def complete(self, request_id: int, result: GenerationResult) -> bool:
        if request_id != self._last_request_id:
            logger.info("Discarding stale result for request %s", request_id)
            return False
        self.state = Succeeded(request_id, result)
        return True

    def fail(self, request_id: int, message: str) -> bool:
        if request_id != self._last_request_id:
            logger.info("Discarding stale failure for request %s", request_id)
            return False
        self.state = Failed(request_id, message)
        return True

    def run(self, generator) -> RequestState:
        started = self.begin()
        if started is None:
            return self.state
        request_id, params = started
        try:
            result = generator.generate(params)
        except GenerationError as e:
            self.fail(request_id, f"An error occurred: {e}")
        else:
            self.complete(request_id, result)
        return self.state
