"""Generate one article from the command line and print the markdown."""

import argparse
import base64
import logging
import sys
from pathlib import Path

from google import genai

import config
from blog_models import (
    LANGUAGES,
    LONG_LENGTH,
    SHORT_LENGTH,
    TARGET_AUDIENCES,
    WRITING_STYLES,
    GenerationParameters,
)
from form_state import FormState, ValidationError
from gemini_service import ArticleGenerator, GenerationError

logger = logging.getLogger(__name__)

LENGTHS = {"short": SHORT_LENGTH, "long": LONG_LENGTH}


def build_parser():
    defaults = GenerationParameters()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url", help="Product page to review")
    parser.add_argument("--affiliate-link", default="")
    parser.add_argument("--audience", choices=TARGET_AUDIENCES, default=defaults.target_audience)
    parser.add_argument("--style", choices=WRITING_STYLES, default=defaults.writing_style)
    parser.add_argument("--language", choices=LANGUAGES, default=defaults.language)
    parser.add_argument("--length", choices=sorted(LENGTHS), default="long")
    parser.add_argument("--keywords", default="", help="SEO keywords to weave in")
    parser.add_argument("--no-images", action="store_true", help="Skip illustrations")
    parser.add_argument("--images-dir", type=Path, help="Write generated images here")
    return parser


def form_from_args(args):
    form = FormState()
    form.update_many({
        "product_url": args.url,
        "affiliate_link": args.affiliate_link,
        "target_audience": args.audience,
        "writing_style": args.style,
        "language": args.language,
        "article_length": LENGTHS[args.length],
        "seo_keywords": args.keywords,
        "generate_images": not args.no_images,
    })
    return form


def save_images(images, out_dir):
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for i, uri in enumerate(images, 1):
        _header, b64 = uri.split(",", 1)
        path = out_dir / f"image_{i}.jpg"
        path.write_bytes(base64.b64decode(b64))
        paths.append(path)
    return paths


def main(argv=None, generator=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        params = form_from_args(args).submit()
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if generator is None:
        generator = ArticleGenerator(genai.Client(api_key=config.require_api_key()))

    try:
        result = generator.generate(params)
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.article)
    if result.images and args.images_dir:
        for path in save_images(result.images, args.images_dir):
            logger.info("Saved %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
