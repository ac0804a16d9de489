"""Input and output types for one article generation."""

from dataclasses import dataclass, field

TARGET_AUDIENCES = [
    "Tech lovers",
    "Fitness enthusiasts",
    "Parents",
    "Home chefs",
    "Gamers",
    "Fashionistas",
]

WRITING_STYLES = [
    "Friendly",
    "Professional",
    "Persuasive",
    "Humorous",
    "Technical",
    "Interview",
]

LANGUAGES = ["English", "Spanish", "French", "German", "Bangla"]

SHORT_LENGTH = "Short (~500 words)"
LONG_LENGTH = "Long (~1200 words)"
ARTICLE_LENGTHS = [SHORT_LENGTH, LONG_LENGTH]


@dataclass
class GenerationParameters:
    """Everything the form collects for one article."""

    product_url: str = ""
    affiliate_link: str = ""
    target_audience: str = "Tech lovers"
    writing_style: str = "Friendly"
    language: str = "English"
    generate_images: bool = True
    seo_keywords: str = ""
    article_length: str = LONG_LENGTH


@dataclass
class GenerationResult:
    """Markdown article plus data-URI images; images[n-1] belongs to [IMAGE_n]."""

    article: str
    images: list[str] = field(default_factory=list)


def form_options() -> dict:
    """Option lists and defaults for the form, keyed the way the page expects."""
    defaults = GenerationParameters()
    return {
        "targetAudience": TARGET_AUDIENCES,
        "writingStyle": WRITING_STYLES,
        "language": LANGUAGES,
        "articleLength": ARTICLE_LENGTHS,
        "defaults": {
            "productUrl": defaults.product_url,
            "affiliateLink": defaults.affiliate_link,
            "targetAudience": defaults.target_audience,
            "writingStyle": defaults.writing_style,
            "language": defaults.language,
            "generateImages": defaults.generate_images,
            "seoKeywords": defaults.seo_keywords,
            "articleLength": defaults.article_length,
        },
    }
