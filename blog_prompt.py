from blog_models import SHORT_LENGTH

AFFILIATE_PLACEHOLDER = "[AFFILIATE_LINK]"
TITLE_LINE = "## [Create a Catchy, SEO-Optimized Title]"
IMAGE_COUNT = 3

BASE_PROMPT = """\
You are an expert AI content writer specializing in high-ranking eCommerce and affiliate blog posts.
Your goal is to generate a full, SEO-optimized blog post from a product URL.

**Core Task:**
- **Analyze Product:** Thoroughly analyze the content at this URL: {product_url}. Use Google Search to extract all relevant product details. If you cannot access the URL, state that and stop.

**Content Requirements:**
- **Target Audience:** Tailor the tone and focus for: **{target_audience}**.
- **Writing Style:** {style_instruction}
- **Language:** Write the entire article in **{language}**.
- **Article Length:** {word_count_instruction}
{seo_instruction}
{affiliate_instruction}

**Formatting & Structure:**
- Use markdown for structure (H2 for main titles, H3 for sub-headings, bullet points for lists).
- Follow the provided blog post structure precisely.
"""

BLOG_POST_STRUCTURE = """\
**Required Blog Post Structure:**

## [Create a Catchy, SEO-Optimized Title]
- Include the main product name/keyword.
- Make it engaging and click-worthy.

[Write a short, compelling introduction. Hook the reader and briefly introduce the product and why it's worth their attention.]

## Product Overview
- What is this product?
- Who is it for? (Relate it to the target audience).
- What main problem does it solve?

## Key Features & Benefits
- Use a bulleted list.
- For each feature, explain the direct benefit to the user. Don't just list specs; explain why they matter.

## Pros and Cons
- Create two sub-sections (H3 for "### Pros" and "### Cons").
- Provide an honest, balanced view. List at least 3 pros and 2 cons.

## Comparison with Similar Products
- If possible, briefly compare this product to one or two well-known alternatives.
- Highlight what makes this product stand out.

## Buying Guide: Why This Product is a Smart Choice
- Explain specific scenarios or reasons why this product is a great purchase for the target audience.
- Offer tips on what to consider before buying.

## Final Verdict
[IMAGE: stylish banner with the word "Final Verdict" in bold elegant design]

[Start with a summary paragraph (4–5 sentences) that highlights the overall usefulness of the product.]

### Who Should Buy This?
[Describe in detail the type of people or situations where this product is most valuable.]

### Who Might Avoid This?
[Explain cases where the product may not be the best fit.]

### Key Strengths
- **Strength 1:** [Short explanation]
- **Strength 2:** [Short explanation]
- **Strength 3:** [Short explanation]
- **Strength 4:** [Short explanation]
- **Strength 5:** [Short explanation]
(You can add up to 2 more strengths)

### Possible Limitations
- **Limitation 1:** [Short explanation]
- **Limitation 2:** [Short explanation]
(You can add 1 more limitation)

### Rating Breakdown
- **Design:** ⭐⭐⭐⭐☆
- **Performance:** ⭐⭐⭐⭐⭐
- **Value for Money:** ⭐⭐⭐⭐☆

[End with a strong persuasive conclusion (6–7 sentences) encouraging readers to take action. The final sentence must include the call-to-action.] Ready to upgrade your experience? Get the [Product Name] today! Check the latest price here: [AFFILIATE_LINK]
"""

IMAGE_INSTRUCTIONS = """\
**Image Generation:**
- After creating the article, identify 3 key moments for images (e.g., a hero shot, a feature in action, a lifestyle benefit).
- Insert placeholders in the markdown article text in the format `[IMAGE_1]`, `[IMAGE_2]`, and `[IMAGE_3]`.
- Generate a corresponding array of 3 detailed, descriptive prompts for an AI image generator. These prompts should result in photorealistic, high-quality marketing images.

**Output Requirement:** You MUST return a single valid JSON object matching the provided schema. Do not include markdown formatting like ```json.
"""

TEXT_ONLY_SUFFIX = "Begin generating the blog post now."
JSON_SUFFIX = "Begin generating the JSON output now."


def word_count_instruction(article_length):
    if article_length == SHORT_LENGTH:
        return "The final article should be between 400 and 600 words."
    return "The final article should be between 800 and 1200 words."


def style_instruction(writing_style):
    if writing_style == "Interview":
        return (
            "Adopt an **Interview** tone. Structure the content as a Q&A "
            "with an expert about the product."
        )
    return f"Adopt a **{writing_style}** tone."


def seo_instruction(seo_keywords):
    if not seo_keywords:
        return ""
    return (
        "- **SEO Keywords:** Naturally integrate the following keywords throughout "
        f"the article: **{seo_keywords}**. Do not just list them."
    )


def affiliate_instruction(affiliate_link):
    if affiliate_link:
        return (
            "- **Affiliate Link:** The final call to action must use this exact "
            f"URL: **{affiliate_link}**"
        )
    return (
        "- **Affiliate Link Placeholder:** Where the call-to-action link should go, "
        f"you MUST insert the exact placeholder: **{AFFILIATE_PLACEHOLDER}**"
    )


def base_prompt(params):
    return BASE_PROMPT.format(
        product_url=params.product_url,
        target_audience=params.target_audience,
        style_instruction=style_instruction(params.writing_style),
        language=params.language,
        word_count_instruction=word_count_instruction(params.article_length),
        seo_instruction=seo_instruction(params.seo_keywords),
        affiliate_instruction=affiliate_instruction(params.affiliate_link),
    )


def build_prompt(params, want_images):
    """Assemble the full instruction text sent to the text model.

    With ``want_images`` the prompt also asks for ``[IMAGE_n]`` placeholders
    and a JSON object holding the article and the image prompts, and the
    first placeholder is pinned right below the title.
    """
    if not want_images:
        return "\n---\n".join([
            base_prompt(params),
            BLOG_POST_STRUCTURE,
            TEXT_ONLY_SUFFIX,
        ])

    structure = BLOG_POST_STRUCTURE.replace(
        TITLE_LINE, f"{TITLE_LINE}\n\n[IMAGE_1]", 1,
    )
    return "\n---\n".join([
        base_prompt(params) + "\n" + IMAGE_INSTRUCTIONS,
        structure,
        JSON_SUFFIX,
    ])
