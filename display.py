import re

from markupsafe import escape

from article_parser import parse_article, render_html
from form_state import Failed, Requesting, Succeeded

DEFAULT_SHARE_TITLE = "Check out this AI-Generated Article"
DEFAULT_SHARE_TEXT = "An in-depth product review."

TITLE_LINE = re.compile(r"^## (.*)", re.MULTILINE)

SKELETON_HTML = """\
<div class="skeleton">
  <div class="bar w-75 tall"></div>
  <div class="bar w-85"></div>
  <div class="bar image"></div>
  <div class="bar w-33 mid"></div>
  <div class="bar"></div>
  <div class="bar w-85"></div>
</div>"""

EMPTY_HTML = """\
<div class="placeholder">
  <h3>Your article will appear here</h3>
  <p>Fill out the form and click "Generate Article" to begin.</p>
</div>"""

ERROR_HTML = """\
<div class="error-box">
  <h3>Generation Failed</h3>
  <p>{message}</p>
</div>"""


def select_view(state):
    """loading > error > content > empty."""
    if isinstance(state, Requesting):
        return "loading"
    if isinstance(state, Failed):
        return "error"
    if isinstance(state, Succeeded) and state.result.article:
        return "content"
    return "empty"


def render_view(state):
    view = select_view(state)
    if view == "loading":
        html = SKELETON_HTML
    elif view == "error":
        html = ERROR_HTML.format(message=escape(state.message))
    elif view == "content":
        nodes = parse_article(state.result.article, state.result.images)
        html = f'<div class="article">\n{render_html(nodes)}\n</div>'
    else:
        html = EMPTY_HTML
    return {"view": view, "html": html}


def share_payload(article, product_url):
    """Title from the first H2, text from the first line longer than 50 chars."""
    match = TITLE_LINE.search(article)
    title = match.group(1) if match else DEFAULT_SHARE_TITLE
    text = next(
        (line for line in article.split("\n") if len(line.strip()) > 50),
        DEFAULT_SHARE_TEXT,
    )
    return {"title": title, "text": text, "url": product_url}
