"""Turn generated markdown with [IMAGE_n] placeholders into render nodes.

Only the handful of line prefixes the article template asks for are
recognised. Inline markdown (bold, links, ...) is carried through as text.
"""

import re
from dataclasses import dataclass

from markupsafe import escape

IMAGE_PLACEHOLDER = re.compile(r"\[IMAGE_(\d+)\]")


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class ListItem:
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class Image:
    src: str
    index: int  # zero-based position in the images list


def parse_line(line):
    """Classify one line; returns None for blank lines."""
    if line.startswith("### "):
        return Heading(3, line[4:])
    if line.startswith("## "):
        return Heading(2, line[3:])
    if line.startswith("* ") or line.startswith("- "):
        return ListItem(line[2:])
    if not line.strip():
        return None
    return Paragraph(line)


def parse_markdown(text):
    nodes = []
    for line in text.split("\n"):
        node = parse_line(line)
        if node is not None:
            nodes.append(node)
    return nodes


def parse_article(article, images):
    """Interleave text nodes and image nodes in source order.

    re.split with one capture group alternates text, digits, text, ...
    A placeholder whose image is missing produces no node.
    """
    if not article:
        return []

    nodes = []
    for i, part in enumerate(IMAGE_PLACEHOLDER.split(article)):
        if i % 2 == 0:
            nodes.extend(parse_markdown(part))
            continue
        index = int(part) - 1
        if 0 <= index < len(images):
            nodes.append(Image(images[index], index))
    return nodes


def render_node(node):
    if isinstance(node, Heading):
        return f"<h{node.level}>{escape(node.text)}</h{node.level}>"
    if isinstance(node, ListItem):
        return f"<li>{escape(node.text)}</li>"
    if isinstance(node, Image):
        alt = f"Generated illustration for the article {node.index + 1}"
        return f'<img class="article-image" src="{escape(node.src)}" alt="{alt}">'
    return f"<p>{escape(node.text)}</p>"


def render_html(nodes):
    """Render nodes as HTML, grouping consecutive list items into one <ul>."""
    out = []
    in_list = False
    for node in nodes:
        is_item = isinstance(node, ListItem)
        if is_item and not in_list:
            out.append("<ul>")
        elif not is_item and in_list:
            out.append("</ul>")
        in_list = is_item
        out.append(render_node(node))
    if in_list:
        out.append("</ul>")
    return "\n".join(out)
