import re
import html
import functools
from typing import Dict

from marko import Markdown
from marko.block import Heading
from marko.helpers import MarkoExtension, render_dispatch
from marko.html_renderer import HTMLRenderer

from .conv import slugify

TAG_REGEX = re.compile(r"<[^>]+>")


def heading_anchor(rendered_heading: str) -> str:
    """Makes an id for a heading, in the style of kramdown's auto ids:
    '<em>Why</em> Rust?' becomes 'why-rust'."""
    text = html.unescape(TAG_REGEX.sub("", rendered_heading))
    return slugify(text) or "section"


class HeadingAnchorRendererMixin:
    @render_dispatch(HTMLRenderer)  # type: ignore
    def render_heading(self, element: Heading) -> str:
        """Give headings ids so they can be linked to.  Repeats get -1, -2..."""
        children = self.render_children(element)  # type: ignore
        anchor = heading_anchor(children)

        seen: Dict[str, int] = self.__dict__.setdefault("_anchors_seen", {})
        count = seen.get(anchor, 0)
        seen[anchor] = count + 1
        if count > 0:
            anchor = f"{anchor}-{count}"
        return f'<h{element.level} id="{anchor}">{children}</h{element.level}>\n'


HeadingAnchors = MarkoExtension(renderer_mixins=[HeadingAnchorRendererMixin])


def get_markdown() -> Markdown:
    # a new one each time: the renderer counts heading ids per document
    return Markdown(extensions=["codehilite", "gfm", HeadingAnchors])


@functools.lru_cache
def render_markdown(md_str: str) -> str:
    """Markdown to HTML.  The same input always gives the same output."""
    return get_markdown().convert(md_str)
